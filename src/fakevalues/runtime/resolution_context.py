"""Resolution context and global depth guard for directive expansion.

Architecture:
    - GlobalDepthGuard: Uses contextvars for async-safe global depth tracking
    - ResolutionContext: Explicit per-call state (target, root, depth, path)

Thread Safety:
    ResolutionContext is created per top-level call for full isolation.
    GlobalDepthGuard uses contextvars for thread/async-safe state.

Python 3.13+.
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from dataclasses import dataclass, field

from fakevalues.constants import MAX_DEPTH
from fakevalues.core.depth_guard import DepthGuard, depth_clamp
from fakevalues.diagnostics import ErrorTemplate, ExpansionDepthError

__all__ = ["GlobalDepthGuard", "ResolutionContext"]

# Operations are free to call back into the service (an IdNumber provider
# resolving "id_number.valid" from inside a directive). Each such call
# creates a fresh ResolutionContext, so per-context depth alone cannot stop
# an operation that re-enters forever. The ContextVar tracks nesting across
# contexts; each thread and async task sees its own value.
_global_expansion_depth: ContextVar[int] = ContextVar(
    "fakevalues_expansion_depth", default=0
)


class GlobalDepthGuard:
    """Context manager tracking nested top-level expansion calls.

    Usage:
        with GlobalDepthGuard(max_depth=100):
            result = expander.expression(template, target)
    """

    __slots__ = ("_max_depth", "_token")

    def __init__(self, max_depth: int = MAX_DEPTH) -> None:
        """Initialize guard with maximum depth limit."""
        self._max_depth = depth_clamp(max_depth)
        self._token: Token[int] | None = None

    def __enter__(self) -> GlobalDepthGuard:
        """Enter guarded section, increment global depth."""
        current = _global_expansion_depth.get()
        if current >= self._max_depth:
            raise ExpansionDepthError(ErrorTemplate.expansion_depth_exceeded(self._max_depth))
        self._token = _global_expansion_depth.set(current + 1)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, restore previous depth."""
        if self._token is not None:
            _global_expansion_depth.reset(self._token)
            self._token = None

    @staticmethod
    def current_depth() -> int:
        """Nesting level of top-level calls in the current context."""
        return _global_expansion_depth.get()


@dataclass(slots=True)
class ResolutionContext:
    """Explicit context for one top-level resolution call.

    The target and root are fixed for the whole call. Only the depth guard
    and the expansion path change while nested directives are expanded.

    Attributes:
        target: Object whose operations undotted directives refer to
        root: Object exposing namespaces for dotted directives
        locale: Requested locale of the service performing the call
        max_depth: Maximum nested expansion depth
        path: Keys and directives currently being expanded (for diagnostics)
    """

    target: object | None
    root: object | None
    locale: str
    max_depth: int = MAX_DEPTH
    path: list[str] = field(default_factory=list)
    _guard: DepthGuard = field(init=False)

    def __post_init__(self) -> None:
        """Initialize the expansion depth guard with the configured max depth."""
        self._guard = DepthGuard(max_depth=self.max_depth)

    @property
    def guard(self) -> DepthGuard:
        """Depth guard for context manager use.

        Usage:
            with context.guard:
                text = self._expand_template(nested, context)
        """
        return self._guard

    @property
    def depth(self) -> int:
        """Current expansion depth (read-only, delegates to guard)."""
        return self._guard.current_depth

    def push(self, label: str) -> None:
        """Record a key or directive entering expansion."""
        self.path.append(label)

    def pop(self) -> str:
        """Remove the innermost key or directive."""
        return self.path.pop()
