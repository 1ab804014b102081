"""Directive expander - converts template strings to generated values.

Walks the parsed template, dispatching each directive to an operation or a
data key and splicing the results back between the literal text.
Python 3.13+.

Dispatch order for ``#{ref args}``:

    Undotted reference:
        1. operation ``ref`` on the target
        2. scoped data key ``<target type in snake_case>.ref``
        3. operation ``ref`` on the root
        4. built-in operation ``ref`` (numerify, letterify, bothify, regexify)
        5. data key ``ref``

    Dotted reference ``Ns.member``:
        1. namespace ``ns`` on the root (zero-argument method or property),
           then operation ``member`` on the object it returns
        2. data key ``Ns.member``

Data keys take no arguments. Data values are expanded recursively before
they are spliced in; operation results are spliced in verbatim.

Thread Safety:
    Resolution state is passed explicitly via ResolutionContext. Each
    top-level call creates its own context, so one expander can serve
    concurrent callers given a thread-safe random source.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from fakevalues.constants import MAX_DEPTH
from fakevalues.core.depth_guard import depth_clamp
from fakevalues.diagnostics import ErrorTemplate, ExpansionDepthError, UnresolvedDirectiveError
from fakevalues.runtime.fetcher import KeyFetcher
from fakevalues.runtime.operation_bridge import (
    OperationError,
    OperationRegistry,
    to_snake_case,
)
from fakevalues.runtime.resolution_context import GlobalDepthGuard, ResolutionContext
from fakevalues.syntax import Directive, Junk, StringArgument, TextElement, parse_template

__all__ = ["DirectiveExpander"]

logger = logging.getLogger(__name__)

# Frames per data-key level: _expand, _resolve_directive, _resolve_arguments and
# the inner _resolve_directive (key inside an argument), _dispatch_*, _expand_key.
_FRAMES_PER_LEVEL = 6
_RESERVE_FRAMES = 100


class DirectiveExpander:
    """Expands ``#{...}`` directives against locale data and operations.

    Attributes:
        max_depth: Maximum nested data-key expansion (and service re-entry)
        max_nesting_depth: Maximum directive nesting inside arguments
    """

    __slots__ = ("_builtins", "_fetcher", "max_depth", "max_nesting_depth")

    def __init__(
        self,
        fetcher: KeyFetcher,
        builtins: object | None = None,
        *,
        max_depth: int = MAX_DEPTH,
        max_nesting_depth: int = MAX_DEPTH,
    ) -> None:
        """Initialize expander.

        Args:
            fetcher: Key fetcher for data-key directives
            builtins: Object whose operations are available to every template
                (normally a PatternExpander)
            max_depth: Maximum nested expansion depth (keyword-only)
            max_nesting_depth: Maximum directive nesting in arguments (keyword-only)
        """
        self._fetcher = fetcher
        self._builtins = builtins
        self.max_depth = depth_clamp(
            max_depth, reserve_frames=_RESERVE_FRAMES, frames_per_level=_FRAMES_PER_LEVEL
        )
        self.max_nesting_depth = max_nesting_depth

    def resolve(self, key: str, target: object | None, root: object | None = None) -> str:
        """Fetch the template stored under key and expand it.

        Args:
            key: Dotted data key whose value is a template string
            target: Object whose operations undotted directives refer to
            root: Object exposing namespaces for dotted directives
                (defaults to target)

        Raises:
            KeyNotFoundError: If key is absent in every locale of the chain
            UnresolvedDirectiveError: If a directive cannot be resolved
            ExpansionDepthError: If nested expansion exceeds max_depth
        """
        template = self._fetcher.fetch(key)
        with GlobalDepthGuard(max_depth=self.max_depth):
            context = self._new_context(target, root)
            context.push(key)
            try:
                return self._expand(template, context)
            except RecursionError as e:
                raise self._too_deep() from e

    def expression(
        self, template: str, target: object | None, root: object | None = None
    ) -> str:
        """Expand every directive in a caller-supplied template string.

        A template without directives is returned unchanged.

        Raises:
            UnresolvedDirectiveError: If a directive cannot be resolved
            ExpansionDepthError: If nested expansion exceeds max_depth
        """
        with GlobalDepthGuard(max_depth=self.max_depth):
            try:
                return self._expand(template, self._new_context(target, root))
            except RecursionError as e:
                raise self._too_deep() from e

    def _new_context(self, target: object | None, root: object | None) -> ResolutionContext:
        return ResolutionContext(
            target=target,
            root=root if root is not None else target,
            locale=self._fetcher.locales[0],
            max_depth=self.max_depth,
        )

    def _expand(self, text: str, context: ResolutionContext) -> str:
        template = parse_template(text, self.max_nesting_depth)
        if not template.has_directives:
            return text

        parts: list[str] = []
        for element in template.elements:
            match element:
                case TextElement():
                    parts.append(element.value)
                case Directive():
                    parts.append(self._resolve_directive(element, context))
                case Junk():
                    raise self._unresolved(element.source, element.reason, context)
        return "".join(parts)

    def _resolve_directive(self, directive: Directive, context: ResolutionContext) -> str:
        # Innermost first: nested directive arguments become plain strings.
        arguments = self._resolve_arguments(directive, context)

        context.push(directive.source)
        try:
            if directive.is_dotted:
                value = self._dispatch_dotted(directive, arguments, context)
            else:
                value = self._dispatch_simple(directive, arguments, context)
            if value is None:
                reason = "no operation or data key matches"
                if arguments:
                    reason = "no operation matches (data keys take no arguments)"
                raise self._unresolved(directive.source, reason, context)
            return value
        except OperationError as e:
            raise self._unresolved(directive.source, str(e), context) from e
        finally:
            context.pop()

    def _resolve_arguments(self, directive: Directive, context: ResolutionContext) -> list[str]:
        arguments: list[str] = []
        for argument in directive.arguments:
            match argument:
                case StringArgument():
                    arguments.append(argument.value)
                case Directive():
                    arguments.append(self._resolve_directive(argument, context))
                case Junk():
                    raise self._unresolved(argument.source, argument.reason, context)
        return arguments

    def _dispatch_simple(
        self, directive: Directive, arguments: Sequence[str], context: ResolutionContext
    ) -> str | None:
        name = directive.reference
        target = context.target

        if target is not None:
            value = self._invoke(target, name, arguments)
            if value is not None:
                logger.debug("%s resolved by %s.%s", directive.source, type(target).__name__, name)
                return value
            if not arguments:
                scoped = f"{to_snake_case(type(target).__name__)}.{name}"
                value = self._expand_key(scoped, context)
                if value is not None:
                    return value

        root = context.root
        if root is not None and root is not target:
            value = self._invoke(root, name, arguments)
            if value is not None:
                logger.debug("%s resolved by root %s", directive.source, type(root).__name__)
                return value

        if self._builtins is not None:
            value = self._invoke(self._builtins, name, arguments)
            if value is not None:
                logger.debug("%s resolved by built-in %s", directive.source, name)
                return value

        if arguments:
            return None
        return self._expand_key(name, context)

    def _dispatch_dotted(
        self, directive: Directive, arguments: Sequence[str], context: ResolutionContext
    ) -> str | None:
        namespace = directive.namespace
        member = directive.member
        root = context.root

        if root is not None and namespace is not None:
            provider = self._namespace_object(root, namespace)
            if provider is not None:
                value = self._invoke(provider, member, arguments)
                if value is not None:
                    logger.debug(
                        "%s resolved by %s.%s", directive.source, type(provider).__name__, member
                    )
                    return value

        if arguments:
            return None
        return self._expand_key(directive.reference, context)

    @staticmethod
    def _namespace_object(root: object, namespace: str) -> object | None:
        """Return the sub-object the root exposes under namespace, if any.

        Raises:
            OperationError: If the namespace accessor exists but fails
        """
        registry = OperationRegistry.for_type(type(root))
        accessor = registry.lookup(namespace)
        if accessor is None or not accessor.accepts_no_arguments:
            return None
        return registry.invoke(root, accessor.name, ())

    @staticmethod
    def _invoke(instance: object, name: str, arguments: Sequence[str]) -> str | None:
        """Invoke name on instance; None means the instance has no such operation.

        Raises:
            OperationError: If the operation exists but fails or returns None
        """
        registry = OperationRegistry.for_type(type(instance))
        if registry.lookup(name) is None:
            return None
        result = registry.invoke(instance, name, arguments)
        if result is None:
            msg = f"{type(instance).__name__}.{name} returned None"
            raise OperationError(msg)
        return str(result)

    def _expand_key(self, key: str, context: ResolutionContext) -> str | None:
        value = self._fetcher.safe_fetch(key)
        if value is None:
            return None
        logger.debug("Expanding data key '%s' at depth %d", key, context.depth)
        context.push(key)
        try:
            with context.guard:
                return self._expand(value, context)
        finally:
            context.pop()

    def _too_deep(self) -> ExpansionDepthError:
        # Interpreter stack ran out before max_depth did (operations that
        # re-enter the service add frames the clamp cannot see).
        logger.warning("Stack exhausted before max_depth=%d was reached", self.max_depth)
        return ExpansionDepthError(ErrorTemplate.expansion_depth_exceeded(self.max_depth))

    @staticmethod
    def _unresolved(
        source: str, reason: str | None, context: ResolutionContext
    ) -> UnresolvedDirectiveError:
        return UnresolvedDirectiveError(
            ErrorTemplate.unresolved_directive(source, reason, context.path),
            directive=source,
        )

    def __repr__(self) -> str:
        return (
            f"DirectiveExpander(fetcher={self._fetcher!r}, max_depth={self.max_depth}, "
            f"max_nesting_depth={self.max_nesting_depth})"
        )
