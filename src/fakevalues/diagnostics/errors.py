"""Exception hierarchy with structured diagnostics.

All exceptions optionally carry a Diagnostic object. The exception message
is always the diagnostic's plain message so callers can match on it; the
hint and code are available via ``.diagnostic``.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "ExpansionDepthError",
    "FakeValuesError",
    "KeyNotFoundError",
    "LocaleUnsupportedError",
    "PatternSyntaxError",
    "UnresolvedDirectiveError",
]


class FakeValuesError(Exception):
    """Base exception for all fakevalues errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize FakeValuesError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class LocaleUnsupportedError(FakeValuesError):
    """Requested locale is malformed or has no data in its fallback chain.

    Raised eagerly at service construction, never deferred to first lookup.
    """


class KeyNotFoundError(FakeValuesError):
    """Required key is absent in every locale of the chain.

    Use ``safe_fetch`` to substitute a default instead.
    """

    def __init__(self, message: str | Diagnostic, *, key: str = "") -> None:
        super().__init__(message)
        self.key = key


class UnresolvedDirectiveError(FakeValuesError):
    """Directive could not be mapped to data or an operation.

    Also covers operations that exist but fail: wrong arity, non-numeric
    argument for a numeric parameter, or an exception inside the operation.
    The message always has the form::

        Unable to resolve #{Name.first_name} directive.

    Attributes:
        directive: The offending directive token, verbatim
    """

    def __init__(self, message: str | Diagnostic, *, directive: str = "") -> None:
        super().__init__(message)
        self.directive = directive


class ExpansionDepthError(FakeValuesError):
    """Raised when maximum expansion depth is exceeded.

    Indicates cyclic locale data (``a: "#{a}"``), an operation that keeps
    re-entering the service, or unreasonably deep directive nesting.
    """


class PatternSyntaxError(FakeValuesError):
    """Regexify pattern uses a construct outside the supported subset.

    Attributes:
        pattern: The rejected pattern
        position: Character offset of the offending construct
    """

    def __init__(
        self, message: str | Diagnostic, *, pattern: str = "", position: int = 0
    ) -> None:
        super().__init__(message)
        self.pattern = pattern
        self.position = position
