"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Sequence

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    @staticmethod
    def key_not_found(key: str, locales: Sequence[str]) -> Diagnostic:
        """Key absent in every locale of the chain.

        Args:
            key: Dotted key that was looked up
            locales: Locale chain that was probed

        Returns:
            Diagnostic for KEY_NOT_FOUND
        """
        msg = f"Key '{key}' not found"
        return Diagnostic(
            code=DiagnosticCode.KEY_NOT_FOUND,
            message=msg,
            hint=f"Check the locale data for locales: {', '.join(locales)}",
        )

    @staticmethod
    def locale_unsupported(locale: str, locales: Sequence[str]) -> Diagnostic:
        """Requested locale has no data in its fallback chain.

        Args:
            locale: Requested locale code
            locales: Locales that were checked for data

        Returns:
            Diagnostic for LOCALE_UNSUPPORTED
        """
        msg = f"Locale '{locale}' does not exist"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_UNSUPPORTED,
            message=msg,
            hint=f"Load data for at least one of: {', '.join(locales)}",
        )

    @staticmethod
    def locale_invalid(locale: str, reason: str) -> Diagnostic:
        """Locale identifier cannot be parsed.

        Args:
            locale: Locale code as given by the caller
            reason: Parser error description

        Returns:
            Diagnostic for LOCALE_INVALID
        """
        msg = f"Invalid locale code: '{locale}'"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_INVALID,
            message=msg,
            hint=reason,
        )

    @staticmethod
    def unresolved_directive(
        directive: str,
        reason: str | None = None,
        path: Sequence[str] | None = None,
    ) -> Diagnostic:
        """Directive maps to neither data nor an operation, or the operation failed.

        The message intentionally carries only the verbatim directive token;
        the reason is kept in the hint.

        Args:
            directive: Directive token as written in the template (``#{...}``)
            reason: Why resolution failed (optional)
            path: Keys/directives being expanded at the time (optional)

        Returns:
            Diagnostic for DIRECTIVE_UNRESOLVED
        """
        msg = f"Unable to resolve {directive} directive."
        return Diagnostic(
            code=DiagnosticCode.DIRECTIVE_UNRESOLVED,
            message=msg,
            hint=reason,
            resolution_path=tuple(path) if path else None,
        )

    @staticmethod
    def expansion_depth_exceeded(max_depth: int) -> Diagnostic:
        """Nested expansion exceeded the configured depth.

        Args:
            max_depth: Maximum allowed depth

        Returns:
            Diagnostic for EXPANSION_DEPTH_EXCEEDED
        """
        msg = f"Maximum expansion depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.EXPANSION_DEPTH_EXCEEDED,
            message=msg,
            hint="Check the locale data for cyclic directive references",
        )

    @staticmethod
    def unexpected_eof(position: int) -> Diagnostic:
        """Unexpected end of input while parsing.

        Args:
            position: Character offset where input ended

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        msg = f"Unexpected EOF at position {position}"
        return Diagnostic(code=DiagnosticCode.UNEXPECTED_EOF, message=msg)

    @staticmethod
    def pattern_unsupported(pattern: str, construct: str, position: int) -> Diagnostic:
        """Regexify pattern uses a construct outside the supported subset.

        Args:
            pattern: Full pattern
            construct: The unsupported construct
            position: Character offset of the construct

        Returns:
            Diagnostic for PATTERN_UNSUPPORTED
        """
        msg = f"Unsupported construct '{construct}' at position {position} in pattern '{pattern}'"
        return Diagnostic(
            code=DiagnosticCode.PATTERN_UNSUPPORTED,
            message=msg,
            hint="Supported: literals, escapes, '.', [classes], (groups|alternation), "
            "{n}, {n,m} and '?'",
        )

    @staticmethod
    def pattern_invalid(pattern: str, reason: str, position: int) -> Diagnostic:
        """Regexify pattern is malformed.

        Args:
            pattern: Full pattern
            reason: What is wrong
            position: Character offset of the problem

        Returns:
            Diagnostic for PATTERN_INVALID
        """
        msg = f"Invalid pattern '{pattern}' at position {position}: {reason}"
        return Diagnostic(code=DiagnosticCode.PATTERN_INVALID, message=msg)
