"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Lookup errors (missing keys, unsupported locales)
        2000-2999: Resolution errors (directive expansion failures)
        3000-3999: Syntax errors (directive parsing failures)
        4000-4999: Pattern errors (regexify grammar)
    """

    # Lookup errors (1000-1999)
    KEY_NOT_FOUND = 1001
    LOCALE_UNSUPPORTED = 1002
    LOCALE_INVALID = 1003

    # Resolution errors (2000-2999)
    DIRECTIVE_UNRESOLVED = 2001
    EXPANSION_DEPTH_EXCEEDED = 2002

    # Syntax errors (3000-3999)
    UNEXPECTED_EOF = 3001

    # Pattern errors (4000-4999)
    PATTERN_UNSUPPORTED = 4001
    PATTERN_INVALID = 4002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        severity: Error severity level
        resolution_path: Directive/key chain active when the error occurred
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"
    resolution_path: tuple[str, ...] | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler error.

        Example output:
            error[KEY_NOT_FOUND]: Key 'name.first_name' not found
              = help: Check the locale data for locales: zh_CN, zh, en

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {self.message}"]
        if self.resolution_path:
            lines.append(f"  = path: {' -> '.join(self.resolution_path)}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
