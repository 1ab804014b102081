"""Diagnostic system for fakevalues errors.

Provides structured error diagnostics with codes and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ExpansionDepthError,
    FakeValuesError,
    KeyNotFoundError,
    LocaleUnsupportedError,
    PatternSyntaxError,
    UnresolvedDirectiveError,
)
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "ExpansionDepthError",
    "FakeValuesError",
    "KeyNotFoundError",
    "LocaleUnsupportedError",
    "PatternSyntaxError",
    "UnresolvedDirectiveError",
]
