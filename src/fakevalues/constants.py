"""Shared constants for fakevalues.

Centralized configuration constants used across the syntax and runtime
packages. Placing them here avoids circular imports and gives a single
source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for parsing and expansion
- Locale defaults: The universal fallback locale
- Directive markers: Delimiters of embedded template expressions
- Pattern placeholders: Characters replaced by numerify/letterify/bothify

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Locale defaults
    "DEFAULT_LOCALE",
    # Directive markers
    "DIRECTIVE_OPEN",
    "DIRECTIVE_CLOSE",
    # Pattern placeholders
    "DIGIT_PLACEHOLDER",
    "LETTER_PLACEHOLDER",
    "MAX_REPETITION",
    "MAX_PATTERN_OUTPUT",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Unified maximum depth for recursion protection.
# Used by: parser (directive nesting inside arguments), expander (data key
# indirection), global guard (operations re-entering the service).
# Well-formed locale data rarely exceeds 5 levels of indirection; anything
# past 100 is a cycle.
MAX_DEPTH: int = 100

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# Universal default locale. Every locale chain ends here.
DEFAULT_LOCALE: str = "en"

# ============================================================================
# DIRECTIVE MARKERS
# ============================================================================

DIRECTIVE_OPEN: str = "#{"
DIRECTIVE_CLOSE: str = "}"

# ============================================================================
# PATTERN PLACEHOLDERS
# ============================================================================

DIGIT_PLACEHOLDER: str = "#"
LETTER_PLACEHOLDER: str = "?"

# Upper bound accepted for {n,m} repetition in regexify patterns.
# Keeps generation bounded for hand-written locale data.
MAX_REPETITION: int = 1000

# Upper bound on the longest string a regexify pattern can produce.
# Nested repetitions multiply ((a{1000}){1000} yields a million characters),
# so the per-quantifier limit alone does not bound generation.
MAX_PATTERN_OUTPUT: int = 100_000
