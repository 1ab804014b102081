"""Hypothesis strategies for fakevalues property-based testing.

Strategies are organized by domain:

- directives: references, argument literals and whole templates
- patterns: regexify patterns inside the supported subset

Usage:
    from tests.strategies import directive_templates, regex_patterns
    from tests.strategies.directives import references

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - directive_templates, regex_patterns
"""

from .directives import (
    argument_literals,
    directive_templates,
    references,
    template_text,
)
from .patterns import regex_patterns

__all__ = [
    "argument_literals",
    "directive_templates",
    "references",
    "regex_patterns",
    "template_text",
]
