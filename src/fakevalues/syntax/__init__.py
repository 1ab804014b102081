"""Directive syntax: AST nodes and the template parser.

Python 3.13+. Zero external dependencies.
"""

from .ast import (
    Argument,
    Directive,
    Junk,
    StringArgument,
    Template,
    TemplateElement,
    TextElement,
)
from .cursor import Cursor
from .parser import find_directive_end, parse_directive, parse_template

__all__ = [
    "Argument",
    "Cursor",
    "Directive",
    "Junk",
    "StringArgument",
    "Template",
    "TemplateElement",
    "TextElement",
    "find_directive_end",
    "parse_directive",
    "parse_template",
]
