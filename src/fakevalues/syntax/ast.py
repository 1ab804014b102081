"""Template AST node types.

A template string is parsed into a flat sequence of literal text and
directive nodes. Directive arguments may themselves be directives.

All nodes are frozen dataclasses; parsed templates are safe to cache and
share between threads.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeAlias

__all__ = [
    "Argument",
    "Directive",
    "Junk",
    "StringArgument",
    "Template",
    "TemplateElement",
    "TextElement",
]


@dataclass(frozen=True, slots=True)
class TextElement:
    """Literal text between directives."""

    value: str


@dataclass(frozen=True, slots=True)
class StringArgument:
    """Quoted or slash-delimited literal argument (delimiters removed)."""

    value: str


@dataclass(frozen=True, slots=True)
class Directive:
    """Parsed ``#{reference args}`` expression.

    Attributes:
        reference: Dotted reference path (``Name.first_name``, ``hello``)
        arguments: Literal or nested-directive arguments, in call order
        source: Directive token exactly as written, delimiters included
    """

    reference: str
    arguments: tuple["Argument", ...]
    source: str

    @property
    def is_dotted(self) -> bool:
        """True when the reference has a namespace component."""
        return "." in self.reference

    @property
    def namespace(self) -> str | None:
        """First path segment of a dotted reference."""
        if not self.is_dotted:
            return None
        return self.reference.split(".", 1)[0]

    @property
    def member(self) -> str:
        """Reference path after the namespace (whole reference if undotted)."""
        if not self.is_dotted:
            return self.reference
        return self.reference.split(".", 1)[1]


@dataclass(frozen=True, slots=True)
class Junk:
    """Directive token whose body could not be parsed.

    Kept in the AST so that expansion can report the token verbatim.
    """

    source: str
    reason: str


Argument: TypeAlias = StringArgument | Directive | Junk
TemplateElement: TypeAlias = TextElement | Directive | Junk


@dataclass(frozen=True, slots=True)
class Template:
    """Parsed template string."""

    elements: tuple[TemplateElement, ...]

    @property
    def has_directives(self) -> bool:
        """True if any element needs expansion."""
        return any(not isinstance(element, TextElement) for element in self.elements)
