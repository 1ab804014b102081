"""Template parser: splits template strings into text and directives.

Grammar (informal):

    template   := (text | directive)*
    directive  := "#{" ws* reference ws* arguments? ws* "}"
    reference  := [A-Za-z0-9_]+ ("." [A-Za-z0-9_]+)*
    arguments  := "(" ws* arglist? ws* ")" | arglist
    arglist    := argument (ws* "," ws* argument)*
    argument   := "'" chars "'" | '"' chars '"' | "/" chars "/" | directive

A directive ends at the first "}" that is outside any quoted or
slash-delimited literal and not closing a nested directive. Inside a
literal, a backslash followed by the delimiter yields the delimiter; any
other backslash sequence is kept as written (so ``'\\d{2}'`` reaches
regexify intact).

An opening marker without a matching close is literal text. A directive
whose body does not match the grammar becomes a Junk node so the expander
can report the token verbatim.

Python 3.13+. Zero external dependencies.
"""

import functools

from fakevalues.constants import DIRECTIVE_CLOSE, DIRECTIVE_OPEN, MAX_DEPTH
from fakevalues.syntax.ast import (
    Argument,
    Directive,
    Junk,
    StringArgument,
    Template,
    TemplateElement,
    TextElement,
)
from fakevalues.syntax.cursor import Cursor

__all__ = ["find_directive_end", "parse_directive", "parse_template"]

_LITERAL_DELIMITERS: str = "'\"/"
_REFERENCE_CHARS: frozenset[str] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_."
)


class _BodyError(Exception):
    """Internal signal: directive body does not match the grammar."""


def find_directive_end(source: str, start: int) -> int | None:
    """Locate the end of the directive opening at ``start``.

    Args:
        source: Text containing the directive
        start: Offset of the opening marker

    Returns:
        Offset just past the closing marker, or None if unterminated
    """
    pos = start + len(DIRECTIVE_OPEN)
    depth = 0
    delimiter: str | None = None
    length = len(source)

    while pos < length:
        ch = source[pos]
        if delimiter is not None:
            if ch == "\\":
                pos += 2
                continue
            if ch == delimiter:
                delimiter = None
            pos += 1
            continue
        if ch in _LITERAL_DELIMITERS:
            delimiter = ch
        elif source.startswith(DIRECTIVE_OPEN, pos):
            depth += 1
            pos += len(DIRECTIVE_OPEN)
            continue
        elif ch == DIRECTIVE_CLOSE:
            if depth == 0:
                return pos + 1
            depth -= 1
        pos += 1
    return None


@functools.lru_cache(maxsize=1024)
def parse_template(text: str, max_nesting_depth: int = MAX_DEPTH) -> Template:
    """Parse a template string.

    Results are cached; Template nodes are immutable.

    Args:
        text: Template string, possibly containing directives
        max_nesting_depth: Maximum directive nesting inside arguments

    Returns:
        Template with text, directive and junk elements in source order

    Example:
        >>> t = parse_template("#{Name.first_name} #{Name.last_name}")
        >>> [type(e).__name__ for e in t.elements]
        ['Directive', 'TextElement', 'Directive']
    """
    elements: list[TemplateElement] = []
    text_start = 0
    pos = text.find(DIRECTIVE_OPEN)

    while pos != -1:
        end = find_directive_end(text, pos)
        if end is None:
            # Unterminated opener stays literal text; later directives still count.
            pos = text.find(DIRECTIVE_OPEN, pos + len(DIRECTIVE_OPEN))
            continue
        if pos > text_start:
            elements.append(TextElement(text[text_start:pos]))
        elements.append(parse_directive(text[pos:end], 0, max_nesting_depth))
        text_start = end
        pos = text.find(DIRECTIVE_OPEN, end)

    if text_start < len(text):
        elements.append(TextElement(text[text_start:]))
    return Template(tuple(elements))


def parse_directive(token: str, depth: int, max_nesting_depth: int) -> Directive | Junk:
    """Parse a single directive token (delimiters included).

    Args:
        token: Directive text from the opening to the closing marker
        depth: Current nesting level (0 for top-level directives)
        max_nesting_depth: Maximum nesting level allowed

    Returns:
        Directive node, or Junk if the body does not match the grammar
    """
    if depth > max_nesting_depth:
        return Junk(token, f"directive nesting exceeds {max_nesting_depth}")

    body = token[len(DIRECTIVE_OPEN) : -len(DIRECTIVE_CLOSE)]
    try:
        reference, arguments = _parse_body(body, depth, max_nesting_depth)
    except _BodyError as e:
        return Junk(token, str(e))
    return Directive(reference=reference, arguments=arguments, source=token)


def _parse_body(
    body: str, depth: int, max_nesting_depth: int
) -> tuple[str, tuple[Argument, ...]]:
    cursor = Cursor(body, 0).skip_spaces()
    cursor, reference = _parse_reference(cursor)
    cursor = cursor.skip_spaces()

    if cursor.is_eof:
        return reference, ()

    if cursor.current == "(":
        cursor = cursor.advance().skip_spaces()
        arguments: list[Argument] = []
        if cursor.expect(")") is None:
            cursor = _parse_arglist(cursor, arguments, depth, max_nesting_depth)
            closed = cursor.expect(")")
            if closed is None:
                msg = "expected ')'"
                raise _BodyError(msg)
            cursor = closed
        else:
            cursor = cursor.advance()
    else:
        arguments = []
        cursor = _parse_arglist(cursor, arguments, depth, max_nesting_depth)

    if not cursor.skip_spaces().is_eof:
        msg = f"unexpected text after arguments at position {cursor.pos}"
        raise _BodyError(msg)
    return reference, tuple(arguments)


def _parse_reference(cursor: Cursor) -> tuple[Cursor, str]:
    start = cursor
    while not cursor.is_eof and cursor.current in _REFERENCE_CHARS:
        cursor = cursor.advance()
    reference = start.slice_to(cursor.pos)
    if not reference:
        msg = "missing reference"
        raise _BodyError(msg)
    if any(not segment for segment in reference.split(".")):
        msg = f"empty path segment in '{reference}'"
        raise _BodyError(msg)
    return cursor, reference


def _parse_arglist(
    cursor: Cursor, arguments: list[Argument], depth: int, max_nesting_depth: int
) -> Cursor:
    while True:
        cursor, argument = _parse_argument(cursor.skip_spaces(), depth, max_nesting_depth)
        arguments.append(argument)
        cursor = cursor.skip_spaces()
        comma = cursor.expect(",")
        if comma is None:
            return cursor
        cursor = comma


def _parse_argument(
    cursor: Cursor, depth: int, max_nesting_depth: int
) -> tuple[Cursor, Argument]:
    if cursor.is_eof:
        msg = "expected argument"
        raise _BodyError(msg)

    if cursor.starts_with(DIRECTIVE_OPEN):
        end = find_directive_end(cursor.source, cursor.pos)
        if end is None:
            msg = "unterminated nested directive"
            raise _BodyError(msg)
        nested = parse_directive(cursor.slice_to(end), depth + 1, max_nesting_depth)
        return Cursor(cursor.source, end), nested

    delimiter = cursor.current
    if delimiter not in _LITERAL_DELIMITERS:
        msg = f"unexpected character '{delimiter}' at position {cursor.pos}"
        raise _BodyError(msg)

    cursor = cursor.advance()
    chars: list[str] = []
    while not cursor.is_eof:
        ch = cursor.current
        if ch == "\\" and cursor.peek(1) == delimiter:
            chars.append(delimiter)
            cursor = cursor.advance(2)
            continue
        if ch == "\\" and cursor.peek(1) is not None:
            chars.append(ch)
            chars.append(cursor.source[cursor.pos + 1])
            cursor = cursor.advance(2)
            continue
        if ch == delimiter:
            return cursor.advance(), StringArgument("".join(chars))
        chars.append(ch)
        cursor = cursor.advance()

    msg = f"unterminated {delimiter} literal"
    raise _BodyError(msg)
