"""Pattern expanders: numerify, letterify, bothify and regexify.

numerify/letterify/bothify replace placeholder characters with random
digits or letters. regexify generates one member of the language denoted
by a bounded regular-expression subset.

Supported regexify grammar:

    pattern     := alternation
    alternation := sequence ("|" sequence)*
    sequence    := (atom quantifier?)*
    atom        := literal | "\\" escape | "." | class | "(" ["?:"] alternation ")"
    class       := "[" (char | char "-" char | "\\" escape)+ "]"
    quantifier  := "{" n "}" | "{" n "," m "}" | "?"

    escape      := "d" (digit) | "w" (letter, digit, underscore) | "s" (space)
                 | "n" | "t" | any other char taken literally

    "."         matches an ASCII letter or digit.

A surrounding ``/.../`` and a leading ``^`` / trailing ``$`` are stripped
first. Repetition counts are chosen uniformly in [n, m] with
m <= MAX_REPETITION, and the longest possible output (upper bounds multiplied
along nested repetitions) may not exceed MAX_PATTERN_OUTPUT. Everything else
(``*``, ``+``, ``{n,}``, negated classes, backreferences, lookarounds, inner
anchors, lazy quantifiers) is rejected with PatternSyntaxError; generation
never backtracks and always terminates.

Python 3.13+.
"""

from __future__ import annotations

import functools
import string
from dataclasses import dataclass
from typing import TypeAlias

from fakevalues.constants import (
    DIGIT_PLACEHOLDER,
    LETTER_PLACEHOLDER,
    MAX_DEPTH,
    MAX_PATTERN_OUTPUT,
    MAX_REPETITION,
)
from fakevalues.core.depth_guard import DepthGuard
from fakevalues.diagnostics import ErrorTemplate, ExpansionDepthError, PatternSyntaxError
from fakevalues.runtime.random_source import RandomSource

__all__ = ["PatternExpander", "compile_pattern"]

_DIGITS: str = string.digits
_LETTERS: str = string.ascii_uppercase
_ALNUM: str = string.ascii_letters + string.digits
_WORD: str = string.ascii_letters + string.digits + "_"

_CLASS_ESCAPES: dict[str, str] = {"d": _DIGITS, "w": _WORD, "s": " "}
_CHAR_ESCAPES: dict[str, str] = {"n": "\n", "t": "\t"}
_UNSUPPORTED_ESCAPES: frozenset[str] = frozenset("DWSbBAZ123456789")


@dataclass(frozen=True, slots=True)
class _Literal:
    text: str


@dataclass(frozen=True, slots=True)
class _CharClass:
    chars: str


@dataclass(frozen=True, slots=True)
class _Sequence:
    items: tuple[_Node, ...]


@dataclass(frozen=True, slots=True)
class _Alternation:
    branches: tuple[_Node, ...]


@dataclass(frozen=True, slots=True)
class _Repeat:
    node: _Node
    minimum: int
    maximum: int


_Node: TypeAlias = _Literal | _CharClass | _Sequence | _Alternation | _Repeat


class PatternExpander:
    """Placeholder and regex-driven string generation.

    All randomness goes through the injected RandomSource.

    Example:
        >>> expander = PatternExpander(DefaultRandomSource(seed=1))
        >>> len(expander.numerify("###-####"))
        8
        >>> expander.regexify("[45]{2}") in {"44", "45", "54", "55"}
        True
    """

    __slots__ = ("_random",)

    def __init__(self, random_source: RandomSource) -> None:
        self._random = random_source

    def numerify(self, pattern: str) -> str:
        """Replace each '#' with a random digit 0-9."""
        return "".join(
            _DIGITS[self._random.next_int(10)] if ch == DIGIT_PLACEHOLDER else ch
            for ch in pattern
        )

    def letterify(self, pattern: str, is_upper: bool = False) -> str:
        """Replace each '?' with a random letter (lowercase unless is_upper)."""
        letters = _LETTERS if is_upper else _LETTERS.lower()
        return "".join(
            letters[self._random.next_int(26)] if ch == LETTER_PLACEHOLDER else ch
            for ch in pattern
        )

    def bothify(self, pattern: str, is_upper: bool | None = None) -> str:
        """Replace '#' with digits and '?' with uppercase letters.

        Args:
            pattern: Template such as '??##'
            is_upper: When given, the whole result (literal letters included)
                is upper-cased (True) or lower-cased (False)
        """
        result = self.letterify(self.numerify(pattern), is_upper=True)
        if is_upper is None:
            return result
        return result.upper() if is_upper else result.lower()

    def regexify(self, pattern: str) -> str:
        """Generate one string matching a bounded regular expression.

        Raises:
            PatternSyntaxError: If the pattern is outside the supported subset
        """
        out: list[str] = []
        self._generate(compile_pattern(pattern), out)
        return "".join(out)

    def _generate(self, node: _Node, out: list[str]) -> None:
        match node:
            case _Literal(text=text):
                out.append(text)
            case _CharClass(chars=chars):
                out.append(chars[self._random.next_int(len(chars))])
            case _Sequence(items=items):
                for item in items:
                    self._generate(item, out)
            case _Alternation(branches=branches):
                self._generate(branches[self._random.next_int(len(branches))], out)
            case _Repeat(node=inner, minimum=minimum, maximum=maximum):
                count = minimum
                if maximum > minimum:
                    count += self._random.next_int(maximum - minimum + 1)
                for _ in range(count):
                    self._generate(inner, out)

    def __repr__(self) -> str:
        return f"PatternExpander(random_source={self._random!r})"


@functools.lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> _Node:
    """Parse a regexify pattern into a generation tree (cached).

    Raises:
        PatternSyntaxError: If the pattern is outside the supported subset
    """
    return _PatternParser(pattern).parse()


def _strip_delimiters(pattern: str) -> tuple[str, int]:
    body, offset = pattern, 0
    if len(body) >= 2 and body.startswith("/") and body.endswith("/"):
        body, offset = body[1:-1], 1
    if body.startswith("^"):
        body, offset = body[1:], offset + 1
    if body.endswith("$") and not body.endswith("\\$"):
        body = body[:-1]
    return body, offset


class _PatternParser:
    """Recursive-descent parser for the regexify subset."""

    __slots__ = ("_body", "_guard", "_offset", "_pattern", "_pos")

    def __init__(self, pattern: str) -> None:
        self._pattern = pattern
        self._body, self._offset = _strip_delimiters(pattern)
        self._pos = 0
        self._guard = DepthGuard(max_depth=MAX_DEPTH)

    def parse(self) -> _Node:
        node = self._alternation()
        if self._pos < len(self._body):
            raise self._invalid("unbalanced ')'")
        if _longest(node) > MAX_PATTERN_OUTPUT:
            raise self._unsupported(f"pattern producing over {MAX_PATTERN_OUTPUT} characters")
        return node

    def _peek(self) -> str | None:
        return self._body[self._pos] if self._pos < len(self._body) else None

    def _alternation(self) -> _Node:
        branches = [self._sequence()]
        while self._peek() == "|":
            self._pos += 1
            branches.append(self._sequence())
        if len(branches) == 1:
            return branches[0]
        return _Alternation(tuple(branches))

    def _sequence(self) -> _Node:
        items: list[_Node] = []
        while (ch := self._peek()) is not None and ch not in "|)":
            items.append(self._quantified(self._atom()))
        if len(items) == 1:
            return items[0]
        return _Sequence(tuple(items))

    def _atom(self) -> _Node:
        ch = self._body[self._pos]
        match ch:
            case "(":
                return self._group()
            case "[":
                return self._char_class()
            case ".":
                self._pos += 1
                return _CharClass(_ALNUM)
            case "\\":
                self._pos += 1
                chars = self._escape()
                return _CharClass(chars) if len(chars) > 1 else _Literal(chars)
            case "^" | "$":
                raise self._unsupported(ch)
            case "*" | "+" | "?" | "{":
                raise self._invalid(f"nothing to repeat before '{ch}'")
            case _:
                self._pos += 1
                return _Literal(ch)

    def _group(self) -> _Node:
        start = self._pos
        self._pos += 1
        if self._body.startswith("?:", self._pos):
            self._pos += 2
        elif self._peek() == "?":
            raise self._unsupported(self._body[start : self._pos + 2])
        try:
            with self._guard:
                node = self._alternation()
        except ExpansionDepthError as e:
            raise self._invalid("groups nested too deeply") from e
        if self._peek() != ")":
            self._pos = start
            raise self._invalid("unbalanced '('")
        self._pos += 1
        return node

    def _escape(self) -> str:
        ch = self._peek()
        if ch is None:
            raise self._invalid("dangling backslash")
        if ch in _UNSUPPORTED_ESCAPES:
            raise self._unsupported(f"\\{ch}")
        self._pos += 1
        if ch in _CLASS_ESCAPES:
            return _CLASS_ESCAPES[ch]
        return _CHAR_ESCAPES.get(ch, ch)

    def _char_class(self) -> _Node:
        start = self._pos
        self._pos += 1
        if self._peek() == "^":
            raise self._unsupported("[^")
        members: list[str] = []
        while (ch := self._peek()) != "]":
            if ch is None:
                self._pos = start
                raise self._invalid("unterminated character class")
            self._pos += 1
            if ch == "\\":
                members.append(self._escape())
                continue
            nxt = self._peek()
            if nxt == "-" and self._pos + 1 < len(self._body) and self._body[self._pos + 1] != "]":
                end = self._body[self._pos + 1]
                if ord(end) < ord(ch):
                    raise self._invalid(f"reversed range '{ch}-{end}'")
                members.append("".join(chr(c) for c in range(ord(ch), ord(end) + 1)))
                self._pos += 2
                continue
            members.append(ch)
        self._pos += 1
        chars = "".join(dict.fromkeys("".join(members)))
        if not chars:
            raise self._invalid("empty character class")
        return _CharClass(chars)

    def _quantified(self, atom: _Node) -> _Node:
        ch = self._peek()
        if ch == "?":
            self._pos += 1
            node: _Node = _Repeat(atom, 0, 1)
        elif ch == "{":
            node = self._repetition(atom)
        elif ch in ("*", "+"):
            raise self._unsupported(ch)
        else:
            return atom
        if self._peek() in ("?", "*", "+", "{"):
            raise self._unsupported(f"stacked quantifier '{self._peek()}'")
        return node

    def _repetition(self, atom: _Node) -> _Node:
        start = self._pos
        close = self._body.find("}", start)
        if close == -1:
            raise self._invalid("unterminated repetition")
        bounds = self._body[start + 1 : close]
        low_text, comma, high_text = bounds.partition(",")
        if comma and not high_text:
            raise self._unsupported("{" + bounds + "}")
        if not _is_count(low_text) or (comma and not _is_count(high_text)):
            raise self._invalid(f"malformed repetition '{{{bounds}}}'")
        low = int(low_text)
        high = int(high_text) if comma else low
        if high < low:
            raise self._invalid(f"repetition bounds out of order '{{{bounds}}}'")
        if high > MAX_REPETITION:
            raise self._unsupported("{" + bounds + "}")
        node = _Repeat(atom, low, high)
        if _longest(node) > MAX_PATTERN_OUTPUT:
            construct = f"{{{bounds}}} (output over {MAX_PATTERN_OUTPUT} characters)"
            raise self._unsupported(construct)
        self._pos = close + 1
        return node

    def _unsupported(self, construct: str) -> PatternSyntaxError:
        position = self._pos + self._offset
        return PatternSyntaxError(
            ErrorTemplate.pattern_unsupported(self._pattern, construct, position),
            pattern=self._pattern,
            position=position,
        )

    def _invalid(self, reason: str) -> PatternSyntaxError:
        position = self._pos + self._offset
        return PatternSyntaxError(
            ErrorTemplate.pattern_invalid(self._pattern, reason, position),
            pattern=self._pattern,
            position=position,
        )


def _is_count(text: str) -> bool:
    return text.isascii() and text.isdigit()


def _longest(node: _Node) -> int:
    """Length of the longest string node can generate."""
    match node:
        case _Literal(text=text):
            return len(text)
        case _CharClass():
            return 1
        case _Sequence(items=items):
            return sum(_longest(item) for item in items)
        case _Alternation(branches=branches):
            return max((_longest(branch) for branch in branches), default=0)
        case _Repeat(node=inner, maximum=maximum):
            return maximum * _longest(inner)
    return 0
