"""Tests for syntax/parser.py.

Template splitting, directive body grammar, argument literals, nesting and
Junk production for malformed directives.

Python 3.13+.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fakevalues.syntax import (
    Directive,
    Junk,
    StringArgument,
    Template,
    TextElement,
    find_directive_end,
    parse_directive,
    parse_template,
)


def _only_directive(text: str) -> Directive:
    template = parse_template(text)
    assert len(template.elements) == 1
    element = template.elements[0]
    assert isinstance(element, Directive)
    return element


# ============================================================================
# TEMPLATE SPLITTING
# ============================================================================


class TestParseTemplate:
    """Splitting templates into text and directives."""

    def test_plain_text(self) -> None:
        """Text without markers is a single TextElement."""
        template = parse_template("hello world")

        assert template == Template((TextElement("hello world"),))
        assert not template.has_directives

    def test_empty_template(self) -> None:
        """Empty string has no elements."""
        assert parse_template("").elements == ()

    def test_two_directives_with_text(self) -> None:
        """Literal text between directives is preserved."""
        template = parse_template("#{Name.first_name} #{Name.last_name}!")

        assert [type(e).__name__ for e in template.elements] == [
            "Directive",
            "TextElement",
            "Directive",
            "TextElement",
        ]
        assert template.elements[1] == TextElement(" ")
        assert template.elements[3] == TextElement("!")
        assert template.has_directives

    def test_unterminated_directive_is_text(self) -> None:
        """An opening marker without a close stays literal."""
        template = parse_template("cost #{ 5")

        assert template.elements == (TextElement("cost #{ 5"),)

    def test_directive_after_unterminated_opener(self) -> None:
        """Scanning resumes after an opener that never closes."""
        template = parse_template("#{ oops #{x}")

        assert template.elements == (
            TextElement("#{ oops "),
            Directive(reference="x", arguments=(), source="#{x}"),
        )

    def test_directive_after_unclosed_quote(self) -> None:
        """An unclosed literal hides only its own opener."""
        template = parse_template("#{a 'x #{b} tail")

        assert template.elements == (
            TextElement("#{a 'x "),
            Directive(reference="b", arguments=(), source="#{b}"),
            TextElement(" tail"),
        )

    def test_hash_without_brace_is_text(self) -> None:
        """A lone '#' is not a directive."""
        assert parse_template("###-#").elements == (TextElement("###-#"),)

    def test_results_are_cached(self) -> None:
        """Same text returns the same Template instance."""
        assert parse_template("#{a} b") is parse_template("#{a} b")


# ============================================================================
# DIRECTIVE BODIES
# ============================================================================


class TestDirectiveBody:
    """Reference and argument grammar."""

    def test_bare_reference(self) -> None:
        """#{hello} has no arguments."""
        directive = _only_directive("#{hello}")

        assert directive.reference == "hello"
        assert directive.arguments == ()
        assert directive.source == "#{hello}"
        assert not directive.is_dotted
        assert directive.namespace is None
        assert directive.member == "hello"

    def test_dotted_reference(self) -> None:
        """Namespace is the first segment, member the rest."""
        directive = _only_directive("#{Name.first_name}")

        assert directive.is_dotted
        assert directive.namespace == "Name"
        assert directive.member == "first_name"

    def test_deep_dotted_reference(self) -> None:
        """Only the first segment is the namespace."""
        directive = _only_directive("#{address.city.prefix}")

        assert directive.namespace == "address"
        assert directive.member == "city.prefix"

    def test_quoted_arguments(self) -> None:
        """Space-separated call form with quoted arguments."""
        directive = _only_directive("#{Number.number_between '1','10'}")

        assert directive.reference == "Number.number_between"
        assert directive.arguments == (StringArgument("1"), StringArgument("10"))

    def test_parenthesized_arguments(self) -> None:
        """Call form with parentheses and spacing."""
        directive = _only_directive('#{Number.number_between( "1" , \'10\' )}')

        assert directive.arguments == (StringArgument("1"), StringArgument("10"))

    def test_empty_parentheses(self) -> None:
        """#{hello()} takes no arguments."""
        assert _only_directive("#{hello()}").arguments == ()

    def test_slash_argument(self) -> None:
        """Slash literals drop their delimiters."""
        directive = _only_directive("#{regexify /[45]{2}/}")

        assert directive.arguments == (StringArgument("[45]{2}"),)

    def test_braces_inside_literal_do_not_close(self) -> None:
        """'}' inside a quoted literal does not end the directive."""
        directive = _only_directive("#{regexify '[45]{2}'}")

        assert directive.arguments == (StringArgument("[45]{2}"),)

    def test_escaped_delimiter(self) -> None:
        """Backslash before the delimiter yields the delimiter."""
        directive = _only_directive(r"#{say 'it\'s'}")

        assert directive.arguments == (StringArgument("it's"),)

    def test_other_escapes_kept(self) -> None:
        """Regex escapes reach the operation intact."""
        directive = _only_directive(r"#{regexify '\d{2}'}")

        assert directive.arguments == (StringArgument(r"\d{2}"),)

    def test_whitespace_around_reference(self) -> None:
        """Spaces inside the markers are ignored."""
        assert _only_directive("#{ hello }").reference == "hello"

    def test_nested_directive_argument(self) -> None:
        """Nested directives become Directive arguments."""
        directive = _only_directive("#{regexify #{property.pattern}}")

        (argument,) = directive.arguments
        assert isinstance(argument, Directive)
        assert argument.reference == "property.pattern"
        assert argument.source == "#{property.pattern}"

    def test_mixed_arguments(self) -> None:
        """Literals and nested directives in one call."""
        directive = _only_directive("#{join('a', #{b}, \"c\")}")

        assert len(directive.arguments) == 3
        assert directive.arguments[0] == StringArgument("a")
        assert isinstance(directive.arguments[1], Directive)
        assert directive.arguments[2] == StringArgument("c")


# ============================================================================
# JUNK
# ============================================================================


class TestJunk:
    """Malformed bodies are kept verbatim as Junk."""

    @pytest.mark.parametrize(
        "token",
        [
            "#{}",
            "#{   }",
            "#{a..b}",
            "#{.a}",
            "#{a.}",
            "#{a 'x' 'y'}",
            "#{a(}",
            "#{a('x'}",
            "#{a 'x',}",
            "#{a x}",
            "#{a-b}",
            "#{a 'unterminated}",
        ],
    )
    def test_malformed_bodies(self, token: str) -> None:
        """Each token parses to Junk carrying the token and a reason."""
        element = parse_directive(token, 0, 100)

        assert isinstance(element, Junk)
        assert element.source == token
        assert element.reason

    def test_junk_in_template(self) -> None:
        """Junk sits between text elements."""
        template = parse_template("a #{} b")

        assert template.elements[1] == Junk("#{}", "missing reference")
        assert template.has_directives

    def test_nesting_limit(self) -> None:
        """Nesting deeper than max_nesting_depth becomes Junk."""
        template = parse_template("#{a #{b #{c}}}", max_nesting_depth=1)

        outer = template.elements[0]
        assert isinstance(outer, Directive)
        inner = outer.arguments[0]
        assert isinstance(inner, Directive)
        assert isinstance(inner.arguments[0], Junk)


# ============================================================================
# DIRECTIVE END SCANNING
# ============================================================================


class TestFindDirectiveEnd:
    """Locating the matching close marker."""

    def test_simple(self) -> None:
        """End is just past the close marker."""
        assert find_directive_end("x #{a} y", 2) == 6

    def test_nested(self) -> None:
        """Nested markers are balanced."""
        source = "#{a #{b}}"
        assert find_directive_end(source, 0) == len(source)

    def test_unterminated(self) -> None:
        """None when no close marker exists."""
        assert find_directive_end("#{a 'b}'", 0) is None


# ============================================================================
# PROPERTIES
# ============================================================================


plain_text = st.text(
    alphabet=st.characters(blacklist_categories=["Cs"], blacklist_characters="#"),
    max_size=50,
)
references = st.from_regex(r"[A-Za-z_][A-Za-z0-9_]{0,10}(\.[A-Za-z0-9_]{1,10}){0,2}", fullmatch=True)


class TestParserProperties:
    """Hypothesis properties for template parsing."""

    @given(text=plain_text)
    def test_text_without_markers_round_trips(self, text: str) -> None:
        """PROPERTY: text without '#' is one TextElement (or nothing)."""
        template = parse_template(text)

        assert "".join(e.value for e in template.elements if isinstance(e, TextElement)) == text
        assert not template.has_directives

    @given(prefix=plain_text, reference=references, suffix=plain_text)
    def test_single_directive_is_found(self, prefix: str, reference: str, suffix: str) -> None:
        """PROPERTY: text around one directive is preserved exactly."""
        template = parse_template(f"{prefix}#{{{reference}}}{suffix}")

        directives = [e for e in template.elements if isinstance(e, Directive)]
        texts = "".join(e.value for e in template.elements if isinstance(e, TextElement))
        assert [d.reference for d in directives] == [reference]
        assert texts == prefix + suffix

    @given(text=st.text(alphabet="#{}'\"/ab.,() \\", max_size=40))
    def test_arbitrary_input_never_raises(self, text: str) -> None:
        """PROPERTY: parsing never raises; sources of non-text nodes are substrings."""
        template = parse_template(text)

        for element in template.elements:
            if not isinstance(element, TextElement):
                assert element.source in text
