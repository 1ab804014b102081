"""Tests for locale_utils module.

Validates locale normalization and fallback chain construction.
"""

from __future__ import annotations

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from fakevalues.diagnostics import DiagnosticCode, LocaleUnsupportedError
from fakevalues.locale_utils import (
    canonical_locale,
    clear_locale_cache,
    language_of,
    locale_chain,
    normalize_locale,
    parse_locale_parts,
)


class TestNormalizeLocale:
    """Test normalize_locale function."""

    def test_converts_hyphen_to_underscore(self) -> None:
        """BCP-47 hyphens become POSIX underscores."""
        assert normalize_locale("en-US") == "en_US"
        assert normalize_locale("zh-Hant-TW") == "zh_Hant_TW"

    def test_underscore_format_unchanged(self) -> None:
        """POSIX format is kept."""
        assert normalize_locale("pt_BR") == "pt_BR"

    def test_strips_whitespace(self) -> None:
        """Surrounding whitespace is removed."""
        assert normalize_locale("  en-GB ") == "en_GB"


class TestParseLocaleParts:
    """Test parse_locale_parts function."""

    def test_language_only(self) -> None:
        """Language-only code has no other parts."""
        assert parse_locale_parts("fr") == ("fr", None, None, None)

    def test_language_territory(self) -> None:
        """Territory is upper-cased."""
        assert parse_locale_parts("en-us") == ("en", "US", None, None)

    def test_script(self) -> None:
        """Script subtag is title-cased."""
        assert parse_locale_parts("zh-hans-cn") == ("zh", "CN", "Hans", None)

    def test_empty_raises(self) -> None:
        """Empty identifier is invalid."""
        with pytest.raises(LocaleUnsupportedError) as exc_info:
            parse_locale_parts("")

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.LOCALE_INVALID

    def test_malformed_raises(self) -> None:
        """Identifiers Babel cannot parse are invalid."""
        with pytest.raises(LocaleUnsupportedError, match="Invalid locale code"):
            parse_locale_parts("Does not exist")


class TestCanonicalLocale:
    """Test canonical_locale and language_of."""

    def test_canonical_forms(self) -> None:
        """Case and separators are normalized."""
        assert canonical_locale("EN-us") == "en_US"
        assert canonical_locale("zh-hans-cn") == "zh_Hans_CN"
        assert canonical_locale("en") == "en"

    def test_language_of(self) -> None:
        """Only the language component is returned."""
        assert language_of("pt-BR") == "pt"
        assert language_of("en") == "en"


class TestLocaleChain:
    """Test locale_chain fallback ordering."""

    @pytest.mark.parametrize(
        ("locale", "expected"),
        [
            ("zh_CN", ("zh_CN", "zh", "en")),
            ("zh-CN", ("zh_CN", "zh", "en")),
            ("zh", ("zh", "en")),
            ("en", ("en",)),
            ("en_US", ("en_US", "en")),
            ("sr_Latn_RS", ("sr_Latn_RS", "sr", "en")),
        ],
    )
    def test_chain(self, locale: str, expected: tuple[str, ...]) -> None:
        """Most specific first, default last, no duplicates."""
        assert locale_chain(locale) == expected

    def test_malformed_locale_raises(self) -> None:
        """Chains are never built for malformed identifiers."""
        with pytest.raises(LocaleUnsupportedError):
            locale_chain("not a locale")

    def test_clear_locale_cache(self) -> None:
        """clear_locale_cache empties both caches."""
        locale_chain("de_AT")
        clear_locale_cache()

        assert locale_chain.cache_info().currsize == 0
        assert parse_locale_parts.cache_info().currsize == 0

    @given(
        language=st.sampled_from(["en", "de", "zh", "pt", "ja"]),
        territory=st.sampled_from([None, "US", "DE", "CN", "BR"]),
    )
    def test_chain_properties(self, language: str, territory: str | None) -> None:
        """PROPERTY: chain starts with the canonical locale and ends with 'en'."""
        code = language if territory is None else f"{language}-{territory}"
        event(f"has_territory={territory is not None}")

        chain = locale_chain(code)

        assert chain[0] == canonical_locale(code)
        assert chain[-1] == "en"
        assert len(set(chain)) == len(chain)
        assert len(chain) <= 3
