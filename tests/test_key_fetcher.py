"""Tests for runtime/fetcher.py.

Lookups across the locale chain, list selection and fallback events.
"""

from __future__ import annotations

from unittest.mock import Mock

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fakevalues import FallbackInfo, InMemoryDataStore, KeyNotFoundError
from fakevalues.runtime import DefaultRandomSource, KeyFetcher

CHAIN_DATA = {
    "zh_CN": {"city": {"name": ["Shanghai", "Beijing"]}, "blank": []},
    "zh": {"city": {"suffix": "shi"}, "blank": ["fallback"]},
    "en": {"city": {"name": ["Springfield"], "prefix": "North"}},
}


@pytest.fixture
def chain_store() -> InMemoryDataStore:
    return InMemoryDataStore(CHAIN_DATA)


def _fetcher(store: InMemoryDataStore, index: int = 0, **kwargs: object) -> KeyFetcher:
    source = Mock(spec=["next_int"])
    source.next_int.return_value = index
    return KeyFetcher(store, ("zh_CN", "zh", "en"), source, **kwargs)  # type: ignore[arg-type]


class TestChainLookup:
    """First locale containing the key wins."""

    def test_most_specific_wins(self, chain_store: InMemoryDataStore) -> None:
        """zh_CN shadows en for city.name."""
        assert _fetcher(chain_store).fetch("city.name") == "Shanghai"

    def test_falls_through_to_language(self, chain_store: InMemoryDataStore) -> None:
        """Keys absent in zh_CN come from zh."""
        assert _fetcher(chain_store).fetch("city.suffix") == "shi"

    def test_falls_through_to_default(self, chain_store: InMemoryDataStore) -> None:
        """Keys absent in zh_CN and zh come from en."""
        assert _fetcher(chain_store).fetch("city.prefix") == "North"

    def test_empty_list_falls_through(self, chain_store: InMemoryDataStore) -> None:
        """An empty list is treated as absent."""
        assert _fetcher(chain_store).fetch("blank") == "fallback"

    def test_missing_key_raises(self, chain_store: InMemoryDataStore) -> None:
        """KeyNotFoundError names the key and the probed locales."""
        with pytest.raises(KeyNotFoundError, match="Key 'city.zip' not found") as exc_info:
            _fetcher(chain_store).fetch("city.zip")

        assert exc_info.value.key == "city.zip"
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.hint == "Check the locale data for locales: zh_CN, zh, en"


class TestSelection:
    """List alternatives go through the random source."""

    def test_index_from_random_source(self, chain_store: InMemoryDataStore) -> None:
        """The random index selects the alternative."""
        assert _fetcher(chain_store, index=1).fetch("city.name") == "Beijing"

    def test_bound_is_list_length(self, chain_store: InMemoryDataStore) -> None:
        """next_int is called with the number of alternatives."""
        source = Mock(spec=["next_int"])
        source.next_int.return_value = 0
        KeyFetcher(chain_store, ("zh_CN", "en"), source).fetch("city.name")

        source.next_int.assert_called_once_with(2)

    def test_scalar_draws_nothing(self, chain_store: InMemoryDataStore) -> None:
        """Scalars never touch the random source."""
        source = Mock(spec=["next_int"])
        KeyFetcher(chain_store, ("zh", "en"), source).fetch("city.suffix")

        source.next_int.assert_not_called()

    def test_fetch_string_is_fetch(self, chain_store: InMemoryDataStore) -> None:
        """fetch_string behaves like fetch."""
        assert _fetcher(chain_store).fetch_string("city.prefix") == "North"

    @given(seed=st.integers(min_value=0, max_value=2**32 - 1))
    def test_selection_always_member(self, seed: int) -> None:
        """PROPERTY: selected value is one of the alternatives."""
        fetcher = KeyFetcher(
            InMemoryDataStore(CHAIN_DATA), ("zh_CN",), DefaultRandomSource(seed)
        )

        assert fetcher.fetch("city.name") in {"Shanghai", "Beijing"}


class TestShapes:
    """fetch_list, fetch_object and safe_fetch."""

    def test_fetch_list(self, chain_store: InMemoryDataStore) -> None:
        """Lists are returned whole; scalars wrapped."""
        fetcher = _fetcher(chain_store)

        assert fetcher.fetch_list("city.name") == ["Shanghai", "Beijing"]
        assert fetcher.fetch_list("city.prefix") == ["North"]

    def test_fetch_list_missing_raises(self, chain_store: InMemoryDataStore) -> None:
        """fetch_list raises like fetch."""
        with pytest.raises(KeyNotFoundError):
            _fetcher(chain_store).fetch_list("nope")

    def test_fetch_object(self, chain_store: InMemoryDataStore) -> None:
        """fetch_object returns a fresh list, the scalar, or None."""
        fetcher = _fetcher(chain_store)
        first = fetcher.fetch_object("city.name")

        assert first == ["Shanghai", "Beijing"]
        assert first is not fetcher.fetch_object("city.name")
        assert fetcher.fetch_object("city.prefix") == "North"
        assert fetcher.fetch_object("nope") is None

    def test_safe_fetch_default(self, chain_store: InMemoryDataStore) -> None:
        """safe_fetch never raises for a missing key."""
        fetcher = _fetcher(chain_store)

        assert fetcher.safe_fetch("nope") is None
        assert fetcher.safe_fetch("nope", "dflt") == "dflt"
        assert fetcher.safe_fetch("city.prefix", "dflt") == "North"


class TestFallbackEvents:
    """on_fallback reports keys served by a later locale."""

    def test_callback_on_fallback(self, chain_store: InMemoryDataStore) -> None:
        """Fallback to en is reported once."""
        events: list[FallbackInfo] = []
        _fetcher(chain_store, on_fallback=events.append).fetch("city.prefix")

        assert events == [
            FallbackInfo(requested_locale="zh_CN", resolved_locale="en", key="city.prefix")
        ]

    def test_no_callback_for_first_locale(self, chain_store: InMemoryDataStore) -> None:
        """Hits in the requested locale are silent."""
        events: list[FallbackInfo] = []
        _fetcher(chain_store, on_fallback=events.append).fetch("city.name")

        assert events == []


class TestConstruction:
    """Locale chain validation."""

    def test_empty_chain_rejected(self, chain_store: InMemoryDataStore) -> None:
        """At least one locale is required."""
        with pytest.raises(ValueError, match="At least one locale"):
            KeyFetcher(chain_store, (), DefaultRandomSource(0))

    def test_duplicates_removed(self, chain_store: InMemoryDataStore) -> None:
        """Order is kept, duplicates dropped."""
        fetcher = KeyFetcher(chain_store, ["zh", "en", "zh"], DefaultRandomSource(0))

        assert fetcher.locales == ("zh", "en")
        assert repr(fetcher) == "KeyFetcher(locales=('zh', 'en'))"
