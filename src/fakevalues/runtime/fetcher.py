"""Key fetcher: dotted-key lookups across the locale fallback chain.

The fetcher probes the data store for each locale in the chain, most
specific first, and stops at the first locale where the key resolves.
List nodes are alternatives; single-value fetches pick one uniformly via
the injected RandomSource.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from fakevalues.diagnostics import ErrorTemplate, KeyNotFoundError
from fakevalues.runtime.random_source import RandomSource
from fakevalues.runtime.store import LocaleDataStore

__all__ = ["FallbackInfo", "KeyFetcher"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a locale fallback event.

    Provided to the on_fallback callback when a key is resolved from a
    fallback locale instead of the requested one.

    Attributes:
        requested_locale: The first locale in the chain
        resolved_locale: The locale that actually contained the key
        key: The dotted key that was resolved

    Example:
        >>> def log_fallback(info: FallbackInfo) -> None:
        ...     print(f"Fallback: {info.key} resolved from "
        ...           f"{info.resolved_locale} (requested {info.requested_locale})")
        >>> service = FakeValuesService("zh_CN", store, on_fallback=log_fallback)
    """

    requested_locale: str
    resolved_locale: str
    key: str


class KeyFetcher:
    """Resolves dotted keys against a LocaleDataStore.

    Thread Safety:
        Holds no mutable state of its own. Safe for concurrent use when the
        store is immutable and the random source is thread-safe.

    Attributes:
        locales: Immutable locale chain probed on every lookup
    """

    __slots__ = ("_locales", "_on_fallback", "_random", "_store")

    def __init__(
        self,
        store: LocaleDataStore,
        locales: Sequence[str],
        random_source: RandomSource,
        *,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize fetcher.

        Args:
            store: Locale data store to probe
            locales: Locale chain, most specific first
            random_source: Source of uniform integers for list selection
            on_fallback: Callback invoked when a key resolves in a fallback locale
        """
        if not locales:
            msg = "At least one locale is required"
            raise ValueError(msg)
        self._store = store
        self._locales: tuple[str, ...] = tuple(dict.fromkeys(locales))
        self._random = random_source
        self._on_fallback = on_fallback

    @property
    def locales(self) -> tuple[str, ...]:
        """Locale chain probed on every lookup (read-only)."""
        return self._locales

    def fetch_object(self, key: str) -> str | list[str] | None:
        """Return the node for key in its stored shape.

        Scalars are returned as-is; lists are returned as a new list of all
        alternatives, without selecting one.

        Returns:
            str, list of str, or None if absent in every locale
        """
        node = self._probe(key)
        if node is None or isinstance(node, str):
            return node
        return list(node)

    def fetch(self, key: str) -> str:
        """Return one value for key, picking uniformly among alternatives.

        Raises:
            KeyNotFoundError: If key is absent in every locale of the chain
        """
        node = self._probe(key)
        if node is None:
            raise KeyNotFoundError(
                ErrorTemplate.key_not_found(key, self._locales), key=key
            )
        return self._select(node)

    def fetch_string(self, key: str) -> str:
        """Return one value for key as a string.

        Alias of fetch() kept for callers that want the string contract
        spelled out.

        Raises:
            KeyNotFoundError: If key is absent in every locale of the chain
        """
        return self.fetch(key)

    def fetch_list(self, key: str) -> list[str]:
        """Return all alternatives for key (a scalar becomes a one-item list).

        Raises:
            KeyNotFoundError: If key is absent in every locale of the chain
        """
        node = self._probe(key)
        if node is None:
            raise KeyNotFoundError(
                ErrorTemplate.key_not_found(key, self._locales), key=key
            )
        if isinstance(node, str):
            return [node]
        return list(node)

    def safe_fetch(self, key: str, default: str | None = None) -> str | None:
        """Return one value for key, or default if it is absent.

        Never raises for a missing key.
        """
        node = self._probe(key)
        if node is None:
            return default
        return self._select(node)

    def _probe(self, key: str) -> str | Sequence[str] | None:
        for locale in self._locales:
            node = self._store.lookup(locale, key)
            if node is None:
                continue
            if not isinstance(node, str) and len(node) == 0:
                continue
            if locale != self._locales[0]:
                logger.debug(
                    "Key '%s' resolved from fallback locale %s (requested %s)",
                    key,
                    locale,
                    self._locales[0],
                )
                if self._on_fallback is not None:
                    self._on_fallback(
                        FallbackInfo(
                            requested_locale=self._locales[0],
                            resolved_locale=locale,
                            key=key,
                        )
                    )
            return node
        return None

    def _select(self, node: str | Sequence[str]) -> str:
        if isinstance(node, str):
            return node
        return node[self._random.next_int(len(node))]

    def __repr__(self) -> str:
        return f"KeyFetcher(locales={self._locales!r})"
