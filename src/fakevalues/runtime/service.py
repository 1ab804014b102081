"""FakeValuesService - Main API for locale-driven fake value generation.

Python 3.13+. External dependency: Babel (locale identifier parsing).
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from fakevalues.constants import DEFAULT_LOCALE
from fakevalues.diagnostics import ErrorTemplate, LocaleUnsupportedError
from fakevalues.locale_utils import canonical_locale, language_of, locale_chain
from fakevalues.runtime.expander import DirectiveExpander
from fakevalues.runtime.fetcher import FallbackInfo, KeyFetcher
from fakevalues.runtime.patterns import PatternExpander
from fakevalues.runtime.random_source import DefaultRandomSource, RandomSource
from fakevalues.runtime.service_config import ServiceConfig
from fakevalues.runtime.store import LocaleDataStore

__all__ = ["FakeValuesService"]

logger = logging.getLogger(__name__)


class FakeValuesService:
    """Fake value service for one locale.

    Combines key lookup across the locale fallback chain, directive
    expansion and the pattern expanders behind one object.

    Thread Safety:
        The service holds no mutable state of its own. Concurrent use is
        safe when the store is immutable and the random source is
        thread-safe.

    Examples:
        >>> store = InMemoryDataStore({
        ...     "en": {"name": {"first_name": ["Ann", "Bob"], "name": "#{first_name} Doe"}},
        ... })
        >>> service = FakeValuesService("en", store, DefaultRandomSource(seed=7))
        >>> service.fetch_list("name.first_name")
        ['Ann', 'Bob']
        >>> service.numerify("###")  # doctest: +SKIP
        '402'
        >>> service.locale_chain("zh_CN")
        ('zh_CN', 'zh', 'en')
    """

    __slots__ = ("_config", "_expander", "_fetcher", "_locale", "_patterns", "_random", "_store")

    def __init__(
        self,
        locale: str,
        store: LocaleDataStore,
        random_source: RandomSource | None = None,
        *,
        config: ServiceConfig | None = None,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize service for locale.

        Args:
            locale: Locale code (zh_CN, en-US, test); BCP-47 or POSIX form
            store: Locale data store shared by any number of services
            random_source: Source of uniform integers (default: DefaultRandomSource())
            config: Depth limits and locale validation (keyword-only)
            on_fallback: Callback invoked when a key resolves in a fallback
                locale (keyword-only)

        Raises:
            LocaleUnsupportedError: If the locale is malformed, or (with
                strict_locale) the store holds no data for it
        """
        self._config = config if config is not None else ServiceConfig()
        self._locale = canonical_locale(locale)
        self._store = store
        self._random = random_source if random_source is not None else DefaultRandomSource()

        chain = locale_chain(self._locale)
        if self._config.strict_locale:
            self._check_locale_data(chain)

        self._fetcher = KeyFetcher(store, chain, self._random, on_fallback=on_fallback)
        self._patterns = PatternExpander(self._random)
        self._expander = DirectiveExpander(
            self._fetcher,
            self._patterns,
            max_depth=self._config.max_depth,
            max_nesting_depth=self._config.max_nesting_depth,
        )

        logger.info(
            "FakeValuesService initialized for locale: %s (chain=%s, strict_locale=%s)",
            self._locale,
            ", ".join(chain),
            self._config.strict_locale,
        )

    def _check_locale_data(self, chain: tuple[str, ...]) -> None:
        # 'en' data only satisfies English locales.
        if language_of(self._locale) == DEFAULT_LOCALE:
            probed = chain
        else:
            probed = tuple(code for code in chain if code != DEFAULT_LOCALE)
        if not any(self._store.has_locale(code) for code in probed):
            raise LocaleUnsupportedError(ErrorTemplate.locale_unsupported(self._locale, probed))

    @property
    def locale(self) -> str:
        """Canonical locale code of this service (read-only)."""
        return self._locale

    @property
    def store(self) -> LocaleDataStore:
        """Locale data store (read-only)."""
        return self._store

    @property
    def random_source(self) -> RandomSource:
        """Random source used for every choice (read-only)."""
        return self._random

    @property
    def config(self) -> ServiceConfig:
        """Service configuration (read-only)."""
        return self._config

    # Key lookups

    def fetch_string(self, key: str) -> str:
        """Return one string for key, picking uniformly among alternatives.

        Raises:
            KeyNotFoundError: If key is absent in every locale of the chain
        """
        return self._fetcher.fetch_string(key)

    def fetch(self, key: str) -> str:
        """Return one value for key, picking uniformly among alternatives.

        Raises:
            KeyNotFoundError: If key is absent in every locale of the chain
        """
        return self._fetcher.fetch(key)

    def fetch_list(self, key: str) -> list[str]:
        """Return every alternative stored under key.

        Raises:
            KeyNotFoundError: If key is absent in every locale of the chain
        """
        return self._fetcher.fetch_list(key)

    def fetch_object(self, key: str) -> str | list[str] | None:
        """Return the node for key in its stored shape (None if absent)."""
        return self._fetcher.fetch_object(key)

    def safe_fetch(self, key: str, default: str | None = None) -> str | None:
        """Return one value for key, or default if it is absent everywhere."""
        return self._fetcher.safe_fetch(key, default)

    # Directive expansion

    def resolve(self, key: str, target: object | None, root: object | None = None) -> str:
        """Fetch the template under key and expand its directives.

        Args:
            key: Dotted data key, e.g. 'name.name'
            target: Object whose operations undotted directives refer to
            root: Object exposing namespaces for dotted directives such as
                ``#{Name.first_name}`` (defaults to target)

        Raises:
            KeyNotFoundError: If key is absent in every locale of the chain
            UnresolvedDirectiveError: If a directive cannot be resolved
            ExpansionDepthError: If expansion nests deeper than config.max_depth
        """
        return self._expander.resolve(key, target, root)

    def expression(
        self, template: str, target: object | None = None, root: object | None = None
    ) -> str:
        """Expand the directives of a caller-supplied template string.

        Raises:
            UnresolvedDirectiveError: If a directive cannot be resolved
            ExpansionDepthError: If expansion nests deeper than config.max_depth
        """
        return self._expander.expression(template, target, root)

    # Pattern expanders

    def numerify(self, pattern: str) -> str:
        """Replace each '#' with a random digit."""
        return self._patterns.numerify(pattern)

    def letterify(self, pattern: str, is_upper: bool = False) -> str:
        """Replace each '?' with a random letter."""
        return self._patterns.letterify(pattern, is_upper)

    def bothify(self, pattern: str, is_upper: bool | None = None) -> str:
        """Replace '#' with digits and '?' with uppercase letters."""
        return self._patterns.bothify(pattern, is_upper)

    def regexify(self, pattern: str) -> str:
        """Generate one string matching a bounded regular expression.

        Raises:
            PatternSyntaxError: If the pattern is outside the supported subset
        """
        return self._patterns.regexify(pattern)

    def locale_chain(self, locale: str | None = None) -> tuple[str, ...]:
        """Fallback chain for locale (defaults to this service's locale).

        Raises:
            LocaleUnsupportedError: If the identifier is malformed
        """
        return locale_chain(locale if locale is not None else self._locale)

    def __repr__(self) -> str:
        return f"FakeValuesService(locale={self._locale!r}, store={self._store!r})"
