"""Locale utilities: identifier normalization and fallback chains.

Centralizes locale format normalization used throughout the codebase.
Locale identifiers are parsed with Babel so that case and separators are
canonical before they are used as data store keys.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TypeAlias

from babel.core import get_locale_identifier, parse_locale

from fakevalues.constants import DEFAULT_LOCALE
from fakevalues.diagnostics import ErrorTemplate, LocaleUnsupportedError

__all__ = [
    "canonical_locale",
    "clear_locale_cache",
    "language_of",
    "locale_chain",
    "normalize_locale",
    "parse_locale_parts",
]

LocaleParts: TypeAlias = tuple[str, str | None, str | None, str | None]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Args:
        locale_code: BCP-47 or POSIX locale code (e.g., "en-US", "pt_BR")

    Returns:
        POSIX-formatted locale code

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.strip().replace("-", "_")


@functools.lru_cache(maxsize=128)
def parse_locale_parts(locale_code: str) -> LocaleParts:
    """Parse a locale code into (language, territory, script, variant).

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Tuple of language, territory, script, variant (absent parts are None)

    Raises:
        LocaleUnsupportedError: If the identifier is malformed

    Example:
        >>> parse_locale_parts("zh-Hans-CN")
        ('zh', 'CN', 'Hans', None)
    """
    if not locale_code:
        raise LocaleUnsupportedError(ErrorTemplate.locale_invalid(locale_code, "empty"))
    try:
        parts = parse_locale(normalize_locale(locale_code))
    except ValueError as e:
        raise LocaleUnsupportedError(ErrorTemplate.locale_invalid(locale_code, str(e))) from e
    language, territory, script, variant = parts[:4]
    return (language, territory, script, variant)


def canonical_locale(locale_code: str) -> str:
    """Return the canonical POSIX form of a locale code.

    Example:
        >>> canonical_locale("zh-hans-cn")
        'zh_Hans_CN'
    """
    return get_locale_identifier(parse_locale_parts(locale_code))


def language_of(locale_code: str) -> str:
    """Return the language-only component of a locale code."""
    return parse_locale_parts(locale_code)[0]


@functools.lru_cache(maxsize=128)
def locale_chain(locale_code: str) -> tuple[str, ...]:
    """Build the ordered fallback sequence probed during lookups.

    Most specific first: the exact locale, then its language-only variant,
    then the universal default. The chain stops at the default; nothing
    beyond it is probed.

    Args:
        locale_code: Requested locale (BCP-47 or POSIX format)

    Returns:
        Tuple of canonical POSIX locale codes without duplicates

    Raises:
        LocaleUnsupportedError: If the identifier is malformed

    Example:
        >>> locale_chain("zh_CN")
        ('zh_CN', 'zh', 'en')
        >>> locale_chain("zh")
        ('zh', 'en')
        >>> locale_chain("en")
        ('en',)
    """
    language = language_of(locale_code)
    exact = canonical_locale(locale_code)

    chain: list[str] = [exact]
    if exact == DEFAULT_LOCALE:
        return tuple(chain)
    if exact != language:
        chain.append(language)
    if chain[-1] != DEFAULT_LOCALE:
        chain.append(DEFAULT_LOCALE)
    return tuple(chain)


def clear_locale_cache() -> None:
    """Clear cached locale parsing and chain results."""
    parse_locale_parts.cache_clear()
    locale_chain.cache_clear()
