"""Locale-keyed hierarchical data store.

The engine consumes locale data only through the LocaleDataStore protocol:
a dotted key resolves, per locale, to a string, an ordered sequence of
alternative strings, or nothing.

InMemoryDataStore is the bundled implementation. It is built once from
plain nested mappings (e.g. the result of loading YAML resources) and is
immutable afterwards, so a single instance can back any number of services
and threads.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Protocol, TypeAlias

from fakevalues.locale_utils import canonical_locale

__all__ = ["InMemoryDataStore", "LocaleDataStore", "Node"]

logger = logging.getLogger(__name__)

Node: TypeAlias = str | tuple[str, ...]
_Tree: TypeAlias = Mapping[str, "_Tree | Node"]


class LocaleDataStore(Protocol):
    """Protocol for locale data lookups.

    Implementations must never expose partial nodes: a key addressing an
    interior (mapping) node resolves to None.
    """

    def lookup(self, locale: str, key: str) -> str | Sequence[str] | None:
        """Resolve a dotted key in one locale.

        Args:
            locale: POSIX locale code (e.g., 'zh_CN', 'en')
            key: Dotted key (e.g., 'name.first_name')

        Returns:
            String, sequence of alternatives, or None if absent
        """
        ...  # pragma: no cover  # Protocol stub - not executable

    def has_locale(self, locale: str) -> bool:
        """Return True if any data is loaded for the locale."""
        ...  # pragma: no cover  # Protocol stub - not executable


class InMemoryDataStore:
    """Immutable in-memory LocaleDataStore.

    Leaves are normalized at load time:
        - str is kept
        - int, float, Decimal and bool become str
        - lists and tuples become tuples of str (elements normalized likewise)
        - None leaves are dropped

    Example:
        >>> store = InMemoryDataStore({
        ...     "en": {"name": {"first_name": ["Ann", "Bob"], "title": "Dr."}},
        ... })
        >>> store.lookup("en", "name.first_name")
        ('Ann', 'Bob')
        >>> store.lookup("en", "name") is None
        True

    Raises:
        ValueError: If a leaf has an unsupported type
        LocaleUnsupportedError: If a locale key is not a valid identifier
    """

    __slots__ = ("_locales",)

    def __init__(self, resources: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        locales: dict[str, _Tree] = {}
        for locale, tree in (resources or {}).items():
            code = canonical_locale(locale)
            locales[code] = _freeze_tree(tree, code)
        self._locales: Mapping[str, _Tree] = MappingProxyType(locales)
        logger.debug("InMemoryDataStore loaded locales: %s", ", ".join(self._locales))

    def lookup(self, locale: str, key: str) -> str | tuple[str, ...] | None:
        """Resolve a dotted key in one locale (None when absent or interior)."""
        node: _Tree | Node | None = self._locales.get(locale)
        for segment in key.split("."):
            if not isinstance(node, Mapping):
                return None
            node = node.get(segment)
        if isinstance(node, Mapping):
            return None
        return node

    def has_locale(self, locale: str) -> bool:
        """Return True if the locale has a non-empty tree."""
        return bool(self._locales.get(locale))

    @property
    def locales(self) -> tuple[str, ...]:
        """Locale codes with loaded data, in load order."""
        return tuple(self._locales)

    def with_resource(self, locale: str, resource: Mapping[str, Any]) -> InMemoryDataStore:
        """Return a new store with ``resource`` deep-merged into ``locale``.

        Values in ``resource`` win over existing leaves. The receiver is
        not modified.
        """
        code = canonical_locale(locale)
        merged: dict[str, Mapping[str, Any]] = {
            name: _thaw_tree(tree) for name, tree in self._locales.items()
        }
        merged[code] = _deep_merge(merged.get(code, {}), resource)
        return InMemoryDataStore(merged)

    def __iter__(self) -> Iterator[str]:
        return iter(self._locales)

    def __contains__(self, locale: object) -> bool:
        return locale in self._locales

    def __repr__(self) -> str:
        return f"InMemoryDataStore(locales={list(self._locales)!r})"


def _freeze_tree(tree: Mapping[str, Any], path: str) -> _Tree:
    frozen: dict[str, _Tree | Node] = {}
    for name, value in tree.items():
        child_path = f"{path}.{name}"
        if value is None:
            continue
        if isinstance(value, Mapping):
            frozen[str(name)] = _freeze_tree(value, child_path)
        else:
            frozen[str(name)] = _freeze_leaf(value, child_path)
    return MappingProxyType(frozen)


def _freeze_leaf(value: object, path: str) -> Node:
    if isinstance(value, (list, tuple)):
        return tuple(_freeze_scalar(item, path) for item in value if item is not None)
    return _freeze_scalar(value, path)


def _freeze_scalar(value: object, path: str) -> str:
    match value:
        case str():
            return value
        case bool():
            return "true" if value else "false"
        case int() | float() | Decimal():
            return str(value)
        case _:
            msg = f"Unsupported value of type {type(value).__name__} at '{path}'"
            raise ValueError(msg)


def _thaw_tree(tree: _Tree) -> dict[str, Any]:
    return {
        name: _thaw_tree(value) if isinstance(value, Mapping) else value
        for name, value in tree.items()
    }


def _deep_merge(base: Mapping[str, Any], update: Mapping[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for name, value in update.items():
        existing = result.get(name)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            result[name] = _deep_merge(existing, value)
        else:
            result[name] = value
    return result
