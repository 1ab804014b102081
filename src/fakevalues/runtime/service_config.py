"""Configuration for FakeValuesService.

A single frozen dataclass holding the limits and validation switches that
would otherwise be individual constructor parameters.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from fakevalues.constants import MAX_DEPTH

__all__ = ["ServiceConfig"]


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    """Immutable configuration for FakeValuesService.

    Attributes:
        max_depth: Maximum nested data-key expansion, and maximum re-entry
            into the service from inside operations (default: 100).
        max_nesting_depth: Maximum directive nesting inside directive
            arguments when parsing templates (default: 100).
        strict_locale: If True, construction raises LocaleUnsupportedError
            when the store holds no data for the requested locale
            (default: True).

    Example:
        >>> config = ServiceConfig(max_depth=20)
        >>> service = FakeValuesService("en", store, config=config)
        >>> service.config.max_depth
        20
    """

    max_depth: int = MAX_DEPTH
    max_nesting_depth: int = MAX_DEPTH
    strict_locale: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If max_depth or max_nesting_depth is not positive.
        """
        if self.max_depth <= 0:
            msg = "max_depth must be positive"
            raise ValueError(msg)
        if self.max_nesting_depth <= 0:
            msg = "max_nesting_depth must be positive"
            raise ValueError(msg)
