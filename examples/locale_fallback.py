"""Locale Fallback Example - Regional, Language and Default Data.

Demonstrates how a service probes its locale chain (exact locale, then the
language, then English) and how to observe fallbacks.

Scenarios covered:
1. Regional locale with partial data
2. Fallback events via on_fallback
3. Locale validation at construction

Python 3.13+.
"""

from __future__ import annotations

import logging

from fakevalues import (
    DefaultRandomSource,
    FakeValuesService,
    FallbackInfo,
    InMemoryDataStore,
    LocaleUnsupportedError,
    ServiceConfig,
)

STORE = InMemoryDataStore({
    "zh_CN": {"address": {"city": ["Shanghai", "Shenzhen"]}},
    "zh": {"address": {"country": "China", "city": ["Taipei"]}},
    "en": {
        "address": {
            "city": ["Springfield"],
            "country": "Freedonia",
            "postcode": "#####",
            "full": "#{city}, #{country}",
        },
    },
})


def example_1_chain() -> None:
    """Example 1: Most specific locale wins."""
    print("=" * 60)
    print("Example 1: zh_CN -> zh -> en")
    print("=" * 60)

    service = FakeValuesService("zh-CN", STORE, DefaultRandomSource(seed=1))
    print(service.locale_chain())
    # Output: ('zh_CN', 'zh', 'en')

    print(service.fetch("address.city"))  # from zh_CN
    print(service.fetch("address.country"))  # from zh
    print(service.numerify(service.fetch("address.postcode")))  # from en


def example_2_events() -> None:
    """Example 2: Track which keys were served by a fallback locale."""
    print("\n" + "=" * 60)
    print("Example 2: Fallback events")
    print("=" * 60)

    events: list[FallbackInfo] = []
    service = FakeValuesService(
        "zh_CN", STORE, DefaultRandomSource(seed=1), on_fallback=events.append
    )
    service.fetch("address.country")
    service.fetch("address.postcode")

    for info in events:
        print(f"{info.key}: requested {info.requested_locale}, used {info.resolved_locale}")


def example_3_validation() -> None:
    """Example 3: Locales without data fail fast."""
    print("\n" + "=" * 60)
    print("Example 3: Validation")
    print("=" * 60)

    try:
        FakeValuesService("fr_FR", STORE)
    except LocaleUnsupportedError as e:
        print(e)
        # Output: Locale 'fr_FR' does not exist

    # English data is enough for any English locale.
    print(FakeValuesService("en-GB", STORE).locale_chain())
    # Output: ('en_GB', 'en')

    # Lenient mode serves everything from the default locale.
    lenient = FakeValuesService("fr_FR", STORE, config=ServiceConfig(strict_locale=False))
    print(lenient.fetch("address.country"))
    # Output: Freedonia


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    example_1_chain()
    example_2_events()
    example_3_validation()
