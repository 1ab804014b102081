"""Quickstart example for fakevalues.

Demonstrates key lookups, directive expansion against provider objects,
and the pattern expanders.

Note: Examples seed the random source so the output is repeatable. Omit
the seed in real use.
"""

from fakevalues import (
    DefaultRandomSource,
    FakeValuesService,
    InMemoryDataStore,
    UnresolvedDirectiveError,
)

store = InMemoryDataStore({
    "en": {
        "name": {
            "first_name": ["Ann", "Bob", "Cleo"],
            "last_name": ["Smith", "Jones"],
            "name": ["#{first_name} #{last_name}", "#{prefix} #{first_name} #{last_name}"],
            "prefix": ["Dr.", "Ms.", "Mr."],
        },
        "phone_number": {"formats": ["###-###-####", "(###) ###-####"]},
        "code": {"airport": "#{regexify '[A-Z]{3}'}"},
    },
})

service = FakeValuesService("en", store, DefaultRandomSource(seed=2024))


class Name:
    """Provider for the 'name' namespace."""

    def __init__(self, service: FakeValuesService) -> None:
        self._service = service

    def first_name(self) -> str:
        return self._service.fetch("name.first_name")

    def last_name(self) -> str:
        return self._service.fetch("name.last_name")

    def name(self) -> str:
        return self._service.resolve("name.name", self)


class Faker:
    """Root object: each namespace is a zero-argument method."""

    def __init__(self, service: FakeValuesService) -> None:
        self._name = Name(service)

    def name(self) -> Name:
        return self._name


faker = Faker(service)

# Example 1: Plain lookups
print("=" * 50)
print("Example 1: Lookups")
print("=" * 50)

print(service.fetch_list("name.first_name"))
# Output: ['Ann', 'Bob', 'Cleo']
print(service.fetch("name.first_name"))
print(service.safe_fetch("name.middle_name", "(none)"))
# Output: (none)

# Example 2: Directive expansion
print("\n" + "=" * 50)
print("Example 2: Directives")
print("=" * 50)

# Undotted directives call operations on the target; 'prefix' has no
# operation so the scoped data key name.prefix is used.
print(faker.name().name())
print(service.expression("#{Name.first_name} says hi", root=faker))
print(service.resolve("code.airport", faker))

# Example 3: Pattern expanders
print("\n" + "=" * 50)
print("Example 3: Patterns")
print("=" * 50)

print(service.numerify(service.fetch("phone_number.formats")))
print(service.letterify("??-??", is_upper=True))
print(service.bothify("??##"))
print(service.regexify("[A-F0-9]{8}"))

# Example 4: Failures
print("\n" + "=" * 50)
print("Example 4: Unresolvable directive")
print("=" * 50)

try:
    service.expression("#{Name.nickname}", root=faker)
except UnresolvedDirectiveError as e:
    print(e)
    # Output: Unable to resolve #{Name.nickname} directive.
    if e.diagnostic is not None:
        print(e.diagnostic.format_error())
