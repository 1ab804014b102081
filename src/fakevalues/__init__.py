"""fakevalues - locale-driven fake value generation.

Resolves dotted keys and ``#{...}`` directive templates against per-locale
data, falling back along a locale chain, and dispatches directives to named
operations on provider objects.

Public API:
    FakeValuesService - Single-locale lookup, expansion and pattern generation
    InMemoryDataStore - Immutable locale-keyed data store
    DefaultRandomSource - Seedable uniform integer source
    ServiceConfig - Depth limits and locale validation
    locale_chain - Fallback sequence for a locale

Exceptions:
    FakeValuesError - Base exception class
    LocaleUnsupportedError - Malformed locale or no data for it
    KeyNotFoundError - Key absent in every locale of the chain
    UnresolvedDirectiveError - Directive maps to no data or operation
    ExpansionDepthError - Nested expansion too deep
    PatternSyntaxError - Unsupported regexify construct

Submodules:
    fakevalues.syntax - Template AST and parser
    fakevalues.runtime - Fetcher, expander, operation registry, pattern expanders
    fakevalues.diagnostics - Error types, codes and message templates
"""

from .diagnostics import (
    ExpansionDepthError,
    FakeValuesError,
    KeyNotFoundError,
    LocaleUnsupportedError,
    PatternSyntaxError,
    UnresolvedDirectiveError,
)
from .locale_utils import locale_chain
from .runtime import (
    DefaultRandomSource,
    FakeValuesService,
    FallbackInfo,
    InMemoryDataStore,
    LocaleDataStore,
    RandomSource,
    ServiceConfig,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("fakevalues")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "DefaultRandomSource",
    "ExpansionDepthError",
    "FakeValuesError",
    "FakeValuesService",
    "FallbackInfo",
    "InMemoryDataStore",
    "KeyNotFoundError",
    "LocaleDataStore",
    "LocaleUnsupportedError",
    "PatternSyntaxError",
    "RandomSource",
    "ServiceConfig",
    "UnresolvedDirectiveError",
    "__version__",
    "locale_chain",
]
