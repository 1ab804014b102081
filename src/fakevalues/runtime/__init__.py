"""Runtime: data lookup, directive expansion and pattern generation.

Python 3.13+. External dependency: Babel (via locale_utils).
"""

from .expander import DirectiveExpander
from .fetcher import FallbackInfo, KeyFetcher
from .operation_bridge import (
    OperationError,
    OperationKind,
    OperationRegistry,
    OperationSignature,
    to_snake_case,
)
from .patterns import PatternExpander, compile_pattern
from .random_source import DefaultRandomSource, RandomSource
from .resolution_context import GlobalDepthGuard, ResolutionContext
from .service import FakeValuesService
from .service_config import ServiceConfig
from .store import InMemoryDataStore, LocaleDataStore, Node

__all__ = [
    "DefaultRandomSource",
    "DirectiveExpander",
    "FakeValuesService",
    "FallbackInfo",
    "GlobalDepthGuard",
    "InMemoryDataStore",
    "KeyFetcher",
    "LocaleDataStore",
    "Node",
    "OperationError",
    "OperationKind",
    "OperationRegistry",
    "OperationSignature",
    "PatternExpander",
    "RandomSource",
    "ResolutionContext",
    "ServiceConfig",
    "compile_pattern",
    "to_snake_case",
]
