"""Operation bridge between directive references and Python callables.

Directives name operations as written in locale data (``Name.first_name``,
``IDNumber.valid``, ``Number.number_between '1','10'``). This module maps
those references onto Python objects without ad-hoc reflection at call
time:

    - OperationRegistry: explicit name -> OperationSignature mapping,
      built once per Python type and cached
    - Directive arguments arrive as strings and are converted according to
      the parameter annotations ('5' -> 5 for ``int``, 'true' -> True for
      ``bool``)
    - Namespace and method names are accepted in CamelCase or snake_case

Example:
    class Number:
        def number_between(self, low: int, high: int) -> str: ...

    # Locale data:
    age = "#{Number.number_between '18','99'}"

    # Bridge converts: number_between('18', '99') -> number_between(18, 99)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import functools
import inspect
import logging
import re
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import StrEnum
from inspect import Parameter, Signature
from types import NoneType, UnionType
from typing import Any, Union, get_args, get_origin

from fakevalues.diagnostics import ExpansionDepthError, UnresolvedDirectiveError

__all__ = [
    "OperationError",
    "OperationKind",
    "OperationRegistry",
    "OperationSignature",
    "to_snake_case",
]

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")

_TRUE_STRINGS: frozenset[str] = frozenset({"true", "yes", "on", "1"})
_FALSE_STRINGS: frozenset[str] = frozenset({"false", "no", "off", "0"})

# Annotations left as strings when they cannot be evaluated.
_ANNOTATION_NAMES: dict[str, type] = {
    "int": int,
    "float": float,
    "bool": bool,
    "Decimal": Decimal,
    "str": str,
}


class OperationError(Exception):
    """Operation lookup succeeded but conversion or invocation failed.

    Internal to the runtime; the expander folds it into
    UnresolvedDirectiveError with the reason kept in the diagnostic hint.
    """


class OperationKind(StrEnum):
    """How an operation is reached on an instance."""

    METHOD = "method"
    PROPERTY = "property"


@dataclass(frozen=True, slots=True)
class OperationSignature:
    """Operation metadata with argument conversion info.

    Attributes:
        name: Attribute name on the owning type
        kind: METHOD (called) or PROPERTY (read)
        signature: Call signature without self/cls (None for properties)
    """

    name: str
    kind: OperationKind
    signature: Signature | None = None

    @property
    def accepts_no_arguments(self) -> bool:
        """True if the operation can be called (or read) without arguments."""
        if self.signature is None:
            return True
        return all(
            p.default is not Parameter.empty
            or p.kind in (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)
            for p in self.signature.parameters.values()
        )


def to_snake_case(name: str) -> str:
    """Convert a CamelCase or camelCase name to snake_case.

    Examples:
        >>> to_snake_case("IDNumber")
        'id_number'
        >>> to_snake_case("firstName")
        'first_name'
        >>> to_snake_case("first_name")
        'first_name'
    """
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class OperationRegistry:
    """Named operations exposed by one Python type.

    Public (non-underscore) methods, static methods, class methods and
    properties defined on the type or its bases are registered. Attributes
    assigned on instances are not visible; expose them as properties.

    Lookup misses are ordinary misses (None), never exceptions.

    Example:
        >>> class Greeter:
        ...     def hello(self) -> str:
        ...         return "Hello"
        >>> registry = OperationRegistry.for_type(Greeter)
        >>> "hello" in registry
        True
        >>> registry.invoke(Greeter(), "hello", [])
        'Hello'
    """

    __slots__ = ("_operations", "_owner")

    def __init__(self, owner: type | None = None) -> None:
        """Initialize empty registry for owner (used in reprs and errors)."""
        self._owner = owner
        self._operations: dict[str, OperationSignature] = {}

    @classmethod
    def for_type(cls, owner: type) -> OperationRegistry:
        """Return the registry for a type, building it on first use."""
        return _registry_for_type(owner)

    def register(self, operation: OperationSignature) -> None:
        """Register an operation (replaces any operation with the same name)."""
        self._operations[operation.name] = operation

    def lookup(self, name: str) -> OperationSignature | None:
        """Find an operation by snake_case or camelCase name."""
        operation = self._operations.get(name)
        if operation is None:
            operation = self._operations.get(to_snake_case(name))
        return operation

    def invoke(self, instance: object, name: str, arguments: Sequence[str]) -> object:
        """Invoke a registered operation on instance with string arguments.

        Args:
            instance: Object the operation is bound to
            name: Operation name (snake_case or camelCase)
            arguments: Directive arguments, already expanded, as strings

        Returns:
            Whatever the operation returns

        Raises:
            OperationError: If the operation is missing, arguments cannot be
                converted or bound, or the operation itself raises
        """
        operation = self.lookup(name)
        if operation is None:
            msg = f"{self._owner_name} has no operation '{name}'"
            raise OperationError(msg)

        if operation.kind is OperationKind.PROPERTY:
            if arguments:
                msg = f"{self._owner_name}.{operation.name} is a property and takes no arguments"
                raise OperationError(msg)
            return self._call(lambda: getattr(instance, operation.name), operation)

        converted = _convert_arguments(operation, arguments)
        bound = getattr(instance, operation.name)
        return self._call(lambda: bound(*converted), operation)

    def _call(self, thunk: Callable[[], object], operation: OperationSignature) -> object:
        # Failures inside nested expansion keep their own directive text; stack
        # exhaustion is reported by the outermost expansion as too deep.
        try:
            return thunk()
        except (UnresolvedDirectiveError, ExpansionDepthError, RecursionError):
            raise
        except Exception as e:
            msg = f"{self._owner_name}.{operation.name} failed: {type(e).__name__}: {e}"
            raise OperationError(msg) from e

    @property
    def _owner_name(self) -> str:
        return self._owner.__name__ if self._owner is not None else "target"

    def __iter__(self) -> Iterator[str]:
        return iter(self._operations)

    def __len__(self) -> int:
        return len(self._operations)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def __repr__(self) -> str:
        return f"OperationRegistry(owner={self._owner_name}, operations={len(self._operations)})"


@functools.lru_cache(maxsize=256)
def _registry_for_type(owner: type) -> OperationRegistry:
    registry = OperationRegistry(owner)
    for name in dir(owner):
        if name.startswith("_"):
            continue
        raw = inspect.getattr_static(owner, name)
        match raw:
            case property():
                registry.register(OperationSignature(name, OperationKind.PROPERTY))
            case staticmethod():
                registry.register(_method_signature(name, raw.__func__, skip=0))
            case classmethod():
                registry.register(_method_signature(name, raw.__func__, skip=1))
            case _ if inspect.isfunction(raw):
                registry.register(_method_signature(name, raw, skip=1))
    logger.debug("Built operation registry for %s: %d operations", owner.__name__, len(registry))
    return registry


def _method_signature(name: str, func: Callable[..., Any], *, skip: int) -> OperationSignature:
    try:
        sig = inspect.signature(func, eval_str=True)
    except NameError:
        # Annotations referencing TYPE_CHECKING-only names; fall back to raw strings.
        sig = inspect.signature(func)
    parameters = list(sig.parameters.values())[skip:]
    return OperationSignature(
        name=name,
        kind=OperationKind.METHOD,
        signature=sig.replace(parameters=parameters),
    )


def _convert_arguments(operation: OperationSignature, arguments: Sequence[str]) -> list[object]:
    signature = operation.signature
    if signature is None:
        msg = f"{operation.name} is not callable"
        raise OperationError(msg)
    parameters = [
        p
        for p in signature.parameters.values()
        if p.kind in (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)
    ]
    var_positional = next(
        (
            p
            for p in signature.parameters.values()
            if p.kind is Parameter.VAR_POSITIONAL
        ),
        None,
    )

    converted: list[object] = []
    for index, value in enumerate(arguments):
        if index < len(parameters):
            parameter = parameters[index]
        elif var_positional is not None:
            parameter = var_positional
        else:
            msg = (
                f"{operation.name}() takes {len(parameters)} argument(s) "
                f"but {len(arguments)} were given"
            )
            raise OperationError(msg)
        try:
            converted.append(_convert(value, parameter.annotation))
        except (ValueError, InvalidOperation) as e:
            msg = f"argument '{parameter.name}' of {operation.name}(): cannot convert {value!r}"
            raise OperationError(msg) from e

    try:
        signature.bind(*converted)
    except TypeError as e:
        msg = f"{operation.name}(): {e}"
        raise OperationError(msg) from e
    return converted


def _convert(value: str, annotation: object) -> object:
    if isinstance(annotation, str):
        annotation = _ANNOTATION_NAMES.get(annotation, Parameter.empty)

    if get_origin(annotation) in (Union, UnionType):
        candidates = [a for a in get_args(annotation) if a is not NoneType]
        if str in candidates or not candidates:
            return value
        annotation = candidates[0]

    if annotation is bool:
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        msg = f"not a boolean: {value!r}"
        raise ValueError(msg)
    if annotation is int:
        return int(value.strip())
    if annotation is float:
        return float(value.strip())
    if annotation is Decimal:
        return Decimal(value.strip())
    return value
