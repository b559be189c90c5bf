"""Value kinds for the comparand domain of the matchers."""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any


class _Undefined:
    """Marker for the absence of a value, as distinct from ``None``."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()


class ValueKind(str, Enum):
    PRIMITIVE = "primitive"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    CALLABLE = "callable"
    OPAQUE = "opaque"


_PRIMITIVE_TYPES = (bool, int, float, complex, str, bytes)
_NUMBER_TYPES = (int, float, complex)


def classify(value: Any) -> ValueKind:
    """Return the kind of ``value``.

    Checked in order: primitives first (so ``str`` is never a sequence),
    then mappings, sequences, callables. Everything else is opaque.
    """
    if value is None or value is UNDEFINED or isinstance(value, _PRIMITIVE_TYPES):
        return ValueKind.PRIMITIVE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if callable(value):
        return ValueKind.CALLABLE
    return ValueKind.OPAQUE


def _primitive_family(value: Any) -> str:
    if value is None:
        return "null"
    if value is UNDEFINED:
        return "undefined"
    # bool subclasses int, so it has to be checked first
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, _NUMBER_TYPES):
        return "number"
    if isinstance(value, str):
        return "string"
    return "bytes"


def strict_equals(a: Any, b: Any) -> bool:
    """Identity equality.

    Two primitives are equal when they belong to the same family and compare
    equal by value (``1 == 1.0`` holds, ``True`` is not ``1``, NaN is never
    equal to itself). Anything else must be the same object.
    """
    a_primitive = classify(a) is ValueKind.PRIMITIVE
    b_primitive = classify(b) is ValueKind.PRIMITIVE
    if a_primitive and b_primitive:
        if _primitive_family(a) != _primitive_family(b):
            return False
        return bool(a == b)
    if a_primitive or b_primitive:
        return False
    return a is b


def format_value(value: Any) -> str:
    if value is None:
        return "null"
    if value is UNDEFINED:
        return "undefined"
    return repr(value)


def format_json(value: Any) -> str:
    """Render ``value`` as JSON, falling back to :func:`format_value`."""
    if value is UNDEFINED:
        return format_value(value)
    try:
        return json.dumps(value, default=format_value)
    except (TypeError, ValueError):
        return format_value(value)
