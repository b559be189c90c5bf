"""Structural equality used by ``to_equal``."""

from __future__ import annotations

import dataclasses
from typing import Any

from expecto.values import UNDEFINED, ValueKind, classify, strict_equals


def _attributes(value: Any) -> dict[str, Any] | None:
    """Field values of an object instance, or None when it has no fields to compare."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    try:
        return dict(vars(value))
    except TypeError:
        # builtins and __slots__-only objects have no __dict__
        return None


def _mapping_equal(a: Any, b: Any) -> bool:
    if len(a) != len(b):
        return False
    for key in a:
        if key not in b:
            return False
        if not deep_equal(a[key], b[key]):
            return False
    return True


def deep_equal(a: Any, b: Any) -> bool:
    """Recursively compare two values.

    Sequences compare element by element in order, mappings compare by key
    set (order ignored) and per-key value. Instances of the same class
    compare by their fields. Callables, and objects without fields, are
    only equal to themselves. NaN is not equal to NaN.
    """
    kind_a = classify(a)
    kind_b = classify(b)

    if kind_a is ValueKind.PRIMITIVE and kind_b is ValueKind.PRIMITIVE:
        return strict_equals(a, b)
    if a is b:
        return True

    if a is None or b is None or a is UNDEFINED or b is UNDEFINED:
        return False

    if kind_a is ValueKind.SEQUENCE and kind_b is ValueKind.SEQUENCE:
        if len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b))

    if kind_a is ValueKind.MAPPING and kind_b is ValueKind.MAPPING:
        return _mapping_equal(a, b)

    if kind_a is ValueKind.OPAQUE and kind_b is ValueKind.OPAQUE:
        if type(a) is not type(b):
            return False
        attrs_a = _attributes(a)
        attrs_b = _attributes(b)
        if attrs_a is None or attrs_b is None:
            return False
        return _mapping_equal(attrs_a, attrs_b)

    return False
