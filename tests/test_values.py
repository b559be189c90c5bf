"""Tests for value kinds and strict equality."""

import copy
import math

import pytest

from expecto.values import (
    UNDEFINED,
    ValueKind,
    classify,
    format_json,
    format_value,
    strict_equals,
)


@pytest.mark.parametrize(
    "value",
    [None, UNDEFINED, True, 0, 1.5, 2j, "text", b"bytes"],
)
def test_primitives(value):
    assert classify(value) is ValueKind.PRIMITIVE


def test_containers_and_callables():
    assert classify([1]) is ValueKind.SEQUENCE
    assert classify((1,)) is ValueKind.SEQUENCE
    assert classify({"a": 1}) is ValueKind.MAPPING
    assert classify(len) is ValueKind.CALLABLE
    assert classify(lambda: None) is ValueKind.CALLABLE
    assert classify(object()) is ValueKind.OPAQUE
    assert classify({1, 2}) is ValueKind.OPAQUE


def test_strings_are_not_sequences():
    assert classify("abc") is ValueKind.PRIMITIVE


def test_undefined_is_a_falsy_singleton():
    assert not UNDEFINED
    assert copy.deepcopy(UNDEFINED) is UNDEFINED
    assert type(UNDEFINED)() is UNDEFINED
    assert repr(UNDEFINED) == "undefined"


def test_strict_equals_numbers_compare_by_value():
    assert strict_equals(1, 1)
    assert strict_equals(1, 1.0)
    assert not strict_equals(1, 2)


def test_strict_equals_booleans_are_not_numbers():
    assert not strict_equals(True, 1)
    assert not strict_equals(0, False)
    assert strict_equals(True, True)


def test_strict_equals_nan():
    nan = float("nan")
    assert not strict_equals(nan, nan)
    assert not strict_equals(math.nan, math.nan)


def test_strict_equals_null_and_undefined_differ():
    assert strict_equals(None, None)
    assert strict_equals(UNDEFINED, UNDEFINED)
    assert not strict_equals(None, UNDEFINED)


def test_strict_equals_strings_and_bytes_differ():
    assert strict_equals("a", "a")
    assert not strict_equals("a", b"a")


def test_strict_equals_objects_by_identity():
    a = [1, 2]
    assert strict_equals(a, a)
    assert not strict_equals(a, [1, 2])
    assert not strict_equals(a, None)


def test_format_value():
    assert format_value(None) == "null"
    assert format_value(UNDEFINED) == "undefined"
    assert format_value("x") == "'x'"
    assert format_value([1, 2]) == "[1, 2]"


def test_format_json():
    assert format_json({"a": [1, None]}) == '{"a": [1, null]}'
    assert format_json(UNDEFINED) == "undefined"
    assert format_json([UNDEFINED]) == '["undefined"]'


def test_format_json_falls_back_for_unserialisable_values():
    assert format_json({(1, 2): "tuple key"}) == "{(1, 2): 'tuple key'}"
