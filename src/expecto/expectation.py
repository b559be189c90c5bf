"""Expectations and their matchers."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from expecto.equality import deep_equal
from expecto.values import UNDEFINED, format_json, format_value, strict_equals

_NO_EXPECTED = object()


class ExpectationFailed(AssertionError):
    """Raised by a matcher whose condition does not hold.

    Attributes:
        message: Human-readable description of the failed relation.
        matcher: Name of the matcher that failed (e.g. "to_equal").
        actual: The value passed to ``expect``.
        expected: The value passed to the matcher, if it takes one.
        negated: Whether the matcher was reached through ``not_``.
    """

    def __init__(
        self,
        message: str,
        matcher: str,
        actual: Any,
        expected: Any = _NO_EXPECTED,
        negated: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.matcher = matcher
        self.actual = actual
        self.expected = None if expected is _NO_EXPECTED else expected
        self.negated = negated

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class Expectation:
    """Wraps a value so matchers can be applied to it.

    ``not_`` returns a new Expectation with the polarity flipped, so
    ``expect(x).not_.not_`` behaves like ``expect(x)``.
    """

    actual: Any
    negated: bool = False

    @property
    def not_(self) -> Expectation:
        return replace(self, negated=not self.negated)

    def _prefix(self) -> str:
        return "not " if self.negated else ""

    def _check(
        self, condition: bool, matcher: str, message: str, expected: Any = _NO_EXPECTED
    ) -> None:
        if condition == self.negated:
            raise ExpectationFailed(
                message,
                matcher=matcher,
                actual=self.actual,
                expected=expected,
                negated=self.negated,
            )

    def to_be(self, expected: Any) -> None:
        self._check(
            strict_equals(self.actual, expected),
            "to_be",
            f"Expected {format_value(self.actual)} {self._prefix()}to be "
            f"{format_value(expected)}",
            expected,
        )

    def to_equal(self, expected: Any) -> None:
        self._check(
            deep_equal(self.actual, expected),
            "to_equal",
            f"Expected {format_json(self.actual)} {self._prefix()}to equal "
            f"{format_json(expected)}",
            expected,
        )

    def to_be_truthy(self) -> None:
        self._check(
            bool(self.actual),
            "to_be_truthy",
            f"Expected {format_value(self.actual)} {self._prefix()}to be truthy",
        )

    def to_be_falsy(self) -> None:
        self._check(
            not self.actual,
            "to_be_falsy",
            f"Expected {format_value(self.actual)} {self._prefix()}to be falsy",
        )

    def to_be_null(self) -> None:
        self._check(
            self.actual is None,
            "to_be_null",
            f"Expected {format_value(self.actual)} {self._prefix()}to be null",
        )

    def to_be_undefined(self) -> None:
        self._check(
            self.actual is UNDEFINED,
            "to_be_undefined",
            f"Expected {format_value(self.actual)} {self._prefix()}to be undefined",
        )

    def to_be_defined(self) -> None:
        self._check(
            self.actual is not UNDEFINED,
            "to_be_defined",
            f"Expected {format_value(self.actual)} {self._prefix()}to be defined",
        )

    def to_throw(self) -> None:
        # A non-callable is never invoked and counts as "did not throw"
        threw = False
        if callable(self.actual):
            try:
                self.actual()
            except Exception:
                threw = True
        self._check(
            threw,
            "to_throw",
            f"Expected function {self._prefix()}to throw",
        )


def expect(actual: Any) -> Expectation:
    return Expectation(actual)
