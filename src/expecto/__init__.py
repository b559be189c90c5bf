"""In-process test declaration and assertion engine."""

from expecto.context import TestContext
from expecto.equality import deep_equal
from expecto.expectation import Expectation, ExpectationFailed, expect
from expecto.host import ResultCollector, TestHost, TestResult
from expecto.values import UNDEFINED, ValueKind, classify

__all__ = [
    "Expectation",
    "ExpectationFailed",
    "ResultCollector",
    "TestContext",
    "TestHost",
    "TestResult",
    "UNDEFINED",
    "ValueKind",
    "classify",
    "deep_equal",
    "expect",
]
