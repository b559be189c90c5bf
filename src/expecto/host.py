"""Host interface receiving suite and case outcomes."""

from __future__ import annotations

import json
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from typing import Any, Callable


@dataclass
class TestResult:
    """Outcome of a single case.

    Attributes:
        name: Case name as given to ``it``.
        passed: Whether the case body returned without raising.
        error: Failure message, ``None`` for passed cases.
        duration: Seconds spent in the case body.
        suite: Name of the innermost suite running when the case was declared.
    """

    __test__ = False

    name: str
    passed: bool
    error: str | None = None
    duration: float = 0.0
    suite: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class TestHost(ABC):
    """Capability interface the test context reports into."""

    __test__ = False

    @abstractmethod
    def register_suite_start(self, name: str, body: Callable[[], Any]) -> None:
        """Called once per ``describe``, before its body runs."""
        ...

    @abstractmethod
    def report_case_passed(self, name: str) -> None:
        """Called once when a case body returns normally."""
        ...

    @abstractmethod
    def report_case_failed(self, name: str, message: str) -> None:
        """Called once when a case body raises."""
        ...

    def case_started(self, name: str) -> None:
        """Called right before a case body runs."""

    def suite_finished(self, name: str) -> None:
        """Called when a suite body has returned or raised."""


class ResultCollector(TestHost):
    """Host that keeps every case outcome in report order."""

    def __init__(self) -> None:
        self._results: list[TestResult] = []
        self._suites: list[str] = []
        self._case_starts: list[float] = []

    @property
    def current_suite(self) -> str | None:
        return self._suites[-1] if self._suites else None

    def register_suite_start(self, name: str, body: Callable[[], Any]) -> None:
        self._suites.append(name)

    def suite_finished(self, name: str) -> None:
        if self._suites and self._suites[-1] == name:
            self._suites.pop()

    def case_started(self, name: str) -> None:
        self._case_starts.append(time.perf_counter())

    def report_case_passed(self, name: str) -> None:
        self._record(name, passed=True, error=None)

    def report_case_failed(self, name: str, message: str) -> None:
        self._record(name, passed=False, error=message)

    def _record(self, name: str, passed: bool, error: str | None) -> None:
        duration = 0.0
        if self._case_starts:
            duration = time.perf_counter() - self._case_starts.pop()
        self._results.append(
            TestResult(
                name=name,
                passed=passed,
                error=error,
                duration=duration,
                suite=self.current_suite,
            )
        )

    def results(self) -> list[TestResult]:
        return list(self._results)

    def reset(self) -> None:
        self._results.clear()
        self._suites.clear()
        self._case_starts.clear()

    def to_json(self) -> str:
        return json.dumps([r.to_dict() for r in self._results])
