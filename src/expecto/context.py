"""Suite and case registration.

A ``TestContext`` is handed to the entry point of every test script. It
carries ``describe``, ``it`` and ``expect`` and forwards outcomes to the
host it was built with.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator

from expecto.expectation import Expectation
from expecto.host import TestHost


def _failure_message(exc: Exception) -> str:
    message = str(exc)
    return message if message else type(exc).__name__


class TestContext:
    """Entry points a test script uses to declare suites and cases."""

    __test__ = False

    def __init__(self, host: TestHost) -> None:
        self.host = host

    def describe(self, name: str, body: Callable[[], Any]) -> None:
        """Declare a suite and run its body immediately.

        Errors raised by the body are not caught here.
        """
        self.host.register_suite_start(name, body)
        try:
            body()
        finally:
            self.host.suite_finished(name)

    def it(self, name: str, body: Callable[[], Any]) -> None:
        """Run a case body and report exactly one outcome for it."""
        self.host.case_started(name)
        try:
            body()
        except Exception as exc:
            self.host.report_case_failed(name, _failure_message(exc))
            return
        self.host.report_case_passed(name)

    def expect(self, value: Any) -> Expectation:
        return Expectation(value)

    def __iter__(self) -> Iterator[Callable[..., Any]]:
        # describe, it, expect = ctx
        return iter((self.describe, self.it, self.expect))
