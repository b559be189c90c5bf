from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from expecto.runner import FileResult


@dataclass
class DurationStatistics:
    """Statistics over case durations, in seconds."""

    avg: float | None
    min: float | None
    max: float | None
    stddev: float | None

    def to_dict(self) -> dict[str, float | None]:
        return asdict(self)


@dataclass
class RunSummary:
    """Totals across all test files of a run.

    A file that failed to load or whose suite body raised counts as one
    failure on top of its case failures.
    """

    passed: int
    failed: int
    total: int
    file_errors: int
    duration: float
    duration_stats: DurationStatistics

    @property
    def success(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["duration_stats"] = self.duration_stats.to_dict()
        return data


def compute_stats(values: list[float | int | None]) -> DurationStatistics:
    """Compute avg, min, max, stddev for a list of numeric values."""
    nums = [v for v in values if v is not None]
    if not nums:
        return DurationStatistics(avg=None, min=None, max=None, stddev=None)

    arr = np.array(nums, dtype=float)
    return DurationStatistics(
        avg=round(float(np.mean(arr)), 6),
        min=round(float(np.min(arr)), 6),
        max=round(float(np.max(arr)), 6),
        stddev=round(float(np.std(arr)), 6),
    )


def summarize(files: list[FileResult]) -> RunSummary:
    results = [r for f in files for r in f.results]
    passed = sum(1 for r in results if r.passed)
    case_failures = sum(1 for r in results if not r.passed)
    file_errors = sum(1 for f in files if f.error is not None)
    durations = [r.duration for r in results]

    return RunSummary(
        passed=passed,
        failed=case_failures + file_errors,
        total=len(results),
        file_errors=file_errors,
        duration=float(sum(durations)),
        duration_stats=compute_stats(durations),
    )
