from __future__ import annotations

import importlib.util
import json
import logging
import re
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from types import ModuleType
from typing import Any, Callable

import yaml

from expecto.config import ExpectoConfig
from expecto.context import TestContext
from expecto.host import ResultCollector, TestResult
from expecto.metrics import RunSummary, summarize
from expecto.verbose import setup_logger


class TestScriptError(Exception):
    """A test script could not be imported or has no usable entry point."""

    __test__ = False


@dataclass
class FileResult:
    path: Path
    results: list[TestResult] = field(default_factory=list)
    error: str | None = None

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.passed)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "error": self.error,
            "results": [r.to_dict() for r in self.results],
        }


@dataclass
class RunResult:
    run_dir: Path
    files: list[FileResult]
    summary: RunSummary


def _module_name(path: Path, index: int) -> str:
    stem = re.sub(r"\W", "_", path.name.removesuffix(".py"))
    return f"_expecto_script_{index}_{stem}"


def load_script(path: Path, module_name: str) -> ModuleType:
    """Import the test script at ``path`` under ``module_name``.

    The module is registered in ``sys.modules`` and left there; the caller
    removes it once the script has run.
    """
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise TestScriptError(f"Cannot load test script: {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


def get_entry_point(module: ModuleType, name: str) -> Callable[[TestContext], Any]:
    entry = getattr(module, name, None)
    if entry is None:
        raise TestScriptError(
            f"{module.__file__} does not define an entry point '{name}(t)'"
        )
    if not callable(entry):
        raise TestScriptError(
            f"Entry point '{name}' in {module.__file__} is not callable"
        )
    return entry


class Runner:
    """Runs test scripts and writes the results of a run to disk."""

    def __init__(
        self,
        config: ExpectoConfig,
        output_dir: Path | None = None,
        verbose: bool = False,
    ):
        self.config = config
        self.output_dir = (
            Path(output_dir)
            if output_dir is not None
            else Path(config.report.output_dir)
        )
        self.verbose = verbose
        self.host = ResultCollector()

    def run_file(
        self, path: Path, logger: logging.Logger, index: int = 0
    ) -> FileResult:
        """Run one test script with a fresh context.

        Suite-level errors abort the rest of the script; the cases reported
        before the error are kept.
        """
        self.host.reset()
        context = TestContext(self.host)
        module_name = _module_name(path, index)
        error: str | None = None

        logger.debug(f"Running test file {path}")
        try:
            module = load_script(path, module_name)
            entry = get_entry_point(module, self.config.test.entry_point)
            entry(context)
        except Exception as e:
            error = f"Test execution failed: {e}"
            logger.error(f"{path}: {error}")
        finally:
            sys.modules.pop(module_name, None)

        results = self.host.results()
        for r in results:
            if r.passed:
                logger.debug(f"  PASS {r.name}")
            else:
                logger.debug(f"  FAIL {r.name}: {r.error}")
        logger.debug(
            f"Finished {path}: {sum(1 for r in results if r.passed)}/{len(results)} passed"
        )
        return FileResult(path=path, results=results, error=error)

    def _new_run_dir(self) -> Path:
        run_id = datetime.now(timezone.utc).strftime("%Y-%m-%d_%H%M%S")
        run_dir = self.output_dir / run_id
        suffix = 1
        while run_dir.exists():
            run_dir = self.output_dir / f"{run_id}-{suffix}"
            suffix += 1
        run_dir.mkdir(parents=True)
        return run_dir

    def execute(self, test_files: list[Path]) -> RunResult:
        """Run every file in order. Returns the run directory and results."""
        run_dir = self._new_run_dir()

        logger = setup_logger(
            run_dir / "debug.log",
            verbose=self.verbose,
            logger_name=f"expecto_run_{run_dir.name}",
        )
        try:
            logger.debug(f"Starting test run with {len(test_files)} file(s)")

            files = [
                self.run_file(path, logger, index)
                for index, path in enumerate(test_files)
            ]
            summary = summarize(files)

            logger.debug(
                f"Run complete: {summary.passed} passed, {summary.failed} failed, "
                f"{summary.total} total"
            )
            self._write_results(run_dir, files, summary)
        finally:
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

        return RunResult(run_dir=run_dir, files=files, summary=summary)

    def _write_results(
        self, run_dir: Path, files: list[FileResult], summary: RunSummary
    ) -> None:
        """Write junit.xml, results.json and meta.yaml to the run directory."""
        from expecto.reporting.junit import write_junit

        write_junit(run_dir, files)

        (run_dir / "results.json").write_text(
            json.dumps([f.to_dict() for f in files], indent=2)
        )

        try:
            import importlib.metadata

            expecto_version = importlib.metadata.version("expecto")
        except Exception:
            expecto_version = "unknown"

        meta: dict[str, Any] = {
            "run_id": run_dir.name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "files": [str(f.path) for f in files],
            "expecto_version": expecto_version,
            "summary": summary.to_dict(),
        }
        (run_dir / "meta.yaml").write_text(yaml.dump(meta, default_flow_style=False))
