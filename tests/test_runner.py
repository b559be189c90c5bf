"""Tests for running test scripts."""

import json
import sys
from pathlib import Path

import pytest
import yaml
from junitparser import JUnitXml

from expecto.config import ExpectoConfig
from expecto.runner import Runner, TestScriptError, get_entry_point, load_script

PASSING = """\
def tests(t):
    describe, it, expect = t

    def math():
        it("adds", lambda: expect(1 + 1).to_be(2))
        it("compares lists", lambda: expect([1, 2]).to_equal([1, 2]))

    describe("math", math)
"""

MIXED = """\
def tests(t):
    def suite():
        t.it("passes", lambda: t.expect(True).to_be_truthy())
        t.it("fails", lambda: t.expect({"a": 1}).to_equal({"a": 2}))

    t.describe("mixed", suite)
"""

SUITE_ERROR = """\
def tests(t):
    def first():
        t.it("runs", lambda: None)

    def broken():
        t.expect(1).to_be(2)
        t.it("never declared", lambda: None)

    def after():
        t.it("never reached", lambda: None)

    t.describe("first", first)
    t.describe("broken", broken)
    t.describe("after", after)
"""

DATACLASS_SCRIPT = """\
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Point:
    x: int
    y: int


def tests(t):
    t.it("builds points", lambda: t.expect(Point(1, 2).x).to_be(1))
"""


@pytest.fixture
def runner(tmp_path):
    return Runner(config=ExpectoConfig(), output_dir=tmp_path / "runs")


def test_runner_creates_run_directory(runner, write_script):
    script = write_script("math.test.py", PASSING)
    result = runner.execute([script])

    assert result.run_dir.exists()
    assert (result.run_dir / "junit.xml").exists()
    assert (result.run_dir / "results.json").exists()
    assert (result.run_dir / "meta.yaml").exists()
    assert (result.run_dir / "debug.log").exists()


def test_runner_collects_results(runner, write_script):
    script = write_script("math.test.py", PASSING)
    result = runner.execute([script])

    [file_result] = result.files
    assert file_result.error is None
    assert [(r.name, r.passed, r.suite) for r in file_result.results] == [
        ("adds", True, "math"),
        ("compares lists", True, "math"),
    ]
    assert result.summary.passed == 2
    assert result.summary.success is True


def test_runner_records_failures(runner, write_script):
    script = write_script("mixed.test.py", MIXED)
    result = runner.execute([script])

    file_result = result.files[0]
    assert file_result.passed == 1
    assert file_result.failed == 1
    failed = file_result.results[1]
    assert failed.error == 'Expected {"a": 1} to equal {"a": 2}'
    assert result.summary.success is False


def test_suite_error_aborts_file_but_keeps_earlier_results(runner, write_script):
    script = write_script("broken.test.py", SUITE_ERROR)
    result = runner.execute([script])

    file_result = result.files[0]
    assert [r.name for r in file_result.results] == ["runs"]
    assert file_result.error == "Test execution failed: Expected 1 to be 2"
    assert result.summary.failed == 1
    assert result.summary.file_errors == 1


def test_file_error_does_not_stop_other_files(runner, write_script):
    broken = write_script("a.test.py", SUITE_ERROR)
    passing = write_script("b.test.py", PASSING)
    result = runner.execute([broken, passing])

    assert [f.path for f in result.files] == [broken, passing]
    assert result.files[0].error is not None
    assert result.files[1].error is None
    assert len(result.files[1].results) == 2


def test_results_do_not_leak_between_files(runner, write_script):
    first = write_script("a.test.py", PASSING)
    second = write_script("b.test.py", MIXED)
    result = runner.execute([first, second])

    assert [r.name for r in result.files[1].results] == ["passes", "fails"]
    assert result.files[1].results[0].suite == "mixed"


def test_missing_entry_point_is_file_error(runner, write_script):
    script = write_script("empty.test.py", "VALUE = 1\n")
    result = runner.execute([script])

    assert result.files[0].results == []
    assert "does not define an entry point 'tests(t)'" in result.files[0].error


def test_import_error_is_file_error(runner, write_script):
    script = write_script("bad.test.py", "import module_that_does_not_exist\n")
    result = runner.execute([script])

    assert result.files[0].error.startswith("Test execution failed:")
    assert "module_that_does_not_exist" in result.files[0].error


def test_custom_entry_point(tmp_path, write_script):
    config = ExpectoConfig(test={"entry_point": "register"})
    script = write_script(
        "custom.test.py",
        "def register(t):\n    t.it('custom', lambda: None)\n",
    )
    result = Runner(config=config, output_dir=tmp_path / "runs").execute([script])
    assert [r.name for r in result.files[0].results] == ["custom"]


def test_scripts_can_define_dataclasses(runner, write_script):
    script = write_script("points.test.py", DATACLASS_SCRIPT)
    result = runner.execute([script])
    assert result.files[0].error is None
    assert result.files[0].results[0].passed is True


def test_output_dir_defaults_to_config(tmp_path, write_script):
    config = ExpectoConfig(report={"output_dir": str(tmp_path / "configured")})
    result = Runner(config=config).execute([write_script("a.test.py", PASSING)])
    assert result.run_dir.parent == tmp_path / "configured"


def test_consecutive_runs_get_separate_directories(runner, write_script):
    script = write_script("math.test.py", PASSING)
    first = runner.execute([script])
    second = runner.execute([script])
    assert first.run_dir != second.run_dir


def test_results_json_contents(runner, write_script):
    script = write_script("mixed.test.py", MIXED)
    result = runner.execute([script])

    data = json.loads((result.run_dir / "results.json").read_text())
    assert data[0]["path"] == str(script)
    assert data[0]["error"] is None
    assert [r["name"] for r in data[0]["results"]] == ["passes", "fails"]
    assert data[0]["results"][1]["passed"] is False


def test_meta_yaml_contents(runner, write_script):
    script = write_script("math.test.py", PASSING)
    result = runner.execute([script])

    meta = yaml.safe_load((result.run_dir / "meta.yaml").read_text())
    assert meta["run_id"] == result.run_dir.name
    assert meta["files"] == [str(script)]
    assert meta["summary"]["passed"] == 2
    assert "expecto_version" in meta


def test_junit_written_per_file(runner, write_script):
    script = write_script("mixed.test.py", MIXED)
    result = runner.execute([script])

    xml = JUnitXml.fromfile(str(result.run_dir / "junit.xml"))
    [suite] = list(xml)
    assert suite.name == str(script)
    assert suite.tests == 2
    assert suite.failures == 1


def test_debug_log_records_outcomes(runner, write_script):
    script = write_script("mixed.test.py", MIXED)
    result = runner.execute([script])

    log = (result.run_dir / "debug.log").read_text()
    assert "PASS passes" in log
    assert "FAIL fails" in log


def test_script_module_removed_after_run(runner, write_script):
    script = write_script("math.test.py", PASSING)
    runner.execute([script])
    assert not any(name.startswith("_expecto_script_") for name in sys.modules)


def test_load_script_and_entry_point(write_script):
    script = write_script("direct.test.py", PASSING)
    module = load_script(script, "_expecto_script_direct")
    try:
        assert callable(get_entry_point(module, "tests"))
        with pytest.raises(TestScriptError, match="does not define"):
            get_entry_point(module, "missing")
    finally:
        sys.modules.pop("_expecto_script_direct", None)


def test_non_callable_entry_point(write_script):
    script = write_script("value.test.py", "tests = 42\n")
    module = load_script(script, "_expecto_script_value")
    try:
        with pytest.raises(TestScriptError, match="is not callable"):
            get_entry_point(module, "tests")
    finally:
        sys.modules.pop("_expecto_script_value", None)


def test_bundled_example_passes(runner):
    example = Path(__file__).resolve().parents[1] / "examples" / "collections.test.py"
    result = runner.execute([example])

    assert result.files[0].error is None
    assert len(result.files[0].results) == 8
    assert all(r.passed for r in result.files[0].results)
