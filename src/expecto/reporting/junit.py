from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from junitparser import Error, Failure, JUnitXml, TestCase, TestSuite

from expecto.metrics import compute_stats

if TYPE_CHECKING:
    from expecto.runner import FileResult


def write_junit(run_dir: Path, files: list[FileResult]) -> Path:
    """Write junit.xml with one testsuite per test file, return path."""
    xml = JUnitXml()

    for file_result in files:
        suite = TestSuite(str(file_result.path))

        for result in file_result.results:
            case = TestCase(result.name)
            case.classname = result.suite or file_result.path.name
            case.time = round(result.duration, 6)
            if not result.passed:
                case.result = [Failure(result.error or "")]
            suite.add_testcase(case)

        # A suite-level error gets its own case so it shows up in the counts
        if file_result.error is not None:
            case = TestCase(file_result.path.name)
            case.classname = file_result.path.name
            case.result = [Error(file_result.error)]
            suite.add_testcase(case)

        stats = compute_stats([r.duration for r in file_result.results])
        for stat_name, stat_val in stats.to_dict().items():
            if stat_val is not None:
                suite.add_property(f"duration_{stat_name}", str(stat_val))

        # Set time after add_testcase (add_testcase resets it via update_statistics)
        suite.time = round(sum(r.duration for r in file_result.results), 6)

        # Use append (not +=) to preserve properties and time
        xml.append(suite)

    junit_path = run_dir / "junit.xml"
    xml.write(str(junit_path), pretty=True)
    return junit_path


def generate_report(run_dir: Path) -> Path:
    """Render junit.xml → report.html using Jinja2 template, return path."""
    import yaml
    from jinja2 import Environment, FileSystemLoader

    junit_path = run_dir / "junit.xml"
    report_path = run_dir / "report.html"

    meta: dict = {}
    meta_path = run_dir / "meta.yaml"
    if meta_path.exists():
        try:
            meta = yaml.safe_load(meta_path.read_text()) or {}
        except yaml.YAMLError:
            meta = {}

    xml = JUnitXml.fromfile(str(junit_path))

    suites = []
    for suite in xml:
        cases = []
        for case in suite:
            result = None
            if case.result:
                result = {
                    "status": type(case.result[0]).__name__,
                    "message": case.result[0].message or "",
                }
            cases.append(
                {
                    "name": case.name,
                    "classname": case.classname,
                    "time": case.time,
                    "result": result,
                }
            )

        suites.append(
            {
                "name": suite.name,
                "tests": suite.tests,
                "failures": suite.failures,
                "errors": suite.errors,
                "time": suite.time,
                "properties": {p.name: p.value for p in suite.properties()},
                "cases": cases,
            }
        )

    total_tests = sum(s["tests"] for s in suites)
    total_failures = sum(s["failures"] for s in suites)
    total_errors = sum(s["errors"] for s in suites)

    tmpl_dir = Path(__file__).parent / "templates"
    env = Environment(loader=FileSystemLoader(str(tmpl_dir)), autoescape=True)
    template = env.get_template("report.html.j2")

    html = template.render(
        suites=suites,
        total_tests=total_tests,
        total_failures=total_failures,
        total_errors=total_errors,
        run_dir=str(run_dir),
        meta=meta,
    )
    report_path.write_text(html, encoding="utf-8")
    return report_path
