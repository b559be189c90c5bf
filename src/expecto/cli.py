from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="expecto", help="Run describe/it/expect test scripts")

EXAMPLE_CONFIG = """\
test:
  include: ["*.test.py", "*.spec.py"]
  exclude: ["__pycache__", ".*", "node_modules", "venv"]
  entry_point: tests

report:
  output_dir: test-results
  html: true
"""

EXAMPLE_SCRIPT = '''\
"""Example test script: expecto calls tests(t) with a fresh test context."""


def tests(t):
    describe, it, expect = t

    def arithmetic():
        it("adds numbers", lambda: expect(1 + 2).to_be(3))
        it("compares structures", lambda: expect({"a": [1, 2]}).to_equal({"a": [1, 2]}))
        it("negates", lambda: expect(0).not_.to_be_truthy())

    def errors():
        def divide_by_zero():
            return 1 / 0

        it("detects raised errors", lambda: expect(divide_by_zero).to_throw())

    describe("arithmetic", arithmetic)
    describe("errors", errors)
'''


@app.command()
def run(
    paths: list[Path] | None = typer.Argument(
        None, help="Test files or directories (default: current directory)"
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to expecto.yaml"
    ),
    output_dir: Path | None = typer.Option(
        None, help="Output directory for run results (overrides config)"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show durations and debug output"
    ),
    no_report: bool = typer.Option(
        False, "--no-report", help="Do not render report.html"
    ),
):
    """Discover and run test scripts."""
    import yaml
    from pydantic import ValidationError

    from expecto.config import load_config, load_or_default
    from expecto.discovery import find_test_files
    from expecto.reporting.console import (
        print_file_results,
        print_header,
        print_no_files,
        print_summary,
    )
    from expecto.runner import Runner

    try:
        if config is not None:
            if not config.exists():
                typer.echo(f"Error: config file not found: {config}", err=True)
                raise typer.Exit(1)
            eval_config = load_config(config)
        else:
            eval_config = load_or_default()
    except (ValidationError, ValueError, yaml.YAMLError) as e:
        typer.echo(f"Error: invalid config: {e}", err=True)
        raise typer.Exit(1)

    paths = paths or []
    missing = [p for p in paths if not p.exists()]
    if missing:
        for p in missing:
            typer.echo(f"Error: path not found: {p}", err=True)
        raise typer.Exit(1)

    test_files = find_test_files(
        paths, eval_config.test.include, eval_config.test.exclude
    )
    if not test_files:
        print_no_files()
        return

    print_header(len(test_files))

    runner = Runner(config=eval_config, output_dir=output_dir, verbose=verbose)
    result = runner.execute(test_files)

    for file_result in result.files:
        print_file_results(file_result, verbose=verbose)
    print_summary(result.summary)

    typer.echo(f"Results: {result.run_dir}")
    if eval_config.report.html and not no_report:
        from expecto.reporting.junit import generate_report

        report_path = generate_report(result.run_dir)
        typer.echo(f"Report: {report_path}")
    if not verbose:
        typer.echo(f"Debug log: {result.run_dir / 'debug.log'}")

    if not result.summary.success:
        raise typer.Exit(1)


@app.command()
def report(
    run_dir: str = typer.Argument(help="Path to run output directory"),
    open_report: bool = typer.Option(
        False, "--open", help="Open report.html in browser after generating"
    ),
):
    """Regenerate HTML report from a previous run."""
    from expecto.reporting.junit import generate_report

    run_path = Path(run_dir)
    if not run_path.exists() or not (run_path / "junit.xml").exists():
        typer.echo(f"Error: not a valid run directory: {run_dir}", err=True)
        raise typer.Exit(1)

    report_path = generate_report(run_path)
    typer.echo(f"Report generated: {report_path}")

    if open_report:
        import webbrowser

        webbrowser.open(report_path.resolve().as_uri())


@app.command()
def init(
    dir: str = typer.Option(".", "--dir", help="Directory to initialize"),
):
    """Write an example expecto.yaml and test script."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    config_path = project_dir / "expecto.yaml"
    if config_path.exists():
        typer.echo(f"expecto.yaml already exists in {dir}, skipping.")
    else:
        config_path.write_text(EXAMPLE_CONFIG)
        typer.echo("  expecto.yaml          - run configuration")

    script_path = project_dir / "example.test.py"
    if script_path.exists():
        typer.echo(f"example.test.py already exists in {dir}, skipping.")
    else:
        script_path.write_text(EXAMPLE_SCRIPT)
        typer.echo("  example.test.py       - example test script")
