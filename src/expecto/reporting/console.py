"""Terminal output for a test run."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

if TYPE_CHECKING:
    from expecto.metrics import RunSummary
    from expecto.runner import FileResult

RULE = "─" * 40


def print_header(file_count: int) -> None:
    count = typer.style(str(file_count), fg=typer.colors.CYAN)
    typer.echo(f"Found {count} test file(s) to run")
    typer.secho(RULE, dim=True)


def print_no_files() -> None:
    typer.secho("No test files found.", fg=typer.colors.YELLOW, bold=True)


def print_file_results(file_result: FileResult, verbose: bool = False) -> None:
    name = typer.style(str(file_result.path), fg=typer.colors.CYAN, bold=True)
    typer.echo(f"Running tests in {name}:")

    for result in file_result.results:
        if result.passed:
            check = typer.style("✓", fg=typer.colors.GREEN)
            duration = f" ({result.duration * 1_000_000:.0f}μs)" if verbose else ""
            typer.echo(f"  {check} {result.name}{duration}")
        else:
            cross = typer.style("✗", fg=typer.colors.RED)
            typer.echo(f"  {cross} {result.name}")
            if result.error:
                typer.secho(f"    {result.error}", fg=typer.colors.RED, dim=True)

    if file_result.error is not None:
        typer.secho(
            f"  ✗ Failed to run test file {file_result.path}: {file_result.error}",
            fg=typer.colors.RED,
        )


def print_summary(summary: RunSummary) -> None:
    typer.echo()
    typer.secho(RULE, dim=True)
    if summary.success:
        mark = typer.style("✓", fg=typer.colors.GREEN, bold=True)
    else:
        mark = typer.style("✗", fg=typer.colors.RED, bold=True)
    typer.echo(f"{mark} {typer.style('Test Summary', bold=True)}:")

    typer.echo(f"   {typer.style('✓', fg=typer.colors.GREEN, bold=True)} {summary.passed} passed")
    if summary.failed > 0:
        typer.echo(f"   {typer.style('✗', fg=typer.colors.RED, bold=True)} {summary.failed} failed")
    typer.echo(f"   {typer.style('Σ', fg=typer.colors.CYAN, bold=True)} {summary.total} total")

    if summary.total > 0:
        typer.secho(f"   {summary.duration * 1000:.0f}ms", dim=True)
