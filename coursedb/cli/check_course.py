"""Check a course directory for info-file errors and warnings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import anyio
import typer
from rich.console import Console
from rich.table import Table

from coursedb.core.config import SyncConfig, resolve_sync_config
from coursedb.sync import get_paths_with_missing_uuids, iter_issues, load_full_course

app = typer.Typer(help="Lint a course directory's JSON info files.")
console = Console()


def _setup(config_path: Optional[Path], course_dir: Optional[Path]) -> tuple[SyncConfig, Path]:
    try:
        config = resolve_sync_config(config_path)
    except (OSError, ValueError) as exc:
        console.print(f"[red]Unable to load config: {exc}[/red]")
        raise typer.Exit(code=2) from exc
    logging.basicConfig(level=getattr(logging, config.log_level), format="%(levelname)s %(name)s: %(message)s")
    resolved = course_dir or config.course_dir
    if resolved is None:
        console.print("[red]No course directory given and none configured.[/red]")
        raise typer.Exit(code=2)
    if not resolved.is_dir():
        console.print(f"[red]Course directory {resolved} does not exist.[/red]")
        raise typer.Exit(code=2)
    return config, resolved


@app.command()
def validate(
    course_dir: Optional[Path] = typer.Argument(None, file_okay=False, help="Course root (defaults to config course_dir)."),
    config_path: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False, help="YAML config file."),
    fail_on_warning: bool = typer.Option(
        False, "--fail-on-warning", help="Exit non-zero when warnings are present."
    ),
    hide_warnings: bool = typer.Option(False, "--hide-warnings", help="Only list errors."),
) -> None:
    config, course_dir = _setup(config_path, course_dir)
    fail_on_warning = fail_on_warning or config.fail_on_warning
    show_warnings = config.show_warnings and not hide_warnings

    course_data = anyio.run(load_full_course, course_dir)

    table = Table(title=f"Course check: {course_dir}", show_header=True)
    table.add_column("Severity", justify="center")
    table.add_column("File")
    table.add_column("Message")
    errors = warnings = 0
    for path, severity, message in iter_issues(course_data):
        if severity == "error":
            errors += 1
            table.add_row(severity, path, message, style="bold red")
        else:
            warnings += 1
            if show_warnings:
                table.add_row(severity, path, message, style="yellow")
    if errors or (warnings and show_warnings):
        console.print(table)

    if errors or (fail_on_warning and warnings):
        console.print(f"[red]{errors} error(s), {warnings} warning(s)[/red]")
        raise typer.Exit(code=1)

    console.print("[green]Course looks good![/green]")


@app.command("missing-uuids")
def missing_uuids(
    course_dir: Optional[Path] = typer.Argument(None, file_okay=False, help="Course root (defaults to config course_dir)."),
    config_path: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False, help="YAML config file."),
) -> None:
    """List info files that have no usable UUID."""
    _, course_dir = _setup(config_path, course_dir)
    course_data = anyio.run(load_full_course, course_dir)
    missing = get_paths_with_missing_uuids(course_data)
    if not missing:
        console.print("[green]Every info file has a UUID.[/green]")
        return

    table = Table(title="Info files missing a UUID", show_header=True)
    table.add_column("File")
    table.add_column("Errors")
    for entry in missing:
        table.add_row(entry.path, "\n".join(entry.errors), style="bold red")
    console.print(table)
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
