"""CLI commands for exercising the skill locally."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from principles_skill.bootstrap import build_default_service_container
from principles_skill.core.corpus import DEFAULT_CORPUS
from principles_skill.core.exceptions import SkillIdMismatchError
from principles_skill.entrypoint import invoke

app = typer.Typer(name="skill", help="Invoke the skill and inspect its corpus")
console = Console()

SUMMARY_WIDTH = 60


@app.command("invoke")
def invoke_envelope(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Request envelope JSON"),
) -> None:
    """Dispatch a request envelope file and print the response envelope."""
    try:
        event = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] {path} is not valid JSON: {e}")
        raise typer.Exit(1) from e

    try:
        result = invoke(event, build_default_service_container())
    except (ValueError, SkillIdMismatchError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    console.print_json(json.dumps(result))


@app.command("list")
def list_principles() -> None:
    """List the principles in serving order."""
    table = Table(title="Principles")
    table.add_column("Index", style="cyan")
    table.add_column("Name")
    table.add_column("Summary")
    for index, principle in enumerate(DEFAULT_CORPUS):
        summary = principle.simple
        if len(summary) > SUMMARY_WIDTH:
            summary = summary[: SUMMARY_WIDTH - 3] + "..."
        table.add_row(str(index), principle.name, summary)

    console.print(table)
