"""CLI commands for the principles skill."""

import typer

from principles_skill.cli.skill import app as skill_app

main_app = typer.Typer(
    name="principles",
    help="Principles skill CLI",
    no_args_is_help=True,
)
main_app.add_typer(skill_app, name="skill")


def main() -> None:
    """Entry point for the CLI."""
    main_app()


__all__ = ["main", "main_app"]
