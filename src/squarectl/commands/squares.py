"""Square commands: list, create, clear, grid."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from squarectl.commands._context import AppContext


@click.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List every square in creation order."""
    app.emit(app.service.list_squares())


@click.command()
@click.option(
    "-n",
    "--count",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of squares to create.",
)
@click.pass_obj
def create(app: AppContext, count: int) -> None:
    """Create squares at the next spiral positions with random colors."""
    if count == 1:
        app.emit(app.service.create_square())
    else:
        app.emit(app.service.create_squares(count))


@click.command()
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_obj
def clear(app: AppContext, yes: bool) -> None:
    """Remove all squares and restart the spiral."""
    interactive = not yes and not app.settings.json_output and sys.stdin.isatty()
    if interactive and not click.confirm("Remove all squares?", default=False):
        raise click.Abort
    app.emit(app.service.clear_squares())


@click.command()
@click.pass_obj
def grid(app: AppContext) -> None:
    """Draw the squares on their grid."""
    app.emit(app.service.list_squares(), view="grid")
