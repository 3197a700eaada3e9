"""Subcommand modules for squarectl.

Provides register_commands() which uses deferred imports to keep
``squarectl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the square commands on the root CLI group."""
    from squarectl.commands.squares import clear, create, grid, list_cmd

    cli.add_command(list_cmd)
    cli.add_command(create)
    cli.add_command(clear)
    cli.add_command(grid)
