"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy PlacementService construction and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from squarectl.config.logging import configure_logging
from squarectl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from squarectl.config.settings import SquareSettings
    from squarectl.services.placement import PlacementService
    from squarectl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The store and service are built on first use so ``--help`` and
    ``--version`` never touch the data directory.
    """

    def __init__(self, settings: SquareSettings) -> None:
        self.settings = settings
        self._service: PlacementService | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> PlacementService:
        """The placement service (created lazily on first access)."""
        if self._service is None:
            from squarectl.infrastructure.store import SquareStore
            from squarectl.services.placement import PlacementService

            store = SquareStore(self.settings.data_dir, self.settings.store.filename)
            self._service = PlacementService(store, lock_timeout=self.settings.store.lock_timeout)
        return self._service

    def emit(self, result: ServiceResult, *, view: str | None = None) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout, returns normally. Warnings go to stderr.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings, view=view)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
