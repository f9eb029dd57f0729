"""AppContext: state shared by every subcommand through ``@click.pass_obj``.

It holds the resolved settings, opens the workspace on first use and owns
result printing, so commands stay one line of ``app.emit(service.op(...))``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from staffboard.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from staffboard.config.settings import StaffboardSettings
    from staffboard.infrastructure.workspace import Workspace
    from staffboard.services.result import ServiceResult


class AppContext:
    """Settings plus a lazily opened :class:`Workspace`.

    ``--help``, ``--version`` and ``--examples`` never reach the workspace,
    so they work without a seed file or database.
    """

    def __init__(self, settings: StaffboardSettings) -> None:
        from staffboard.config.logging import configure_logging

        self.settings = settings
        self._workspace: Workspace | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def workspace(self) -> Workspace:
        if self._workspace is None:
            from staffboard.infrastructure.workspace import Workspace

            workspace = Workspace(self.settings)
            workspace.init_event_bus()
            self._workspace = workspace
        return self._workspace

    @property
    def output_settings(self) -> OutputSettings:
        s = self.settings
        return OutputSettings(json_output=s.json_output, quiet=s.quiet, verbose=s.verbose)

    def render(self, result: ServiceResult) -> str:
        return format_result(result, settings=self.output_settings)

    def echo(self, result: ServiceResult) -> None:
        """Print *result* and carry on; used between shell lines.

        Successes go to stdout with warnings on stderr (JSON output already
        carries them). Failures go to stderr.
        """
        text = self.render(result)
        if not result.ok:
            click.echo(text, err=True)
            return
        click.echo(text)
        if not self.settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; a failure ends the process with exit code 1."""
        self.echo(result)
        if not result.ok:
            raise SystemExit(1)
