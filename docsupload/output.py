"""Console output for docsupload commands."""

import json
from typing import Any

import click
from rich.console import Console
from rich.table import Table


class OutputFormatter:
    """Writes progress and result lines for the CLI.

    In quiet mode only warnings and errors are written. In JSON mode
    human-readable lines are suppressed and ``output_json`` prints the
    machine-readable result; warnings and errors go to stderr.
    """

    def __init__(self, json_output: bool = False, quiet: bool = False):
        self.json_output = json_output
        self.quiet = quiet

    @property
    def _verbose(self) -> bool:
        return not self.quiet and not self.json_output

    def print(self, message: str) -> None:
        """Print a plain line."""
        if self._verbose:
            click.echo(message)

    def info(self, message: str) -> None:
        """Print an informational line."""
        if self._verbose:
            click.echo(message)

    def progress_message(self, message: str) -> None:
        """Print a progress line (e.g. the file currently being uploaded)."""
        if self._verbose:
            click.secho(message, fg="cyan")

    def success(self, message: str) -> None:
        if self._verbose:
            click.secho(message, fg="green")

    def warning(self, message: str) -> None:
        if self.json_output:
            click.secho(message, fg="yellow", err=True)
        else:
            click.secho(message, fg="yellow")

    def error(self, message: str) -> None:
        click.secho(message, fg="red", err=True)

    def output_json(self, data: Any) -> None:
        """Print data as JSON."""
        click.echo(json.dumps(data, indent=2))

    def print_summary(self, title: str, items: list[tuple[str, str]]) -> None:
        """Print a two-column summary table.

        Args:
            title: Table title
            items: List of (label, value) rows
        """
        if self.json_output:
            self.output_json({label: value for label, value in items})
            return
        if self.quiet:
            return
        table = Table(title=title, show_header=False, title_justify="left")
        table.add_column("Field", style="bold")
        table.add_column("Value")
        for label, value in items:
            table.add_row(label, value)
        Console().print(table)
