"""CLI output formatting helpers.

Results go to stdout. Progress lines go to stdout in text mode and to stderr
in JSON mode, so that ``--json`` output can be parsed as-is.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click
import yaml
from rich.console import Console

if TYPE_CHECKING:
    from .bootstrap.descriptor import ConnectionDescriptor
    from .bootstrap.teardown import TeardownReport


class ProgressReporter:
    """Print ``==>`` progress lines."""

    def __init__(self, json_mode: bool = False):
        """Initialize reporter.

        Args:
            json_mode: Send every progress line to stderr.
        """
        self.json_mode = json_mode

    def _echo(self, message: str, **style: Any) -> None:
        click.secho(f"==> {message}", err=self.json_mode, **style)

    def info(self, message: str) -> None:
        self._echo(message, bold=True)

    def ok(self, message: str) -> None:
        self._echo(message, fg="green")

    def warn(self, message: str) -> None:
        self._echo(message, fg="yellow")

    def error(self, message: str) -> None:
        click.secho(f"ERROR: {message}", err=True, fg="red")


def print_connection_json(descriptor: ConnectionDescriptor) -> None:
    """Print the connection details as a single JSON object on stdout."""
    click.echo(json.dumps(descriptor.to_dict(), indent=2))


def print_connection_text(descriptor: ConnectionDescriptor) -> None:
    """Print a short human summary (URL and credentials) on stdout."""
    console = Console(highlight=False)
    rule = "=" * 40
    console.print()
    console.print(f"[bold green]{rule}[/]")
    console.print("[bold green]  NetBox is ready![/]")
    console.print(f"[bold green]{rule}[/]")
    console.print()
    console.print(f"  URL:      [bold]{descriptor.url}[/]")
    console.print(f"  Username: [bold]{descriptor.username}[/]")
    console.print(f"  Password: [bold]{descriptor.password}[/]")
    console.print()


def print_teardown_summary(report: TeardownReport, reporter: ProgressReporter) -> None:
    """Print one line per failed teardown step and an overall count."""
    counts: dict[str, int] = {}
    for result in report.results:
        counts[result.outcome.value] = counts.get(result.outcome.value, 0) + 1

    for failure in report.failures:
        reporter.warn(f"Could not remove {failure.kind} {failure.name}: {failure.detail}")

    summary = ", ".join(f"{count} {outcome}" for outcome, count in sorted(counts.items()))
    reporter.ok(f"Teardown complete ({summary}).")


def print_config_yaml(data: dict[str, Any], section: str | None = None) -> None:
    """Print config as YAML.

    Args:
        data: Configuration data
        section: Optional section name for header
    """
    if section:
        click.echo(f"{section}:")
        yaml_str = yaml.dump(data, default_flow_style=False, sort_keys=False)
        for line in yaml_str.splitlines():
            click.echo(f"  {line}")
    else:
        click.echo(yaml.dump(data, default_flow_style=False, sort_keys=False))
