"""Teardown command for the NetBox Quadlet stack."""

from __future__ import annotations

import click

from ..bootstrap import TeardownController
from ..formatters import ProgressReporter, print_teardown_summary
from .base import CONTEXT_SETTINGS, StrictCommand


@click.command(cls=StrictCommand, context_settings=CONTEXT_SETTINGS)
@click.option(
    "--keep-data",
    is_flag=True,
    help="Keep named volumes and generated files (secrets, env files).",
)
@click.pass_context
def teardown(ctx: click.Context, keep_data: bool) -> None:
    """Stop and remove the NetBox stack.

    Safe to run when nothing is installed, and safe to run repeatedly.
    """
    reporter = ProgressReporter()
    reporter.info("Tearing down NetBox stack...")
    report = TeardownController(ctx.obj["config"], ctx.obj.get("runner")).run(keep_data=keep_data)
    print_teardown_summary(report, reporter)
