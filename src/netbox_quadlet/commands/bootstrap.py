"""Bootstrap command for the NetBox Quadlet stack."""

from __future__ import annotations

import sys

import click

from ..bootstrap import Bootstrapper
from ..config import DEFAULT_BIND_ADDRESS
from ..errors import EXIT_FAILURE, EXIT_INTERRUPTED, NetboxQuadletError
from ..formatters import ProgressReporter, print_connection_json, print_connection_text
from .base import CONTEXT_SETTINGS, StrictCommand


@click.command(cls=StrictCommand, context_settings=CONTEXT_SETTINGS)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output connection details as JSON to stdout (progress is sent to stderr).",
)
@click.option(
    "--bind",
    "bind_address",
    default=DEFAULT_BIND_ADDRESS,
    show_default=True,
    metavar="ADDRESS",
    help="Bind address for published ports. Use 127.0.0.1 to restrict to localhost only.",
)
@click.option(
    "--keep-data",
    is_flag=True,
    help="Preserve volumes (DB, Redis, media) and secrets from a previous run "
    "for faster startup (skips migrations).",
)
@click.pass_context
def bootstrap(ctx: click.Context, json_output: bool, bind_address: str, keep_data: bool) -> None:
    """Bootstrap a fresh NetBox instance for testing.

    Tears down any previous stack, generates secrets, installs the Quadlet
    units, starts the pod, waits for every service to become healthy and
    creates the admin user.

    Examples:

        # Text summary, ports published on all interfaces
        netbox-quadlet bootstrap

        # Machine-readable, localhost only
        netbox-quadlet bootstrap --json --bind=127.0.0.1
    """
    reporter = ProgressReporter(json_mode=json_output)
    bootstrapper = Bootstrapper(ctx.obj["config"], runner=ctx.obj.get("runner"), reporter=reporter)

    try:
        result = bootstrapper.run(bind_address, keep_data=keep_data)
    except NetboxQuadletError as e:
        reporter.error(str(e))
        sys.exit(EXIT_FAILURE)
    except KeyboardInterrupt:
        bootstrapper.abort()
        reporter.error("Bootstrap interrupted. Volumes and generated files were kept.")
        sys.exit(EXIT_INTERRUPTED)

    if json_output:
        print_connection_json(result.descriptor)
    else:
        print_connection_text(result.descriptor)
