"""CLI main entry point."""

import json
import sys
from pathlib import Path

import click

from .commands import bootstrap, teardown
from .commands.base import CONTEXT_SETTINGS, StrictCommand, StrictGroup
from .config import load_config
from .errors import EXIT_FAILURE, ConfigError
from .formatters import ProgressReporter, print_config_yaml
from .shared.logging import configure_logging, level_for_verbosity


@click.group(cls=StrictGroup, context_settings=CONTEXT_SETTINGS)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file path (default: ~/.netbox-quadlet/config.yaml)",
)
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v info, -vv debug)")
@click.version_option(package_name="netbox-quadlet", prog_name="netbox-quadlet")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: int) -> None:
    """Bootstrap and tear down a NetBox test instance on Podman Quadlet."""
    ctx.ensure_object(dict)
    configure_logging(level_for_verbosity(verbose))
    try:
        ctx.obj["config"] = load_config(config_path)
    except ConfigError as e:
        ProgressReporter().error(str(e))
        sys.exit(EXIT_FAILURE)


cli.add_command(bootstrap)
cli.add_command(teardown)


@cli.command("config", cls=StrictCommand, context_settings=CONTEXT_SETTINGS)
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def show_config(ctx: click.Context, json_output: bool) -> None:
    """Show the effective configuration and where each value came from."""
    config = ctx.obj["config"]
    values = config.as_dict()
    sources = {key: config.get_source(key) for key in values}

    if json_output:
        click.echo(json.dumps({"values": values, "sources": sources}, indent=2))
        return

    click.echo("NetBox Quadlet Configuration\n")
    print_config_yaml(values, section="values")
    changed = {key: source for key, source in sources.items() if source != "default"}
    if changed:
        print_config_yaml(changed, section="sources")


def main() -> None:
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
