"""Click command classes shared by all subcommands."""

from __future__ import annotations

import click

from ..errors import EXIT_FAILURE

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


class StrictUsageMixin:
    """Report usage errors (unknown option, bad value) with exit code 1."""

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as exc:
            exc.exit_code = EXIT_FAILURE
            raise


class StrictCommand(StrictUsageMixin, click.Command):
    """Command with exit code 1 on usage errors."""


class StrictGroup(StrictUsageMixin, click.Group):
    """Group with exit code 1 on usage errors."""

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as exc:
            exc.exit_code = EXIT_FAILURE
            raise
