"""CLI subcommands."""

from .bootstrap import bootstrap
from .teardown import teardown

__all__ = ["bootstrap", "teardown"]
