"""Shared modules for netbox-quadlet.

- Logging setup (structlog)
- Default paths
- External command execution
"""

from .logging import configure_logging, get_logger, level_for_verbosity
from .paths import ASSETS_DIR, BASE_DIR, CONFIG_FILE, GENERATED_DIR, QUADLET_DIR
from .process import CommandRunner

__all__ = [
    # Paths
    "ASSETS_DIR",
    "BASE_DIR",
    "CONFIG_FILE",
    "GENERATED_DIR",
    "QUADLET_DIR",
    # Logging
    "configure_logging",
    "get_logger",
    "level_for_verbosity",
    # Processes
    "CommandRunner",
]
