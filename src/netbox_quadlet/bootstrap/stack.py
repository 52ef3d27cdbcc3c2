"""Stack lifecycle through the user's systemd instance."""

from __future__ import annotations

import subprocess

from ..config import StackConfig
from ..shared.logging import get_logger
from ..shared.process import CommandRunner

logger = get_logger(__name__)


class StackController:
    """Start the NetBox stack via ``systemctl --user``."""

    def __init__(self, config: StackConfig, runner: CommandRunner | None = None):
        self.config = config
        self.runner = runner or CommandRunner()

    def systemctl(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        return self.runner.run([self.config.systemctl_bin, "--user", *args], check=check)

    def daemon_reload(self) -> None:
        """Make systemd pick up new or removed Quadlet units."""
        self.systemctl("daemon-reload")

    def start(self) -> list[str]:
        """Reload units, then start the network and the pod, in that order.

        The pod unit Quadlet generates does not depend on the network unit,
        so the network is started explicitly first.

        Returns:
            Units started, in order.

        Raises:
            CommandError: On the first failing systemctl call.
        """
        self.daemon_reload()
        started = []
        for unit in (self.config.network_unit, self.config.pod_unit):
            self.systemctl("start", unit)
            logger.info("stack.unit_started", unit=unit)
            started.append(unit)
        return started
