"""Quadlet unit installation.

Volume and network units are copied as they are. The pod unit gets its bind
address, and container units get their ``EnvironmentFile=`` and configuration
bind-mount paths pointed at the generated directory.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from ..config import StackConfig
from ..errors import TemplateError
from ..shared.logging import get_logger
from .templates import resolve_file

logger = get_logger(__name__)


class UnitInstaller:
    """Install the stack's Quadlet units into the user's systemd search path."""

    def __init__(self, config: StackConfig):
        self.config = config

    @property
    def pod_file(self) -> str:
        return f"{self.config.pod_name}.pod"

    @property
    def network_file(self) -> str:
        return f"{self.config.network_name}.network"

    def rewrite_container(self, text: str) -> str:
        """Point relative env-file and configuration paths at the generated dir."""
        generated = self.config.generated_dir.absolute()
        config_dir = self.config.configuration_dir
        text = text.replace("EnvironmentFile=env/", f"EnvironmentFile={generated}/env/")
        return text.replace(f"Volume=./{config_dir}:", f"Volume={generated}/{config_dir}:")

    def install(self, bind_address: str) -> list[Path]:
        """Write all unit files into the Quadlet directory.

        Args:
            bind_address: Address the pod publishes its ports on.

        Returns:
            Paths of the installed unit files.

        Raises:
            TemplateError: If a unit source is missing or a file cannot be
                written.
        """
        source = self.config.assets_dir
        dest = self.config.quadlet_dir
        try:
            dest.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise TemplateError(f"Cannot create {dest}: {exc}") from exc

        installed: list[Path] = []

        static = sorted(source.glob("*.volume")) + [source / self.network_file]
        for path in static:
            installed.append(self._copy(path, dest / path.name))

        installed.append(
            resolve_file(
                source / self.pod_file,
                dest / self.pod_file,
                {"BIND_ADDRESS": bind_address},
            )
        )

        containers = sorted(source.glob("*.container"))
        if not containers:
            raise TemplateError(f"No container units found in {source}")
        for path in containers:
            target = dest / path.name
            try:
                target.write_text(self.rewrite_container(path.read_text()))
            except OSError as exc:
                raise TemplateError(f"Cannot install {path.name}: {exc}") from exc
            installed.append(target)

        logger.info("units.installed", count=len(installed), path=str(dest))
        return installed

    def _copy(self, src: Path, dst: Path) -> Path:
        try:
            shutil.copyfile(src, dst)
        except OSError as exc:
            raise TemplateError(f"Cannot install {src.name}: {exc}") from exc
        return dst
