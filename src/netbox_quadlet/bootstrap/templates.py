"""Template resolution for env files and the NetBox configuration directory.

Templates carry ``{{NAME}}`` placeholders. Resolution is plain substring
replacement: bound names are replaced everywhere, unbound ones are left as
they are. Source templates are never modified.
"""

from __future__ import annotations

import re
import shutil
from collections.abc import Mapping
from pathlib import Path

from ..config import StackConfig
from ..errors import TemplateError
from ..shared.logging import get_logger

logger = get_logger(__name__)

PLACEHOLDER_RE = re.compile(r"\{\{([A-Z][A-Z0-9_]*)\}\}")


def resolve_text(text: str, bindings: Mapping[str, str]) -> str:
    """Replace every ``{{KEY}}`` in *text* with ``bindings[KEY]``."""
    for key, value in bindings.items():
        text = text.replace(f"{{{{{key}}}}}", value)
    return text


def find_placeholders(text: str) -> list[str]:
    """Return the distinct placeholder names still present in *text*."""
    return sorted(set(PLACEHOLDER_RE.findall(text)))


def resolve_file(src: Path, dst: Path, bindings: Mapping[str, str]) -> Path:
    """Resolve the template at *src* into *dst*.

    Raises:
        TemplateError: If *src* cannot be read or *dst* cannot be written.
    """
    try:
        text = src.read_text()
    except OSError as exc:
        raise TemplateError(f"Cannot read template {src}: {exc}") from exc

    resolved = resolve_text(text, bindings)
    leftover = find_placeholders(resolved)
    if leftover:
        logger.warning("template.unresolved", path=str(dst), placeholders=leftover)

    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        dst.write_text(resolved)
        shutil.copymode(src, dst)
    except OSError as exc:
        raise TemplateError(f"Cannot write {dst}: {exc}") from exc
    return dst


def copy_tree(src: Path, dst: Path) -> Path:
    """Copy the directory *src* verbatim into *dst*."""
    if not src.is_dir():
        raise TemplateError(f"Template directory not found: {src}")
    try:
        shutil.copytree(src, dst, dirs_exist_ok=True)
    except (OSError, shutil.Error) as exc:
        raise TemplateError(f"Cannot copy {src} to {dst}: {exc}") from exc
    return dst


class TemplateResolver:
    """Write resolved copies of the stack templates into the generated dir."""

    def __init__(self, config: StackConfig):
        self.config = config

    @property
    def env_dir(self) -> Path:
        return self.config.generated_dir / "env"

    @property
    def configuration_dir(self) -> Path:
        return self.config.generated_dir / self.config.configuration_dir

    def reset(self) -> None:
        """Discard the generated directory and recreate it empty."""
        generated = self.config.generated_dir
        try:
            if generated.exists():
                shutil.rmtree(generated)
            self.env_dir.mkdir(parents=True)
            self.configuration_dir.mkdir(parents=True)
        except OSError as exc:
            raise TemplateError(f"Cannot recreate {generated}: {exc}") from exc

    def resolve_all(self, bindings: Mapping[str, str]) -> list[Path]:
        """Recreate the generated directory and resolve every template.

        Returns:
            Paths of the resolved artifacts (env files, then configuration
            files that carried placeholders).
        """
        assets = self.config.assets_dir
        self.reset()

        resolved: list[Path] = []
        for name in self.config.env_files:
            resolved.append(resolve_file(assets / "env" / name, self.env_dir / name, bindings))

        source_config = assets / self.config.configuration_dir
        copy_tree(source_config, self.configuration_dir)
        for name in self.config.configuration_templates:
            resolved.append(
                resolve_file(source_config / name, self.configuration_dir / name, bindings)
            )

        logger.info("templates.resolved", count=len(resolved), path=str(self.config.generated_dir))
        return resolved
