"""Secret generation for the NetBox stack.

One value per credential slot, drawn from an alphanumeric alphabet so that it
can be dropped into env files, shell commands and URLs without escaping.
"""

from __future__ import annotations

import os
import secrets
import string
from dataclasses import asdict, dataclass, fields
from pathlib import Path

import yaml

from ..errors import TemplateError
from ..shared.logging import get_logger

logger = get_logger(__name__)

ALPHABET = string.ascii_letters + string.digits

# Slot name -> length
SECRET_LENGTHS = {
    "db_password": 24,
    "redis_password": 24,
    "redis_cache_password": 24,
    "secret_key": 60,
    "api_token_pepper": 50,
    "admin_password": 16,
}

# Slots written to secrets.yaml and reused with --keep-data. The admin
# password is reset on every run.
PERSISTED_SLOTS = (
    "db_password",
    "redis_password",
    "redis_cache_password",
    "secret_key",
    "api_token_pepper",
)


def generate_secret(length: int) -> str:
    """Return a random alphanumeric string of *length* characters."""
    if length <= 0:
        raise ValueError(f"Secret length must be positive, got {length}")
    return "".join(secrets.choice(ALPHABET) for _ in range(length))


@dataclass(frozen=True)
class StackSecrets:
    """Credentials for one bootstrap run."""

    db_password: str
    redis_password: str
    redis_cache_password: str
    secret_key: str
    api_token_pepper: str
    admin_password: str

    @classmethod
    def generate(cls) -> StackSecrets:
        """Generate a fresh value for every slot."""
        return cls(**{name: generate_secret(length) for name, length in SECRET_LENGTHS.items()})

    def bindings(self) -> dict[str, str]:
        """Placeholder name -> value map for template resolution."""
        return {name.upper(): value for name, value in asdict(self).items()}

    def save(self, path: Path) -> Path:
        """Write the persisted slots to *path* (mode 0600)."""
        data = {name: getattr(self, name) for name in PERSISTED_SLOTS}
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        except OSError as exc:
            raise TemplateError(f"Cannot write secrets file {path}: {exc}") from exc
        return path

    @classmethod
    def load(cls, path: Path) -> StackSecrets | None:
        """Load persisted secrets from *path*.

        Returns None when the file is missing or incomplete. A fresh admin
        password is always generated.
        """
        if not path.exists():
            return None
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise TemplateError(f"Cannot read secrets file {path}: {exc}") from exc

        if not isinstance(data, dict) or any(
            not isinstance(data.get(name), str) or not data.get(name)
            for name in PERSISTED_SLOTS
        ):
            logger.warning("secrets.incomplete", path=str(path))
            return None

        values = {f.name: data.get(f.name, "") for f in fields(cls)}
        values["admin_password"] = generate_secret(SECRET_LENGTHS["admin_password"])
        return cls(**values)
