"""Stack configuration.

Every path, unit name and timeout used by the bootstrap pipeline lives on
:class:`StackConfig` and is passed explicitly to each component. Values can
be overridden in ~/.netbox-quadlet/config.yaml or through environment
variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError
from .shared.paths import ASSETS_DIR, CONFIG_FILE, GENERATED_DIR, QUADLET_DIR

DEFAULT_BIND_ADDRESS = "0.0.0.0"

# Environment variable mappings
ENV_VARS = {
    "assets_dir": "NETBOX_QUADLET_ASSETS_DIR",
    "generated_dir": "NETBOX_QUADLET_GENERATED_DIR",
    "quadlet_dir": "NETBOX_QUADLET_QUADLET_DIR",
    "podman_bin": "NETBOX_QUADLET_PODMAN",
    "systemctl_bin": "NETBOX_QUADLET_SYSTEMCTL",
}

PATH_KEYS = ("assets_dir", "generated_dir", "quadlet_dir")


@dataclass(frozen=True)
class ServiceCheck:
    """A container whose health check gates the bootstrap."""

    container: str
    timeout: float


@dataclass
class StackConfig:
    """Configuration for one NetBox Quadlet stack."""

    assets_dir: Path = ASSETS_DIR
    generated_dir: Path = GENERATED_DIR
    quadlet_dir: Path = QUADLET_DIR

    # Names
    prefix: str = "netbox"
    pod_name: str = "netbox"
    network_name: str = "netbox"
    app_container: str = "netbox-netbox"
    containers: tuple[str, ...] = (
        "netbox-netbox",
        "netbox-worker",
        "netbox-postgres",
        "netbox-redis",
        "netbox-redis-cache",
    )
    volumes: tuple[str, ...] = (
        "netbox-postgres-data",
        "netbox-media-files",
        "netbox-report-files",
        "netbox-script-files",
        "netbox-redis-data",
        "netbox-redis-cache-data",
        "netbox-configuration",
    )
    env_files: tuple[str, ...] = (
        "netbox.env",
        "postgres.env",
        "redis.env",
        "redis-cache.env",
    )
    configuration_dir: str = "netbox-configuration"
    configuration_templates: tuple[str, ...] = ("extra.py",)

    # Published endpoints and connection details
    http_port: int = 8000
    db_host: str = "netbox-postgres"
    db_port: int = 5432
    db_name: str = "netbox"
    db_user: str = "netbox"
    redis_host: str = "netbox-redis"
    redis_port: int = 6380
    redis_cache_host: str = "netbox-redis-cache"
    redis_cache_port: int = 6379

    # Health polling
    health_interval: float = 5.0
    health_check_timeout: float = 30.0
    infra_checks: tuple[ServiceCheck, ...] = (
        ServiceCheck("netbox-postgres", 120),
        ServiceCheck("netbox-redis", 60),
        ServiceCheck("netbox-redis-cache", 60),
    )
    app_check: ServiceCheck = ServiceCheck("netbox-netbox", 300)

    # Admin provisioning
    admin_username: str = "admin"
    admin_email: str = "admin@example.com"
    admin_timeout: float = 180.0
    admin_interval: float = 5.0

    # Executables
    podman_bin: str = "podman"
    systemctl_bin: str = "systemctl"

    # Track where each value came from
    _sources: dict[str, str] = field(default_factory=dict, compare=False, repr=False)

    @property
    def pod_unit(self) -> str:
        return f"{self.pod_name}-pod.service"

    @property
    def network_unit(self) -> str:
        return f"{self.network_name}-network.service"

    @property
    def secrets_file(self) -> Path:
        return self.generated_dir / "secrets.yaml"

    def get_source(self, key: str) -> str:
        """Get the source of a config value."""
        return self._sources.get(key, "default")

    def as_dict(self) -> dict[str, Any]:
        """Return the user-facing settings as plain YAML/JSON friendly values."""
        data: dict[str, Any] = {}
        for f in fields(self):
            if f.name.startswith("_"):
                continue
            value = getattr(self, f.name)
            if isinstance(value, Path):
                value = str(value)
            elif isinstance(value, ServiceCheck):
                value = {"container": value.container, "timeout": value.timeout}
            elif isinstance(value, tuple):
                value = [
                    {"container": v.container, "timeout": v.timeout}
                    if isinstance(v, ServiceCheck)
                    else v
                    for v in value
                ]
            data[f.name] = value
        return data


# Keys the YAML file may set, with their coercion
FILE_KEYS: dict[str, Any] = {
    "assets_dir": Path,
    "generated_dir": Path,
    "quadlet_dir": Path,
    "http_port": int,
    "health_interval": float,
    "health_check_timeout": float,
    "admin_username": str,
    "admin_email": str,
    "admin_timeout": float,
    "admin_interval": float,
    "podman_bin": str,
    "systemctl_bin": str,
}


def get_config_path() -> Path:
    """Get the default config file path.

    Returns:
        Path to ~/.netbox-quadlet/config.yaml
    """
    return CONFIG_FILE


def _absolute(path: Path) -> Path:
    """Expand ~ and anchor relative paths at the current directory."""
    return path.expanduser().absolute()


def _coerce(key: str, value: Any) -> Any:
    converter = FILE_KEYS[key]
    try:
        result = converter(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid value for {key!r}: {value!r}") from exc
    if converter is Path:
        result = _absolute(result)
    return result


def _service_timeouts(config: StackConfig, raw: Any) -> dict[str, Any]:
    """Apply a ``timeouts: {container: seconds}`` mapping."""
    if not isinstance(raw, dict):
        raise ConfigError("'timeouts' must be a mapping of container name to seconds")
    try:
        overrides = {str(k): float(v) for k, v in raw.items()}
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid timeouts: {raw!r}") from exc

    known = {c.container for c in config.infra_checks} | {config.app_check.container}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigError(f"Unknown services in 'timeouts': {', '.join(unknown)}")

    infra = tuple(
        ServiceCheck(c.container, overrides.get(c.container, c.timeout))
        for c in config.infra_checks
    )
    app = ServiceCheck(
        config.app_check.container,
        overrides.get(config.app_check.container, config.app_check.timeout),
    )
    return {"infra_checks": infra, "app_check": app}


def load_config(path: Path | None = None) -> StackConfig:
    """Load stack configuration.

    Precedence (highest to lowest):
    1. Environment variables
    2. Config file (``path`` or ~/.netbox-quadlet/config.yaml)
    3. Defaults

    Args:
        path: Explicit config file. A missing explicit file is an error; a
            missing default file is not.

    Returns:
        StackConfig with values and sources

    Raises:
        ConfigError: If the file is unreadable, not a mapping, or holds
            invalid values.
    """
    config = StackConfig()
    sources: dict[str, str] = {}
    changes: dict[str, Any] = {}

    config_path = path or get_config_path()
    if path is not None and not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    if config_path.exists():
        try:
            with open(config_path) as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot read config file {config_path}: {exc}") from exc

        if not isinstance(file_config, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")

        for key, value in file_config.items():
            if key == "timeouts":
                changes.update(_service_timeouts(config, value))
                sources["infra_checks"] = sources["app_check"] = "config file"
            elif key in FILE_KEYS:
                changes[key] = _coerce(key, value)
                sources[key] = "config file"
            else:
                raise ConfigError(f"Unknown config key: {key}")

    for key, env_name in ENV_VARS.items():
        if os.environ.get(env_name):
            value = os.environ[env_name]
            changes[key] = _absolute(Path(value)) if key in PATH_KEYS else value
            sources[key] = "environment"

    config = replace(config, **changes)
    config._sources = sources
    return config
