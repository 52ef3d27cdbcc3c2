"""Shared test fixtures for netbox-quadlet tests.

- FakeRunner: records every external command and answers with canned
  results instead of calling podman/systemctl
- stack_config: a StackConfig whose paths live under tmp_path and whose
  timeouts are short enough for unit tests
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
import yaml

from netbox_quadlet.config import ENV_VARS, ServiceCheck, StackConfig
from netbox_quadlet.shared.logging import configure_logging

from tests.fakes import FakeRunner


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the caller's NETBOX_QUADLET_* variables out of the tests."""
    for name in ENV_VARS.values():
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Runner where every command succeeds unless told otherwise."""
    return FakeRunner()


@pytest.fixture
def stack_config(tmp_path) -> StackConfig:
    """StackConfig sandboxed under tmp_path with fast polling."""
    return StackConfig(
        generated_dir=tmp_path / "generated",
        quadlet_dir=tmp_path / "quadlet",
        health_interval=0.01,
        health_check_timeout=1.0,
        infra_checks=(
            ServiceCheck("netbox-postgres", 0.05),
            ServiceCheck("netbox-redis", 0.05),
            ServiceCheck("netbox-redis-cache", 0.05),
        ),
        app_check=ServiceCheck("netbox-netbox", 0.05),
        admin_interval=0.01,
        admin_timeout=0.05,
    )


@pytest.fixture
def config_file(tmp_path):
    """YAML config file pointing every path into tmp_path."""
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "generated_dir": str(tmp_path / "generated"),
                "quadlet_dir": str(tmp_path / "quadlet"),
                "health_interval": 0.01,
                "admin_interval": 0.01,
                "admin_timeout": 0.05,
                "timeouts": {
                    "netbox-postgres": 0.05,
                    "netbox-redis": 0.05,
                    "netbox-redis-cache": 0.05,
                    "netbox-netbox": 0.05,
                },
            }
        )
    )
    return path


@pytest.fixture(autouse=True)
def _no_user_config(tmp_path):
    """Ignore ~/.netbox-quadlet/config.yaml on the machine running the tests."""
    with patch("netbox_quadlet.config.get_config_path", return_value=tmp_path / "absent.yaml"):
        yield


@pytest.fixture(autouse=True)
def _reset_logging():
    """Point logging at the current stderr, not a stream left by an earlier CliRunner."""
    configure_logging("warning")
