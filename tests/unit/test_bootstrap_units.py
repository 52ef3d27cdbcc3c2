"""Unit tests for bootstrap units module."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from netbox_quadlet.bootstrap import UnitInstaller
from netbox_quadlet.errors import TemplateError


class TestUnitInstaller:
    """Tests for UnitInstaller."""

    def test_creates_quadlet_dir(self, stack_config):
        """Test the destination directory is created when absent."""
        assert not stack_config.quadlet_dir.exists()
        UnitInstaller(stack_config).install("0.0.0.0")
        assert stack_config.quadlet_dir.is_dir()

    def test_installs_all_units(self, stack_config):
        """Test every unit kind is installed."""
        installed = UnitInstaller(stack_config).install("0.0.0.0")
        names = {p.name for p in installed}

        assert "netbox.pod" in names
        assert "netbox.network" in names
        assert "netbox-postgres-data.volume" in names
        assert "netbox-netbox.container" in names
        assert "netbox-worker.container" in names

    def test_static_units_copied_verbatim(self, stack_config):
        """Test volume and network units are byte-identical copies."""
        UnitInstaller(stack_config).install("0.0.0.0")
        for name in ("netbox.network", "netbox-redis-data.volume"):
            source = (stack_config.assets_dir / name).read_bytes()
            assert (stack_config.quadlet_dir / name).read_bytes() == source

    def test_pod_bind_address(self, stack_config):
        """Test the bind address placeholder is substituted."""
        UnitInstaller(stack_config).install("127.0.0.1")
        pod = (stack_config.quadlet_dir / "netbox.pod").read_text()

        assert "PublishPort=127.0.0.1:8000:8080" in pod
        assert "{{BIND_ADDRESS}}" not in pod

    def test_container_paths_rewritten(self, stack_config):
        """Test env-file and configuration mounts point at the generated dir."""
        UnitInstaller(stack_config).install("0.0.0.0")
        generated = stack_config.generated_dir
        unit = (stack_config.quadlet_dir / "netbox-netbox.container").read_text()

        assert f"EnvironmentFile={generated}/env/netbox.env" in unit
        assert f"Volume={generated}/netbox-configuration:/etc/netbox/config" in unit
        assert "EnvironmentFile=env/" not in unit
        assert "Volume=./netbox-configuration" not in unit

    def test_rewrite_leaves_named_volumes(self, stack_config):
        """Test named volume mounts are not rewritten."""
        text = "Volume=netbox-media-files.volume:/opt/netbox/netbox/media:rw\n"
        assert UnitInstaller(stack_config).rewrite_container(text) == text

    def test_missing_pod_source(self, stack_config, tmp_path):
        """Test a missing pod unit is fatal."""
        assets = tmp_path / "assets"
        assets.mkdir()
        (assets / "netbox.network").write_text("[Network]\n")
        config = replace(stack_config, assets_dir=assets)

        with pytest.raises(TemplateError):
            UnitInstaller(config).install("0.0.0.0")

    def test_relative_generated_dir_written_absolute(self, stack_config, tmp_path, monkeypatch):
        """Test a relative generated dir ends up absolute in the container units."""
        monkeypatch.chdir(tmp_path)
        config = replace(stack_config, generated_dir=Path("gen"))

        UnitInstaller(config).install("0.0.0.0")
        unit = (config.quadlet_dir / "netbox-postgres.container").read_text()

        assert f"EnvironmentFile={tmp_path}/gen/env/postgres.env" in unit
        assert "EnvironmentFile=gen/" not in unit
