"""Unit tests for netbox_quadlet.formatters."""

import json

from netbox_quadlet.bootstrap.descriptor import ConnectionDescriptor
from netbox_quadlet.bootstrap.secrets import StackSecrets
from netbox_quadlet.bootstrap.teardown import RemovalOutcome, RemovalResult, TeardownReport
from netbox_quadlet.config import StackConfig
from netbox_quadlet.formatters import (
    ProgressReporter,
    print_config_yaml,
    print_connection_json,
    print_teardown_summary,
)


class TestProgressReporter:
    """Tests for ProgressReporter."""

    def test_text_mode_uses_stdout(self, capsys):
        """Test progress lines go to stdout in text mode."""
        reporter = ProgressReporter()
        reporter.info("Starting NetBox stack...")
        reporter.ok("Pod start requested.")

        captured = capsys.readouterr()
        assert captured.out == "==> Starting NetBox stack...\n==> Pod start requested.\n"
        assert captured.err == ""

    def test_json_mode_uses_stderr(self, capsys):
        """Test progress lines stay off stdout in JSON mode."""
        reporter = ProgressReporter(json_mode=True)
        reporter.info("Generating random secrets...")
        reporter.warn("careful")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "==> Generating random secrets..." in captured.err
        assert "==> careful" in captured.err

    def test_error_always_stderr(self, capsys):
        """Test errors go to stderr in both modes."""
        ProgressReporter().error("boom")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "ERROR: boom\n"


class TestTeardownSummary:
    """Tests for print_teardown_summary."""

    def test_counts_and_failures(self, capsys):
        """Test failures are listed and outcomes counted."""
        report = TeardownReport(
            [
                RemovalResult("unit", "netbox-pod.service", RemovalOutcome.REMOVED),
                RemovalResult("volume", "netbox-redis-data", RemovalOutcome.ABSENT),
                RemovalResult("network", "netbox", RemovalOutcome.FAILED, "network is in use"),
            ]
        )

        print_teardown_summary(report, ProgressReporter())

        out = capsys.readouterr().out
        assert "==> Could not remove network netbox: network is in use" in out
        assert "Teardown complete (1 absent, 1 failed, 1 removed)." in out


class TestConfigYaml:
    """Tests for print_config_yaml."""

    def test_section_is_indented(self, capsys):
        """Test values are printed under a section header."""
        print_config_yaml({"http_port": 8000}, section="values")

        assert capsys.readouterr().out == "values:\n  http_port: 8000\n"

    def test_plain(self, capsys):
        """Test output without a section header."""
        print_config_yaml({"pod_name": "netbox"})

        assert "pod_name: netbox" in capsys.readouterr().out


def test_connection_json_is_single_object(capsys):
    """Test the descriptor JSON is one parseable object."""
    descriptor = ConnectionDescriptor.build(StackConfig(), StackSecrets.generate(), "127.0.0.1")
    print_connection_json(descriptor)

    data = json.loads(capsys.readouterr().out)
    assert data["api_url"] == "http://127.0.0.1:8000/api"
