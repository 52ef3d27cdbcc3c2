"""Unit tests for netbox_quadlet.shared.logging."""

import logging

import pytest

from netbox_quadlet.shared.logging import configure_logging, get_logger, level_for_verbosity


class TestLevelForVerbosity:
    """Tests for the -v count mapping."""

    @pytest.mark.parametrize(
        "verbose,level",
        [(0, "warning"), (1, "info"), (2, "debug"), (5, "debug")],
    )
    def test_levels(self, verbose, level):
        """Test each verbosity count."""
        assert level_for_verbosity(verbose) == level


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_records_go_to_stderr(self, capsys):
        """Test log output never reaches stdout."""
        configure_logging("info")
        get_logger("netbox_quadlet.test").info("stack.started", units=2)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "stack.started" in captured.err
        assert "units=2" in captured.err

    def test_level_filters(self, capsys):
        """Test records below the configured level are dropped."""
        configure_logging("warning")
        get_logger("netbox_quadlet.test").info("hidden")

        assert "hidden" not in capsys.readouterr().err
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_warning(self):
        """Test an unrecognised level name."""
        configure_logging("chatty")

        assert logging.getLogger().level == logging.WARNING
