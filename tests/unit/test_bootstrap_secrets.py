"""Unit tests for bootstrap secrets module."""

from __future__ import annotations

import stat

import pytest

from netbox_quadlet.bootstrap import SECRET_LENGTHS, StackSecrets, generate_secret
from netbox_quadlet.bootstrap.secrets import ALPHABET, PERSISTED_SLOTS
from netbox_quadlet.errors import TemplateError


class TestGenerateSecret:
    """Tests for generate_secret."""

    def test_length(self):
        """Test the requested length is honoured."""
        for length in (1, 16, 24, 60):
            assert len(generate_secret(length)) == length

    def test_alphabet(self):
        """Test only alphanumeric characters are used."""
        value = generate_secret(500)
        assert set(value) <= set(ALPHABET)

    def test_values_differ(self):
        """Test two calls give different values."""
        assert generate_secret(24) != generate_secret(24)

    def test_rejects_non_positive_length(self):
        """Test zero or negative lengths are rejected."""
        with pytest.raises(ValueError):
            generate_secret(0)


class TestStackSecrets:
    """Tests for StackSecrets."""

    def test_generate_lengths(self):
        """Test each slot gets its configured length."""
        secrets = StackSecrets.generate()
        for name, length in SECRET_LENGTHS.items():
            assert len(getattr(secrets, name)) == length

    def test_admin_password_is_16_chars(self):
        """Test the admin password length."""
        assert len(StackSecrets.generate().admin_password) == 16

    def test_bindings_use_placeholder_names(self):
        """Test bindings are keyed by upper-case placeholder names."""
        secrets = StackSecrets.generate()
        bindings = secrets.bindings()
        assert bindings["DB_PASSWORD"] == secrets.db_password
        assert bindings["REDIS_CACHE_PASSWORD"] == secrets.redis_cache_password
        assert bindings["API_TOKEN_PEPPER"] == secrets.api_token_pepper
        assert bindings["SECRET_KEY"] == secrets.secret_key

    def test_save_and_load(self, tmp_path):
        """Test stored secrets are reused except the admin password."""
        path = tmp_path / "generated" / "secrets.yaml"
        original = StackSecrets.generate()
        original.save(path)

        loaded = StackSecrets.load(path)

        assert loaded is not None
        for name in PERSISTED_SLOTS:
            assert getattr(loaded, name) == getattr(original, name)
        assert len(loaded.admin_password) == 16
        assert "admin_password" not in path.read_text()

    def test_save_is_private(self, tmp_path):
        """Test the secrets file is only readable by the owner."""
        path = StackSecrets.generate().save(tmp_path / "secrets.yaml")
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_load_missing(self, tmp_path):
        """Test loading a missing file returns None."""
        assert StackSecrets.load(tmp_path / "missing.yaml") is None

    def test_load_incomplete(self, tmp_path):
        """Test an incomplete file is ignored."""
        path = tmp_path / "secrets.yaml"
        path.write_text("db_password: abc\n")
        assert StackSecrets.load(path) is None

    def test_save_unwritable(self, tmp_path):
        """Test a write failure is reported as a TemplateError."""
        blocker = tmp_path / "generated"
        blocker.write_text("not a directory")

        with pytest.raises(TemplateError, match="Cannot write secrets file"):
            StackSecrets.generate().save(blocker / "secrets.yaml")
