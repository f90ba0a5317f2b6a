"""Tests for multi-source credential resolution."""

import logging

import pytest

from xrel_client.auth import CredentialResolver
from xrel_client.auth.exceptions import CredentialFileError, CredentialNotFoundError


class TestCredentialResolverInit:
    """Test CredentialResolver initialization."""

    @pytest.mark.unit
    def test_loads_dotenv_by_default(self, tmp_path):
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text("XREL_STATE=from-dotenv\n")

        resolver = CredentialResolver(dotenv_path=str(dotenv_file))

        assert resolver._dotenv_loaded

    @pytest.mark.unit
    def test_skip_dotenv(self):
        resolver = CredentialResolver(load_dotenv=False)

        assert not resolver._dotenv_loaded

    @pytest.mark.unit
    def test_dotenv_values_reach_environment(self, tmp_path, monkeypatch):
        """Values from .env are visible through env var lookup."""
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text("XREL_CLIENT_ID=dotenv-client\n")
        # Registered with monkeypatch so the loaded value is removed afterwards
        monkeypatch.setenv("XREL_CLIENT_ID", "placeholder")
        monkeypatch.delenv("XREL_CLIENT_ID")

        resolver = CredentialResolver(dotenv_path=str(dotenv_file))

        assert resolver.resolve(env_var_name="XREL_CLIENT_ID") == "dotenv-client"

    @pytest.mark.unit
    def test_dotenv_loaded_only_once(self, tmp_path):
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text("XREL_STATE=x\n")

        resolver = CredentialResolver(dotenv_path=str(dotenv_file))
        resolver._ensure_dotenv_loaded()
        resolver._ensure_dotenv_loaded()

        assert resolver._dotenv_loaded is True

    @pytest.mark.unit
    def test_unreadable_dotenv_does_not_raise(self, tmp_path):
        dotenv_path = tmp_path / "not_a_file"
        dotenv_path.mkdir()

        resolver = CredentialResolver(dotenv_path=str(dotenv_path))

        assert resolver._dotenv_loaded is True
        assert resolver.resolve(value="works") == "works"


class TestCredentialResolverResolve:
    """Test resolution order: explicit, environment, default."""

    @pytest.mark.unit
    def test_explicit_value_wins(self, monkeypatch):
        monkeypatch.setenv("XREL_CLIENT_ID", "env-client")
        resolver = CredentialResolver(load_dotenv=False)

        result = resolver.resolve(value="explicit-client", env_var_name="XREL_CLIENT_ID", default="default")

        assert result == "explicit-client"

    @pytest.mark.unit
    def test_environment_beats_default(self, monkeypatch):
        monkeypatch.setenv("XREL_REDIRECT_URI", "https://example.com/cb")
        resolver = CredentialResolver(load_dotenv=False)

        result = resolver.resolve(env_var_name="XREL_REDIRECT_URI", default="https://other.example/cb")

        assert result == "https://example.com/cb"

    @pytest.mark.unit
    def test_empty_environment_value_is_a_value(self, monkeypatch):
        monkeypatch.setenv("XREL_STATE", "")
        resolver = CredentialResolver(load_dotenv=False)

        assert resolver.resolve(env_var_name="XREL_STATE", default="fallback") == ""

    @pytest.mark.unit
    def test_default_used_last(self):
        resolver = CredentialResolver(load_dotenv=False)

        assert resolver.resolve(env_var_name="XREL_TIMEOUT", default="30.0") == "30.0"

    @pytest.mark.unit
    def test_returns_none_when_not_found(self):
        resolver = CredentialResolver(load_dotenv=False)

        assert resolver.resolve(env_var_name="XREL_CLIENT_SECRET") is None

    @pytest.mark.unit
    def test_required_and_not_found(self):
        resolver = CredentialResolver(load_dotenv=False)

        with pytest.raises(CredentialNotFoundError) as exc_info:
            resolver.resolve(env_var_name="XREL_CLIENT_SECRET", required=True)

        assert "XREL_CLIENT_SECRET" in str(exc_info.value)
        assert exc_info.value.env_var_name == "XREL_CLIENT_SECRET"
        assert exc_info.value.missing == ["XREL_CLIENT_SECRET"]


class TestCredentialResolverFromFile:
    """Test reading a client secret from a mounted file."""

    @pytest.mark.unit
    def test_explicit_path_is_stripped(self, tmp_path):
        secret_file = tmp_path / "client_secret"
        secret_file.write_text("  s3cret  \n")

        resolver = CredentialResolver(load_dotenv=False)

        assert resolver.resolve_from_file(file_path=secret_file) == "s3cret"

    @pytest.mark.unit
    def test_path_from_env_var(self, tmp_path, monkeypatch):
        secret_file = tmp_path / "client_secret"
        secret_file.write_text("from-env-path")
        monkeypatch.setenv("XREL_CLIENT_SECRET_FILE", str(secret_file))

        resolver = CredentialResolver(load_dotenv=False)

        assert resolver.resolve_from_file(env_var_name="XREL_CLIENT_SECRET_FILE") == "from-env-path"

    @pytest.mark.unit
    def test_home_and_env_expansion(self, tmp_path, monkeypatch):
        fake_home = tmp_path / "home"
        (fake_home / ".xrel").mkdir(parents=True)
        (fake_home / ".xrel" / "secret").write_text("home-secret")
        monkeypatch.setenv("HOME", str(fake_home))
        monkeypatch.setenv("TEST_XREL_DIR", str(fake_home / ".xrel"))

        resolver = CredentialResolver(load_dotenv=False)

        assert resolver.resolve_from_file(file_path="~/.xrel/secret") == "home-secret"
        assert resolver.resolve_from_file(file_path="$TEST_XREL_DIR/secret") == "home-secret"

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        resolver = CredentialResolver(load_dotenv=False)
        path = tmp_path / "absent"

        assert resolver.resolve_from_file(file_path=path) is None
        with pytest.raises(CredentialFileError) as exc_info:
            resolver.resolve_from_file(file_path=path, required=True)
        assert "not found" in str(exc_info.value)

    @pytest.mark.unit
    def test_directory_instead_of_file(self, tmp_path):
        directory = tmp_path / "dir"
        directory.mkdir()
        resolver = CredentialResolver(load_dotenv=False)

        assert resolver.resolve_from_file(file_path=directory) is None
        with pytest.raises(CredentialFileError):
            resolver.resolve_from_file(file_path=directory, required=True)

    @pytest.mark.unit
    def test_no_path_available(self):
        resolver = CredentialResolver(load_dotenv=False)

        assert resolver.resolve_from_file(env_var_name="XREL_CLIENT_SECRET_FILE") is None
        with pytest.raises(CredentialFileError) as exc_info:
            resolver.resolve_from_file(env_var_name="XREL_CLIENT_SECRET_FILE", required=True)
        assert "XREL_CLIENT_SECRET_FILE" in str(exc_info.value)


class TestCredentialMasking:
    """Secrets never reach the logs."""

    @pytest.mark.unit
    def test_resolved_value_masked(self, caplog):
        caplog.set_level(logging.DEBUG)
        resolver = CredentialResolver(load_dotenv=False)

        resolver.resolve(value="super-secret", env_var_name="XREL_CLIENT_SECRET")

        assert "super-secret" not in caplog.text
        assert "***" in caplog.text

    @pytest.mark.unit
    def test_masking_can_be_disabled(self, caplog):
        caplog.set_level(logging.DEBUG)
        resolver = CredentialResolver(load_dotenv=False)

        resolver.resolve(value="https://api.xrel.to/v2/", env_var_name="XREL_BASE_URL", mask_in_logs=False)

        assert "https://api.xrel.to/v2/" in caplog.text

    @pytest.mark.unit
    def test_file_contents_masked(self, tmp_path, caplog):
        caplog.set_level(logging.DEBUG)
        secret_file = tmp_path / "secret"
        secret_file.write_text("file-secret-xyz")

        CredentialResolver(load_dotenv=False).resolve_from_file(file_path=secret_file)

        assert "file-secret-xyz" not in caplog.text

    @pytest.mark.unit
    def test_mask_helper(self):
        assert CredentialResolver._mask("secret") == "***"
        assert CredentialResolver._mask(None) == "None"
