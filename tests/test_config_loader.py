"""Tests for the config loader module."""

import pytest
import yaml

from longcat_proxy.config_loader import (
    DEFAULT_READ_TIMEOUT,
    DEFAULT_UPSTREAM_URL,
    GatewaySettings,
    _substitute_env_vars,
    load_config,
)
from longcat_proxy.core.backend import build_timeout, build_upstream_headers
from longcat_proxy.core.exceptions import ConfigurationError


class TestLoadConfig:
    """Tests for loading configuration from YAML files."""

    def test_loads_simple_config(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.safe_dump({"server": {"port": 8080}}), encoding="utf-8")
        assert load_config(str(config_path)) == {"server": {"port": 8080}}

    def test_raises_error_for_missing_explicit_config(self):
        with pytest.raises(ConfigurationError, match="Config file not found"):
            load_config("/nonexistent/path/config.yaml")

    def test_missing_default_config_is_empty(self, monkeypatch, tmp_path):
        monkeypatch.setattr(
            "longcat_proxy.config_loader.DEFAULT_CONFIG_PATH", str(tmp_path / "absent.yaml")
        )
        assert load_config() == {}

    def test_env_var_points_at_config(self, monkeypatch, tmp_path):
        config_path = tmp_path / "custom.yaml"
        config_path.write_text("upstream:\n  cookie: abc\n", encoding="utf-8")
        monkeypatch.setenv("LONGCAT_PROXY_CONFIG", str(config_path))
        assert load_config() == {"upstream": {"cookie": "abc"}}

    def test_rejects_non_mapping_config(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_config(str(config_path))

    def test_dotenv_values_are_substituted(self, tmp_path, monkeypatch):
        monkeypatch.delenv("LC_TEST_COOKIE", raising=False)
        config_path = tmp_path / "config.yaml"
        config_path.write_text("upstream:\n  cookie: ${LC_TEST_COOKIE}\n", encoding="utf-8")
        (tmp_path / ".env").write_text("LC_TEST_COOKIE=from-dotenv\n", encoding="utf-8")
        assert load_config(str(config_path))["upstream"]["cookie"] == "from-dotenv"


class TestSubstituteEnvVars:
    """Tests for ${VAR} / $VAR substitution."""

    def test_substitutes_from_environment(self, monkeypatch):
        monkeypatch.setenv("LC_TEST_KEY", "secret")
        assert _substitute_env_vars({"a": ["${LC_TEST_KEY}", "$LC_TEST_KEY-x"]}) == {
            "a": ["secret", "secret-x"]
        }

    def test_env_file_values_win(self, monkeypatch):
        monkeypatch.setenv("LC_TEST_KEY", "from-env")
        assert _substitute_env_vars("${LC_TEST_KEY}", {"LC_TEST_KEY": "from-file"}) == "from-file"

    def test_unknown_variable_left_as_placeholder(self, monkeypatch):
        monkeypatch.delenv("LC_TEST_MISSING", raising=False)
        assert _substitute_env_vars("${LC_TEST_MISSING}") == "${LC_TEST_MISSING}"

    def test_non_strings_untouched(self):
        assert _substitute_env_vars({"port": 3000, "debug": True}) == {"port": 3000, "debug": True}


class TestGatewaySettings:
    """Tests for resolving settings from config and environment."""

    def test_defaults(self):
        settings = GatewaySettings.from_config({}, environ={})
        assert settings.port == 3000
        assert settings.host == "0.0.0.0"
        assert settings.api_key is None
        assert settings.upstream_url == DEFAULT_UPSTREAM_URL
        assert settings.read_timeout == DEFAULT_READ_TIMEOUT
        assert settings.log_level == "INFO"

    def test_environment_overrides_config(self):
        config = {
            "server": {"port": 8000, "api_key": "file-key"},
            "upstream": {"cookie": "file-cookie", "app_key": "file-app"},
        }
        environ = {"PORT": "9000", "LONGCAT_COOKIE": "env-cookie", "SERVER_API_KEY": "env-key"}
        settings = GatewaySettings.from_config(config, environ=environ)
        assert settings.port == 9000
        assert settings.cookie == "env-cookie"
        assert settings.app_key == "file-app"
        assert settings.api_key == "env-key"

    def test_read_timeout_can_be_disabled(self):
        assert GatewaySettings.from_config({}, {"LONGCAT_READ_TIMEOUT": "0"}).read_timeout is None
        assert GatewaySettings.from_config({}, {"LONGCAT_READ_TIMEOUT": "none"}).read_timeout is None
        assert GatewaySettings.from_config({"upstream": {"read_timeout": 15}}, {}).read_timeout == 15.0

    def test_debug_forces_debug_level(self):
        settings = GatewaySettings.from_config({"logging": {"level": "warning"}}, {"DEBUG": "1"})
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize(
        "environ",
        [{"PORT": "eighty"}, {"LONGCAT_TIMEOUT": "soon"}, {"LONGCAT_READ_TIMEOUT": "later"}],
    )
    def test_invalid_numbers_raise(self, environ):
        with pytest.raises(ConfigurationError):
            GatewaySettings.from_config({}, environ)


def test_upstream_headers_carry_credentials():
    settings = GatewaySettings(cookie="c=1", app_key="app", trace_id="trace")
    headers = build_upstream_headers(settings)
    assert headers["cookie"] == "c=1"
    assert headers["m-appkey"] == "app"
    assert headers["m-traceid"] == "trace"
    assert headers["origin"] == "https://longcat.chat"
    assert headers["accept"] == "text/event-stream,application/json"


def test_timeout_uses_read_timeout_for_reads():
    timeout = build_timeout(GatewaySettings(timeout=5.0, read_timeout=42.0))
    assert timeout.connect == 5.0
    assert timeout.read == 42.0
