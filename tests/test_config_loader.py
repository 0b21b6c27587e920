import pytest

from commons.exceptions import ConfigError
from tools.config_loader import env, load_config, optional_env


def test_load_config_sections():
    api = load_config("api")
    assert api["timeout"] > 0
    assert api["max_retries"] >= 0

    stream = load_config("stream")
    assert stream["default_interval_ms"] == 3000
    assert stream["rate_warn_interval_ms"] == 2000
    assert stream["max_error_prints"] == 5


def test_load_config_missing_section():
    with pytest.raises(ConfigError):
        load_config("no_such_section")


def test_load_config_missing_file():
    with pytest.raises(ConfigError):
        load_config("api", file_path="config/missing.yaml")


def test_env_trims_value(monkeypatch):
    monkeypatch.setenv("API_KEY", "  secret  ")
    assert env("API_KEY") == "secret"


def test_env_base_url_has_builtin_default(monkeypatch):
    monkeypatch.delenv("BASE_URL", raising=False)
    assert env("BASE_URL") == "https://n10s.net"


def test_env_blank_is_missing(monkeypatch):
    monkeypatch.setenv("DISTR_KEY", "   ")
    with pytest.raises(ConfigError) as ei:
        env("DISTR_KEY")
    assert "Missing env var: DISTR_KEY" in str(ei.value)


def test_env_explicit_default(monkeypatch):
    monkeypatch.delenv("PRODUCT", raising=False)
    assert env("PRODUCT", "demo") == "demo"


def test_optional_env(monkeypatch):
    monkeypatch.delenv("PRODUCT", raising=False)
    assert optional_env("PRODUCT") is None
    monkeypatch.setenv("PRODUCT", "my-game")
    assert optional_env("PRODUCT") == "my-game"
