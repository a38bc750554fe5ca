from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from gemini_rest.config import (  # noqa: E402
    Credentials,
    ProxyConfig,
    as_requests_proxies,
    load_client_config,
    load_proxy_config,
)
from gemini_rest.environment import Environment  # noqa: E402
from gemini_rest.errors import ConfigurationError  # noqa: E402


def test_load_client_config_from_env() -> None:
    env = {
        "GEMINI_ENVIRONMENT": "production",
        "GEMINI_API_KEY": "account-key",
        "GEMINI_API_SECRET": "secret",
        "GEMINI_TIMEOUT": "2.5",
    }

    config = load_client_config(env=env)

    assert config.environment is Environment.PRODUCTION
    assert config.credentials == Credentials("account-key", b"secret")
    assert config.timeout == 2.5
    assert config.proxy.enabled is False


def test_settings_win_over_env() -> None:
    config = load_client_config(
        {"environment": "sandbox", "timeout": 1},
        env={"GEMINI_ENVIRONMENT": "production", "GEMINI_TIMEOUT": "9"},
    )

    assert config.environment is Environment.SANDBOX
    assert config.timeout == 1.0
    assert config.credentials is None


def test_none_settings_fall_back_to_env() -> None:
    config = load_client_config(
        {"environment": None, "timeout": None}, env={"GEMINI_ENVIRONMENT": "sandbox"}
    )

    assert config.environment is Environment.SANDBOX
    assert config.timeout == 5.0


@pytest.mark.parametrize(
    "env",
    [
        {},
        {"GEMINI_ENVIRONMENT": "staging"},
        {"GEMINI_ENVIRONMENT": "sandbox", "GEMINI_TIMEOUT": "0"},
        {"GEMINI_ENVIRONMENT": "sandbox", "GEMINI_TIMEOUT": "soon"},
        {"GEMINI_ENVIRONMENT": "sandbox", "GEMINI_API_KEY": "key-only"},
        {"GEMINI_ENVIRONMENT": "sandbox", "GEMINI_API_SECRET": "secret-only"},
    ],
)
def test_invalid_configuration_is_rejected(env) -> None:
    with pytest.raises(ConfigurationError):
        load_client_config(env=env)


def test_credentials_hide_secret_and_require_values() -> None:
    credentials = Credentials("account-key", "secret")

    assert credentials.api_secret == b"secret"
    assert "secret" not in repr(credentials)
    with pytest.raises(ConfigurationError):
        Credentials("", b"secret")


def test_load_proxy_config_from_settings() -> None:
    config = load_proxy_config(
        {
            "enabled": True,
            "http": "http://proxy.local:8080",
            "https": "https://proxy.local:8443",
            "no_proxy": "localhost, 127.0.0.1",
        }
    )

    assert config == ProxyConfig(
        http="http://proxy.local:8080",
        https="https://proxy.local:8443",
        no_proxy=("localhost", "127.0.0.1"),
    )


def test_proxy_environment_variables_are_left_to_requests() -> None:
    env = {
        "HTTP_PROXY": "http://env.proxy:8080",
        "HTTPS_PROXY": "https://env.proxy:8443",
        "NO_PROXY": "internal.local",
    }

    config = load_client_config({"environment": "sandbox"}, env=env)

    assert config.proxy == ProxyConfig()
    assert config.proxy.enabled is False


def test_client_config_reads_proxy_section() -> None:
    config = load_client_config(
        {"environment": "sandbox", "proxy": {"https": "https://proxy.local:8443"}}, env={}
    )

    assert config.proxy.https == "https://proxy.local:8443"


@pytest.mark.parametrize(
    "no_proxy, host, expected",
    [
        ((), "api.gemini.com", {"https": "https://proxy.local:8443"}),
        (("gemini.com",), "api.gemini.com", {}),
        ((".gemini.com",), "api.sandbox.gemini.com", {}),
        (("*",), "api.gemini.com", {}),
        (("other.com",), "api.gemini.com", {"https": "https://proxy.local:8443"}),
    ],
)
def test_as_requests_proxies(no_proxy, host, expected) -> None:
    config = ProxyConfig(https="https://proxy.local:8443", no_proxy=no_proxy)

    assert as_requests_proxies(config, host) == expected


def test_disabled_proxy_is_empty() -> None:
    config = load_proxy_config({"enabled": False, "http": "http://proxy.local"})

    assert as_requests_proxies(config) == {}
