"""Client configuration from explicit settings with environment-variable fallbacks."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Mapping, MutableMapping, Optional, Sequence

from .dispatcher import DEFAULT_TIMEOUT
from .environment import Environment, parse_environment
from .errors import ConfigurationError


@dataclass(frozen=True)
class Credentials:
    api_key: str
    api_secret: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_secret:
            raise ConfigurationError("API key and secret must both be non-empty")
        if isinstance(self.api_secret, str):
            object.__setattr__(self, "api_secret", self.api_secret.encode("utf-8"))


@dataclass(frozen=True)
class ProxyConfig:
    http: str | None = None
    https: str | None = None
    no_proxy: tuple[str, ...] = ()

    @property
    def enabled(self) -> bool:
        return bool(self.http or self.https)


@dataclass(frozen=True)
class ClientConfig:
    environment: Environment
    credentials: Optional[Credentials] = None
    timeout: float = DEFAULT_TIMEOUT
    proxy: ProxyConfig = ProxyConfig()


def load_client_config(
    settings: Mapping[str, object] | None = None,
    env: Mapping[str, str] | None = None,
) -> ClientConfig:
    """Build a :class:`ClientConfig`; ``settings`` win over ``GEMINI_*`` variables."""

    settings = settings or {}
    env = os.environ if env is None else env

    environment = parse_environment(_coalesce(settings, env, "environment"))

    api_key = _coalesce(settings, env, "api_key")
    api_secret = _coalesce(settings, env, "api_secret")
    if bool(api_key) != bool(api_secret):
        raise ConfigurationError("GEMINI_API_KEY and GEMINI_API_SECRET must be set together")
    credentials = Credentials(api_key, api_secret) if api_key else None

    return ClientConfig(
        environment=environment,
        credentials=credentials,
        timeout=_parse_timeout(_coalesce(settings, env, "timeout")),
        proxy=load_proxy_config(settings.get("proxy") or {}),
    )


def _coalesce(settings: Mapping[str, object], env: Mapping[str, str], key: str) -> str | None:
    value = settings.get(key)
    if value is not None and value != "":
        return str(value)
    return env.get("GEMINI_" + key.upper()) or None


def _parse_timeout(value: str | None) -> float:
    if value is None:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid timeout {value!r}") from exc
    if timeout <= 0:
        raise ConfigurationError(f"Timeout must be positive, got {timeout}")
    return timeout


def load_proxy_config(settings: Mapping[str, object] | None = None) -> ProxyConfig:
    """Proxy settings from an explicit ``proxy`` section.

    ``HTTP_PROXY``, ``HTTPS_PROXY`` and ``NO_PROXY`` are not read here;
    ``requests`` already honours them through ``Session.trust_env``.
    """

    settings = settings or {}
    if settings.get("enabled") is False:
        return ProxyConfig()

    no_proxy = settings.get("no_proxy") or ()
    if isinstance(no_proxy, str):
        no_proxy = no_proxy.split(",")
    return ProxyConfig(
        http=_url_setting(settings, "http"),
        https=_url_setting(settings, "https"),
        no_proxy=tuple(str(entry).strip() for entry in no_proxy if str(entry).strip()),
    )


def _url_setting(settings: Mapping[str, object], key: str) -> str | None:
    value = settings.get(key)
    return value if isinstance(value, str) and value else None


def as_requests_proxies(config: ProxyConfig, host: str | None = None) -> MutableMapping[str, str]:
    """Convert a proxy config to the ``proxies`` mapping ``requests`` expects.

    Returns an empty mapping when ``host`` matches a ``no_proxy`` entry.
    """

    if not config.enabled or (host and _bypasses_proxy(host, config.no_proxy)):
        return {}

    proxies: dict[str, str] = {}
    if config.http:
        proxies["http"] = config.http
    if config.https:
        proxies["https"] = config.https
    return proxies


def _bypasses_proxy(host: str, no_proxy: Sequence[str]) -> bool:
    host = host.lower()
    for entry in no_proxy:
        entry = entry.lower().lstrip(".")
        if entry == "*" or host == entry or host.endswith("." + entry):
            return True
    return False


__all__ = [
    "ClientConfig",
    "Credentials",
    "ProxyConfig",
    "as_requests_proxies",
    "load_client_config",
    "load_proxy_config",
]
