"""Environment tag to base URL resolution."""

from __future__ import annotations

from enum import Enum
from typing import Union

from .errors import ConfigurationError

EXCHANGE_DOMAIN = "gemini.com"


class Environment(str, Enum):
    SANDBOX = "sandbox"
    PRODUCTION = "production"


BASE_URLS = {
    Environment.SANDBOX: f"https://api.sandbox.{EXCHANGE_DOMAIN}",
    Environment.PRODUCTION: f"https://api.{EXCHANGE_DOMAIN}",
}


def parse_environment(tag: Union[Environment, str, None]) -> Environment:
    """Turn ``tag`` into an :class:`Environment`, refusing anything unknown."""

    if isinstance(tag, Environment):
        return tag
    if isinstance(tag, str):
        normalized = tag.strip().lower()
        for environment in Environment:
            if environment.value == normalized:
                return environment
    raise ConfigurationError(
        f"Unsupported environment {tag!r}; expected one of "
        f"{', '.join(environment.value for environment in Environment)}"
    )


def resolve(tag: Union[Environment, str, None]) -> str:
    """Return the base URL (no trailing slash) for an environment tag."""

    return BASE_URLS[parse_environment(tag)]


__all__ = ["BASE_URLS", "EXCHANGE_DOMAIN", "Environment", "parse_environment", "resolve"]
