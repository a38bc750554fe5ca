"""Exceptions raised before a request ever reaches the network."""

from __future__ import annotations

from typing import Iterable


class ConfigurationError(ValueError):
    """Raised for an unsupported environment, bad timeout or missing credentials."""


class SigningInvariantViolation(ValueError):
    """Raised when body parameters try to overwrite a reserved payload key."""

    def __init__(self, keys: Iterable[str]) -> None:
        self.keys = tuple(sorted(keys))
        super().__init__(
            f"Body parameters must not contain reserved keys: {', '.join(self.keys)}"
        )


__all__ = ["ConfigurationError", "SigningInvariantViolation"]
