"""Typed results returned by every client call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Ok:
    """A 2xx response."""

    body: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ApiError:
    """A non-2xx response; the body usually carries the exchange's reason."""

    status: int
    body: Any

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class TransportError:
    """The HTTP exchange itself failed (DNS, connect, timeout, I/O)."""

    reason: str

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok, ApiError, TransportError]


__all__ = ["ApiError", "Ok", "Result", "TransportError"]
