"""Request envelopes, canonical payloads and options helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union
from urllib.parse import quote

from .errors import SigningInvariantViolation

RESERVED_KEYS = frozenset({"request", "nonce"})

QueryParams = Union[Mapping[str, Any], Iterable[Tuple[str, Any]], None]

_PLACEHOLDER = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


def compact(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop ``None`` entries; falsy values like ``0`` or ``False`` are kept."""

    return {key: value for key, value in values.items() if value is not None}


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(params: QueryParams) -> Tuple[Tuple[str, str], ...]:
    """Normalize query parameters into ordered ``(key, value)`` string pairs."""

    if params is None:
        return tuple()
    items = params.items() if isinstance(params, Mapping) else params
    return tuple(
        (str(key), _query_value(value)) for key, value in items if value is not None
    )


def expand_path(template: str, **values: Any) -> str:
    """Fill ``:name`` placeholders of a path template with URL-quoted values."""

    names = _PLACEHOLDER.findall(template)
    missing = [name for name in names if values.get(name) is None]
    if missing:
        raise ValueError(f"Missing path values for {template}: {', '.join(missing)}")
    unused = sorted(set(values) - set(names))
    if unused:
        raise ValueError(f"Unused path values for {template}: {', '.join(unused)}")
    return _PLACEHOLDER.sub(
        lambda match: quote(str(values[match.group(1)]), safe=""), template
    )


@dataclass(frozen=True)
class RequestEnvelope:
    """One call's path, unsigned query string and signed body parameters."""

    path: str
    query_params: Tuple[Tuple[str, str], ...] = ()
    body_params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if "?" in self.path:
            raise ValueError(
                f"Path {self.path!r} carries a query string; pass query_params instead"
            )
        object.__setattr__(self, "query_params", encode_query(self.query_params))
        object.__setattr__(self, "body_params", MappingProxyType(dict(self.body_params)))

    @classmethod
    def create(
        cls,
        path: str,
        query_params: QueryParams = None,
        body_params: Optional[Mapping[str, Any]] = None,
    ) -> "RequestEnvelope":
        return cls(path=path, query_params=query_params or (), body_params=body_params or {})


def check_body_params(body_params: Mapping[str, Any]) -> None:
    """Raise :class:`SigningInvariantViolation` if the body names a reserved key."""

    collisions = RESERVED_KEYS.intersection(body_params)
    if collisions:
        raise SigningInvariantViolation(collisions)


def build_payload(path: str, body_params: Mapping[str, Any], nonce: int) -> Dict[str, Any]:
    """Merge ``request`` and ``nonce`` with the body into the map that gets signed."""

    check_body_params(body_params)
    payload: Dict[str, Any] = {"request": path, "nonce": nonce}
    payload.update(body_params)
    return payload


__all__ = [
    "RESERVED_KEYS",
    "RequestEnvelope",
    "build_payload",
    "check_body_params",
    "compact",
    "encode_query",
    "expand_path",
]
