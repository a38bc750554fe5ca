"""Map raw transport outcomes onto :mod:`gemini_rest.results`."""

from __future__ import annotations

import json
from typing import Any

import requests

from .dispatcher import TransportOutcome, is_timeout
from .results import ApiError, Ok, Result, TransportError


def _transport_reason(error: requests.RequestException) -> str:
    if is_timeout(error):
        return "timeout"
    if isinstance(error, requests.ConnectionError):
        return f"connection error: {error}"
    return f"request failed: {error}"


def decode_body(content: bytes) -> Any:
    """JSON-decode a body, falling back to its text when it is not JSON.

    Bodies that are not valid UTF-8 are returned as the raw bytes.
    """

    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        return content
    if not text.strip():
        return text
    try:
        return json.loads(text)
    except ValueError:
        return text


def classify(outcome: TransportOutcome, binary: bool = False) -> Result:
    """Classify one outcome; transport failures win over any status code."""

    if outcome.error is not None:
        return TransportError(reason=_transport_reason(outcome.error))
    if outcome.status_code is None:
        return TransportError(reason="no response received")
    if 200 <= outcome.status_code <= 299:
        return Ok(outcome.content if binary else decode_body(outcome.content))
    return ApiError(status=outcome.status_code, body=decode_body(outcome.content))


__all__ = ["classify", "decode_body"]
