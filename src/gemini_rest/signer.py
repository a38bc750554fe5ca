"""HMAC-SHA384 signing of canonical payloads."""

from __future__ import annotations

import base64
from dataclasses import dataclass
import hashlib
import hmac
import json
from typing import Any, Dict, Mapping, Union


@dataclass(frozen=True)
class SignedPayload:
    canonical_map: Mapping[str, Any]
    encoded: str
    signature: str


def encode_payload(canonical_map: Mapping[str, Any]) -> str:
    """Serialize to compact JSON with sorted keys and base64 the UTF-8 bytes."""

    document = json.dumps(dict(canonical_map), sort_keys=True, separators=(",", ":"))
    return base64.b64encode(document.encode("utf-8")).decode("ascii")


def sign(canonical_map: Mapping[str, Any], secret: Union[bytes, str]) -> SignedPayload:
    """Return the base64 payload and the lowercase hex HMAC-SHA384 over it."""

    key = secret.encode("utf-8") if isinstance(secret, str) else secret
    encoded = encode_payload(canonical_map)
    signature = hmac.new(key, encoded.encode("ascii"), hashlib.sha384).hexdigest()
    return SignedPayload(canonical_map=dict(canonical_map), encoded=encoded, signature=signature)


def auth_headers(api_key: str, encoded_payload: str, signature: str) -> Dict[str, str]:
    """Headers for an authenticated request; the body itself stays empty."""

    return {
        "X-GEMINI-APIKEY": api_key,
        "X-GEMINI-PAYLOAD": encoded_payload,
        "X-GEMINI-SIGNATURE": signature,
        "Content-Type": "text/plain",
        "Content-Length": "0",
        "Cache-Control": "no-cache",
    }


__all__ = ["SignedPayload", "auth_headers", "encode_payload", "sign"]
