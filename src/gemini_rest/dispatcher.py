"""HTTP dispatch of signed and public requests."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import socket
import threading
import time
from typing import Iterable, Mapping, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.exceptions import TimeoutError as Urllib3TimeoutError
from urllib3.util.retry import Retry

from .signer import auth_headers

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0
CHUNK_SIZE = 8192


@dataclass(frozen=True)
class TransportOutcome:
    """Raw result of one HTTP exchange: a response or the exception that ended it."""

    status_code: Optional[int] = None
    content: bytes = b""
    content_type: str = ""
    error: Optional[requests.RequestException] = None


def join_url(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def is_timeout(error: BaseException) -> bool:
    """True for requests timeouts and for urllib3 timeouts wrapped by requests.

    A read timeout while the body is streamed surfaces as
    ``requests.ConnectionError(ReadTimeoutError(...))``.
    """
    if isinstance(error, (requests.Timeout, Urllib3TimeoutError, socket.timeout)):
        return True
    return any(isinstance(arg, (Urllib3TimeoutError, socket.timeout)) for arg in error.args)


class _BodyDeadline:
    """Shuts the connection down if the body is still arriving when time runs out.

    A per-read socket timeout restarts on every byte, so a server that drips
    data can hold a read open forever without it.
    """

    def __init__(self, response: requests.Response) -> None:
        self.response = response
        self.expired = False

    def read(self, remaining: float) -> bytes:
        if remaining <= 0:
            self.expired = True
            raise requests.ReadTimeout("deadline passed before the body was read")
        timer = threading.Timer(remaining, self._abort)
        timer.daemon = True
        timer.start()
        try:
            content = b"".join(self.response.iter_content(chunk_size=CHUNK_SIZE))
        except requests.RequestException as exc:
            if self.expired:
                raise requests.ReadTimeout("deadline passed while reading the body") from exc
            raise
        finally:
            timer.cancel()
        if self.expired:
            raise requests.ReadTimeout("deadline passed while reading the body")
        return content

    def _abort(self) -> None:
        self.expired = True
        connection = getattr(self.response.raw, "connection", None)
        sock = getattr(connection, "sock", None)
        if sock is None:
            return
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError as exc:
            logger.debug("Connection already gone at the deadline: %s", exc)


@dataclass
class RequestDispatcher:
    """Sends one request per call; never retries.

    ``timeout`` bounds the whole exchange: connecting, waiting for headers and
    reading the body.
    """

    timeout: float = DEFAULT_TIMEOUT
    proxies: Mapping[str, str] = field(default_factory=dict)
    session: requests.Session = field(default_factory=requests.Session, repr=False)

    def __post_init__(self) -> None:
        retry = Retry(total=0, read=False, raise_on_status=False)
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    def dispatch(
        self,
        method: str,
        base_url: str,
        path: str,
        query_params: Iterable[Tuple[str, str]] = (),
        encoded_payload: Optional[str] = None,
        signature: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> TransportOutcome:
        method = method.upper()
        auth_parts = (encoded_payload, signature, api_key)
        signed = all(part is not None for part in auth_parts)
        if not signed and any(part is not None for part in auth_parts):
            raise ValueError("encoded_payload, signature and api_key must be given together")
        if method == "POST" and not signed:
            raise ValueError("POST requests must be signed")

        url = join_url(base_url, path)
        headers = auth_headers(api_key, encoded_payload, signature) if signed else {}
        params = list(query_params) or None
        started = time.monotonic()
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                data="" if method == "POST" else None,
                headers=headers,
                proxies=dict(self.proxies) or None,
                timeout=self.timeout,
                stream=True,
            )
            try:
                content = _BodyDeadline(response).read(started + self.timeout - time.monotonic())
            finally:
                response.close()
        except requests.RequestException as exc:
            error = exc
            if is_timeout(exc) and not isinstance(exc, requests.Timeout):
                error = requests.ReadTimeout(str(exc))
            logger.warning(
                "%s %s failed after %.1f ms: %s",
                method,
                url,
                (time.monotonic() - started) * 1000,
                error,
            )
            return TransportOutcome(error=error)

        logger.debug(
            "%s %s -> %s (%.1f ms)",
            method,
            url,
            response.status_code,
            (time.monotonic() - started) * 1000,
        )
        return TransportOutcome(
            status_code=response.status_code,
            content=content,
            content_type=response.headers.get("Content-Type", ""),
        )

    def close(self) -> None:
        self.session.close()


__all__ = ["DEFAULT_TIMEOUT", "RequestDispatcher", "TransportOutcome", "is_timeout", "join_url"]
