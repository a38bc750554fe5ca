"""Authenticated client context for the Gemini REST API."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Mapping, Optional, Union
from urllib.parse import urlsplit

import requests

from .classifier import classify
from .config import ClientConfig, Credentials, as_requests_proxies, load_client_config
from .dispatcher import DEFAULT_TIMEOUT, RequestDispatcher
from .environment import Environment, parse_environment, resolve
from .errors import ConfigurationError
from .nonce import NonceGenerator, nonce_generator_for
from .payload import QueryParams, RequestEnvelope, build_payload, check_body_params
from .results import Result
from .signer import SignedPayload, sign

logger = logging.getLogger(__name__)


@dataclass
class GeminiClient:
    """Holds credentials, environment and timeout; every call is a method here.

    Each authenticated call runs the same fixed pipeline: take a nonce, build
    the canonical payload, sign it, dispatch, classify. Network and HTTP
    failures come back as :class:`~gemini_rest.results.TransportError` or
    :class:`~gemini_rest.results.ApiError`; only configuration and
    programming errors raise.
    """

    environment: Union[Environment, str]
    credentials: Optional[Credentials] = None
    timeout: float = DEFAULT_TIMEOUT
    proxies: Mapping[str, str] = field(default_factory=dict)
    session: Optional[requests.Session] = field(default=None, repr=False)
    nonces: Optional[NonceGenerator] = field(default=None, repr=False)
    base_url: str = field(init=False)
    dispatcher: RequestDispatcher = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.environment = parse_environment(self.environment)
        self.base_url = resolve(self.environment)
        if self.timeout is None or self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {self.timeout}")
        if self.nonces is None and self.credentials is not None:
            self.nonces = nonce_generator_for(self.credentials.api_key)
        dispatcher_kwargs: dict[str, Any] = {"timeout": self.timeout, "proxies": dict(self.proxies)}
        if self.session is not None:
            dispatcher_kwargs["session"] = self.session
        self.dispatcher = RequestDispatcher(**dispatcher_kwargs)

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any) -> "GeminiClient":
        host = urlsplit(resolve(config.environment)).hostname
        return cls(
            environment=config.environment,
            credentials=config.credentials,
            timeout=config.timeout,
            proxies=as_requests_proxies(config.proxy, host),
            **kwargs,
        )

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, **kwargs: Any) -> "GeminiClient":
        """Build a client from ``GEMINI_*`` environment variables."""
        return cls.from_config(load_client_config(env=env), **kwargs)

    def public_get(
        self,
        path: str,
        query_params: QueryParams = None,
        environment: Union[Environment, str, None] = None,
        binary: bool = False,
    ) -> Result:
        envelope = RequestEnvelope.create(path, query_params)
        return self.send("GET", envelope, authenticated=False, environment=environment, binary=binary)

    def private_get(
        self,
        path: str,
        query_params: QueryParams = None,
        environment: Union[Environment, str, None] = None,
        binary: bool = False,
    ) -> Result:
        envelope = RequestEnvelope.create(path, query_params)
        return self.send("GET", envelope, authenticated=True, environment=environment, binary=binary)

    def private_post(
        self,
        path: str,
        body_params: Optional[Mapping[str, Any]] = None,
        query_params: QueryParams = None,
        environment: Union[Environment, str, None] = None,
    ) -> Result:
        envelope = RequestEnvelope.create(path, query_params, body_params)
        return self.send("POST", envelope, authenticated=True, environment=environment)

    def send(
        self,
        method: str,
        envelope: RequestEnvelope,
        authenticated: bool,
        environment: Union[Environment, str, None] = None,
        binary: bool = False,
    ) -> Result:
        base_url = self.base_url if environment is None else resolve(environment)
        if not authenticated:
            if envelope.body_params:
                raise ValueError("Unauthenticated requests cannot carry body parameters")
            outcome = self.dispatcher.dispatch(method, base_url, envelope.path, envelope.query_params)
            return classify(outcome, binary=binary)

        credentials = self._require_credentials()
        signed = self.sign_envelope(envelope)
        outcome = self.dispatcher.dispatch(
            method,
            base_url,
            envelope.path,
            envelope.query_params,
            encoded_payload=signed.encoded,
            signature=signed.signature,
            api_key=credentials.api_key,
        )
        return classify(outcome, binary=binary)

    def sign_envelope(self, envelope: RequestEnvelope) -> SignedPayload:
        """Consume a nonce and sign ``envelope``; nothing is sent.

        Reserved body keys are rejected before a nonce is taken.
        """

        credentials = self._require_credentials()
        check_body_params(envelope.body_params)
        nonce = self.nonces.next()
        canonical = build_payload(envelope.path, envelope.body_params, nonce)
        logger.debug("Signing %s with nonce %s", envelope.path, nonce)
        return sign(canonical, credentials.api_secret)

    def _require_credentials(self) -> Credentials:
        if self.credentials is None:
            raise ConfigurationError("This client has no credentials; private endpoints need them")
        return self.credentials

    def close(self) -> None:
        self.dispatcher.close()

    def __enter__(self) -> "GeminiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["GeminiClient"]
