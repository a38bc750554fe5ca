"""Gemini exchange REST client."""

from .classifier import classify
from .client import GeminiClient
from .config import ClientConfig, Credentials, ProxyConfig, load_client_config
from .dispatcher import RequestDispatcher, TransportOutcome
from .environment import Environment, resolve
from .errors import ConfigurationError, SigningInvariantViolation
from .nonce import NonceGenerator, nonce_generator_for
from .payload import RequestEnvelope, build_payload, compact, expand_path
from .private import PrivateApi
from .public import PublicApi, summarize_symbols
from .results import ApiError, Ok, Result, TransportError
from .signer import SignedPayload, sign

__all__ = [
    "ApiError",
    "ClientConfig",
    "ConfigurationError",
    "Credentials",
    "Environment",
    "GeminiClient",
    "NonceGenerator",
    "Ok",
    "PrivateApi",
    "ProxyConfig",
    "PublicApi",
    "RequestDispatcher",
    "RequestEnvelope",
    "Result",
    "SignedPayload",
    "SigningInvariantViolation",
    "TransportError",
    "TransportOutcome",
    "build_payload",
    "classify",
    "compact",
    "expand_path",
    "load_client_config",
    "nonce_generator_for",
    "resolve",
    "sign",
    "summarize_symbols",
]
