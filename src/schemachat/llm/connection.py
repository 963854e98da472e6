"""Generic connection settings and their mapping onto an httpx client.

A `ConnectionConfig` is vendor-neutral. Adapters turn it into
`HttpClientSettings` with `to_http_client_settings` and then into a live
client with `build_http_client`. Every setting is optional; anything left unset
is omitted so the HTTP library keeps its own behaviour for it.
"""

from __future__ import annotations

import ssl
from dataclasses import dataclass
from typing import Optional, Union

import httpx

from ._transport import CircuitBreaker, GuardedTransport
from .errors import ConfigurationError


@dataclass(frozen=True)
class ApiKeyAuth:
    api_key: str


@dataclass(frozen=True)
class BearerTokenAuth:
    token: str


Auth = Union[ApiKeyAuth, BearerTokenAuth]


@dataclass(frozen=True)
class TimeoutConfig:
    total_s: Optional[float] = None
    connect_s: Optional[float] = None
    read_s: Optional[float] = None
    write_s: Optional[float] = None
    pool_s: Optional[float] = None


@dataclass(frozen=True)
class PoolConfig:
    max_connections: Optional[int] = None
    max_keepalive_connections: Optional[int] = None
    keepalive_expiry_s: Optional[float] = None


@dataclass(frozen=True)
class CircuitBreakerConfig:
    failure_threshold: int = 5
    reset_timeout_s: float = 30.0


@dataclass(frozen=True)
class RetryPolicy:
    """Connection-level retries, performed by the HTTP layer."""

    max_retries: int = 0


@dataclass(frozen=True)
class TlsConfig:
    verify: bool = True
    ca_bundle: Optional[str] = None
    client_cert: Optional[str] = None
    client_key: Optional[str] = None


@dataclass(frozen=True)
class ResponseLimits:
    max_body_bytes: Optional[int] = None


@dataclass(frozen=True)
class ConnectionConfig:
    service_url: Optional[str] = None
    auth: Optional[Auth] = None
    timeout: Optional[TimeoutConfig] = None
    pool: Optional[PoolConfig] = None
    compression: Optional[bool] = None
    circuit_breaker: Optional[CircuitBreakerConfig] = None
    retry: Optional[RetryPolicy] = None
    tls: Optional[TlsConfig] = None
    proxy_url: Optional[str] = None
    response_limits: Optional[ResponseLimits] = None


@dataclass(frozen=True)
class HttpClientSettings:
    timeout: Optional[httpx.Timeout] = None
    limits: Optional[httpx.Limits] = None
    accept_encoding: Optional[str] = None
    circuit_breaker: Optional[CircuitBreakerConfig] = None
    retries: Optional[int] = None
    verify: Union[ssl.SSLContext, bool, None] = None
    proxy: Optional[str] = None
    max_body_bytes: Optional[int] = None


def api_key_from_auth(auth: Optional[Auth]) -> str:
    """Pull the secret out of either auth shape."""

    if isinstance(auth, ApiKeyAuth):
        key = auth.api_key
    elif isinstance(auth, BearerTokenAuth):
        key = auth.token
    elif auth is None:
        raise ConfigurationError("Connection config has no auth settings")
    else:
        raise ConfigurationError(f"Unsupported auth settings: {type(auth).__name__}")

    if not key:
        raise ConfigurationError("Connection auth settings carry an empty key")
    return key


def _timeout(cfg: Optional[TimeoutConfig]) -> Optional[httpx.Timeout]:
    if cfg is None:
        return None
    parts = {
        "connect": cfg.connect_s,
        "read": cfg.read_s,
        "write": cfg.write_s,
        "pool": cfg.pool_s,
    }
    return httpx.Timeout(
        cfg.total_s, **{k: v for k, v in parts.items() if v is not None}
    )


def _limits(cfg: Optional[PoolConfig]) -> Optional[httpx.Limits]:
    if cfg is None:
        return None
    return httpx.Limits(
        max_connections=cfg.max_connections,
        max_keepalive_connections=cfg.max_keepalive_connections,
        keepalive_expiry=cfg.keepalive_expiry_s,
    )


def _accept_encoding(compression: Optional[bool]) -> Optional[str]:
    if compression is None or compression:
        # httpx negotiates gzip/deflate by default
        return None
    return "identity"


def _verify(cfg: Optional[TlsConfig]) -> Union[ssl.SSLContext, bool, None]:
    if cfg is None:
        return None
    if not cfg.verify:
        return False
    try:
        ctx = ssl.create_default_context(cafile=cfg.ca_bundle)
        if cfg.client_cert:
            ctx.load_cert_chain(cfg.client_cert, keyfile=cfg.client_key)
    except (OSError, ssl.SSLError) as e:
        raise ConfigurationError(f"Invalid TLS settings: {e}") from e
    return ctx


def to_http_client_settings(connection: ConnectionConfig) -> HttpClientSettings:
    return HttpClientSettings(
        timeout=_timeout(connection.timeout),
        limits=_limits(connection.pool),
        accept_encoding=_accept_encoding(connection.compression),
        circuit_breaker=connection.circuit_breaker,
        retries=connection.retry.max_retries if connection.retry else None,
        verify=_verify(connection.tls),
        proxy=connection.proxy_url,
        max_body_bytes=(
            connection.response_limits.max_body_bytes
            if connection.response_limits
            else None
        ),
    )


def _guard(
    transport: httpx.BaseTransport, settings: HttpClientSettings
) -> httpx.BaseTransport:
    if settings.circuit_breaker is None and settings.max_body_bytes is None:
        return transport

    breaker = None
    if settings.circuit_breaker is not None:
        breaker = CircuitBreaker(
            failure_threshold=settings.circuit_breaker.failure_threshold,
            reset_timeout_s=settings.circuit_breaker.reset_timeout_s,
        )
    return GuardedTransport(
        transport, circuit_breaker=breaker, max_body_bytes=settings.max_body_bytes
    )


def build_transport(settings: HttpClientSettings) -> httpx.BaseTransport:
    kwargs = {}
    if settings.verify is not None:
        kwargs["verify"] = settings.verify
    if settings.limits is not None:
        kwargs["limits"] = settings.limits
    if settings.retries is not None:
        kwargs["retries"] = settings.retries
    if settings.proxy is not None:
        kwargs["proxy"] = settings.proxy

    try:
        inner = httpx.HTTPTransport(**kwargs)
    except (TypeError, ValueError, httpx.InvalidURL) as e:
        raise ConfigurationError(f"Invalid HTTP transport settings: {e}") from e
    return _guard(inner, settings)


def build_http_client(
    settings: HttpClientSettings,
    *,
    base_url: Optional[str] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Create an httpx client from mapped settings.

    `transport` replaces the network transport (tests pass an
    `httpx.MockTransport`); the circuit breaker and body limit still wrap it.
    """

    if transport is None:
        transport = build_transport(settings)
    else:
        transport = _guard(transport, settings)

    kwargs = {"transport": transport}
    if base_url is not None:
        kwargs["base_url"] = base_url
    if settings.timeout is not None:
        kwargs["timeout"] = settings.timeout
    if settings.accept_encoding is not None:
        kwargs["headers"] = {"Accept-Encoding": settings.accept_encoding}

    try:
        return httpx.Client(**kwargs)
    except (TypeError, ValueError, httpx.InvalidURL) as e:
        raise ConfigurationError(f"Invalid HTTP client settings: {e}") from e
