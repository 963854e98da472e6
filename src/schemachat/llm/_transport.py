from __future__ import annotations

import threading
import time
from typing import Optional

import httpx

from schemachat import logger as logger_mod

log = logger_mod.get_logger()


class CircuitOpenError(httpx.TransportError):
    """Request rejected because the circuit breaker is open."""


class ResponseTooLargeError(httpx.TransportError):
    """Response body exceeded the configured limit."""


class CircuitBreaker:
    """Consecutive-failure circuit breaker.

    closed -> open after `failure_threshold` failures in a row; after
    `reset_timeout_s` a single probe request is let through (half-open).
    """

    def __init__(self, *, failure_threshold: int, reset_timeout_s: float):
        self._threshold = max(1, int(failure_threshold))
        self._reset_timeout_s = float(reset_timeout_s)
        self._lock = threading.Lock()
        self._failures = 0
        self._opened_at: Optional[float] = None
        self._probing = False

    @property
    def state(self) -> str:
        """One of "closed", "open" or "half_open" (reset timeout passed)."""
        with self._lock:
            if self._opened_at is None:
                return "closed"
            if self._probing:
                return "half_open"
            if time.monotonic() - self._opened_at >= self._reset_timeout_s:
                return "half_open"
            return "open"

    @property
    def is_open(self) -> bool:
        """True only in the fully open state; half-open reports False."""
        return self.state == "open"

    def before_request(self, request: httpx.Request) -> None:
        with self._lock:
            if self._opened_at is None:
                return
            elapsed = time.monotonic() - self._opened_at
            if elapsed >= self._reset_timeout_s and not self._probing:
                self._probing = True
                return
        raise CircuitOpenError(
            f"Circuit open for {request.url.host}; request rejected", request=request
        )

    def record_success(self) -> None:
        with self._lock:
            self._failures = 0
            self._opened_at = None
            self._probing = False

    def record_failure(self) -> None:
        with self._lock:
            self._failures += 1
            if self._probing or self._failures >= self._threshold:
                if self._opened_at is None or self._probing:
                    log.warning(
                        "Circuit breaker opened after %s consecutive failures",
                        self._failures,
                    )
                self._opened_at = time.monotonic()
                self._probing = False


class GuardedTransport(httpx.BaseTransport):
    """Wrap a transport with a circuit breaker and a response body limit."""

    def __init__(
        self,
        inner: httpx.BaseTransport,
        *,
        circuit_breaker: Optional[CircuitBreaker] = None,
        max_body_bytes: Optional[int] = None,
    ) -> None:
        self._inner = inner
        self._breaker = circuit_breaker
        self._max_body_bytes = max_body_bytes

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        if self._breaker is not None:
            self._breaker.before_request(request)

        try:
            response = self._inner.handle_request(request)
        except httpx.TransportError:
            if self._breaker is not None:
                self._breaker.record_failure()
            raise

        if self._breaker is not None:
            if response.status_code >= 500:
                self._breaker.record_failure()
            else:
                self._breaker.record_success()

        if self._max_body_bytes is None:
            return response
        return self._limit_body(request, response)

    def _limit_body(
        self, request: httpx.Request, response: httpx.Response
    ) -> httpx.Response:
        limit = self._max_body_bytes
        chunks: list[bytes] = []
        size = 0
        try:
            for chunk in response.stream:
                size += len(chunk)
                if size > limit:
                    raise ResponseTooLargeError(
                        f"Response body exceeded {limit} bytes", request=request
                    )
                chunks.append(chunk)
        finally:
            response.close()

        return httpx.Response(
            response.status_code,
            headers=response.headers,
            content=b"".join(chunks),
            request=request,
            extensions=response.extensions,
        )

    def close(self) -> None:
        self._inner.close()
