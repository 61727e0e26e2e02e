"""
Rate limiting configuration and setup.

Uses slowapi's Limiter (and the `limits` strategy behind it) to enforce a
default per-client rate limit on every endpoint. The limit is applied by
an application-wide FastAPI dependency, so it covers routes of included
routers without relying on a middleware scan of the route table.
Protects against denial-of-service and resource abuse. Can be switched
off through settings (tests do).
"""

import logging

from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from roster.core.config import Settings

logger = logging.getLogger(__name__)

RATE_LIMIT_EXCEEDED = "rate-limit-exceeded"


class RateLimitExceededError(Exception):
    """Raised when a client goes over the default request rate."""

    def __init__(self, client_key: str, limit: str) -> None:
        super().__init__(f"Rate limit {limit} exceeded by {client_key}")
        self.client_key = client_key
        self.limit = limit


def build_limiter(settings: Settings) -> Limiter:
    """Build the application limiter from settings."""
    return Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit_default],
        enabled=settings.rate_limit_enabled,
    )


class RateLimitGuard:
    """FastAPI dependency counting one hit per request against the limit.

    Args:
        limiter: The application limiter; its storage keeps the counters.
        limit: Rate limit string such as "60/minute".
    """

    def __init__(self, limiter: Limiter, limit: str) -> None:
        self._limiter = limiter
        self._limit = limit
        self._item = parse(limit)

    def __call__(self, request: Request) -> None:
        if not self._limiter.enabled:
            return
        client_key = get_remote_address(request)
        if not self._limiter.limiter.hit(self._item, "default", client_key):
            raise RateLimitExceededError(client_key, self._limit)


def rate_limit_exceeded_handler(
    _request: Request, exc: RateLimitExceededError
) -> JSONResponse:
    """Handle rate limit exceeded errors with an error-code response.

    Args:
        _request: The incoming HTTP request.
        exc: The rate limit exceeded exception.

    Returns:
        A 429 JSON response carrying the rate-limit error code.
    """
    logger.warning("Rejected request: %s", exc)
    return JSONResponse(
        status_code=429,
        content=[{"code": RATE_LIMIT_EXCEEDED}],
    )
