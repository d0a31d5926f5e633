"""
HTTP middleware.

- BearerIdentityMiddleware: resolves the optional caller identity once per request
- SecurityHeadersMiddleware: standard hardening headers on every response
- RateLimitMiddleware: per-IP fixed-window request limit backed by Redis
"""

from __future__ import annotations

import logging
import time

from jose import JWTError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from petadopt.core.security import Identity, verify_access_token

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Authentication gate
# ---------------------------------------------------------------------------

def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an `Authorization: Bearer <token>` header, if any."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


def resolve_identity(authorization: str | None) -> Identity | None:
    """
    Resolve the caller identity from an Authorization header.

    A missing, malformed, expired or forged token resolves to None; whether
    that is acceptable is decided by each route, not here.
    """
    token = extract_bearer_token(authorization)
    if token is None:
        return None
    try:
        return verify_access_token(token)
    except JWTError as exc:
        logger.debug("Ignoring invalid bearer token: %s", exc)
        return None


class BearerIdentityMiddleware(BaseHTTPMiddleware):
    """Store the optional caller identity on request.state.identity."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.identity = resolve_identity(request.headers.get("Authorization"))
        return await call_next(request)


# ---------------------------------------------------------------------------
# Security headers
# ---------------------------------------------------------------------------

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
        return response


# ---------------------------------------------------------------------------
# Rate limiting
# ---------------------------------------------------------------------------

def rate_limit_redis_key(client_ip: str, window: int) -> str:
    """Redis key for a client's request counter. Format: ratelimit:{ip}:{window}"""
    return f"ratelimit:{client_ip}:{window}"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Fixed one-minute window per client IP.

    Uses the Redis client on app.state.redis; when there is none, or Redis
    fails, requests pass through unlimited.
    """

    def __init__(self, app, limit_per_minute: int = 100) -> None:
        super().__init__(app)
        self.limit_per_minute = limit_per_minute

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        redis = getattr(request.app.state, "redis", None)
        if redis is None:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        window = int(time.time() // 60)
        key = rate_limit_redis_key(client_ip, window)

        try:
            count = await redis.incr(key)
            if count == 1:
                await redis.expire(key, 120)
        except Exception as exc:
            logger.warning("Rate limiter unavailable, allowing request: %s", exc)
            return await call_next(request)

        if count > self.limit_per_minute:
            return JSONResponse(
                status_code=429,
                content={
                    "detail": {
                        "code": "RATE_LIMITED",
                        "message": "Rate limit exceeded. Try again later.",
                    }
                },
                headers={"Retry-After": "60"},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.limit_per_minute)
        response.headers["X-RateLimit-Remaining"] = str(max(0, self.limit_per_minute - count))
        return response
