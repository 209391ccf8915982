"""Per-client, per-method request budget.

Writes (create, patch, field replacement, delete) get a smaller budget than
reads. Disabled under ``TESTING`` unless ``RATE_LIMIT_ENABLED`` is set.
"""

from __future__ import annotations

import os
from collections.abc import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from limits import parse as parse_limit
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter
from slowapi import Limiter

READ_LIMIT = os.getenv("RATE_LIMIT_READ", "120/minute")
WRITE_LIMIT = os.getenv("RATE_LIMIT_WRITE", "30/minute")


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "local"


# slowapi shares the key function so decorator-based limits stay consistent
limiter = Limiter(key_func=client_ip)

_storage = MemoryStorage()
_strategy = MovingWindowRateLimiter(_storage)


def reset_rate_limits() -> None:
    _storage.reset()


def enabled() -> bool:
    if os.getenv("RATE_LIMIT_ENABLED", "").lower() in {"1", "true", "yes"}:
        return True
    return not os.getenv("TESTING")


def limit_for_method(method: str) -> str | None:
    method = method.upper()
    if method in {"GET", "HEAD"}:
        return READ_LIMIT
    if method in {"POST", "PATCH", "PUT", "DELETE"}:
        return WRITE_LIMIT
    # CORS preflight
    return None


async def rate_limit_middleware(request: Request, call_next: Callable) -> Response:
    limit_str = limit_for_method(request.method) if enabled() else None
    if not limit_str:
        return await call_next(request)

    ip = client_ip(request)
    if not _strategy.hit(parse_limit(limit_str), f"ip:{ip}|m:{request.method.upper()}"):
        return JSONResponse(
            status_code=429,
            content={
                "detail": "Too Many Requests",
                "errors": [f"limit {limit_str} exceeded for {request.method.upper()}"],
            },
        )

    response = await call_next(request)
    response.headers.setdefault("X-RateLimit-Limit", limit_str)
    return response
