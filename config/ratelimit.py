# config/ratelimit.py
import logging
from typing import Optional
from fastapi import Request
from fastapi_limiter import FastAPILimiter
from redis.asyncio import Redis, from_url
from config.settings import settings

logger = logging.getLogger(__name__)

_redis: Optional[Redis] = None


async def client_ip(request: Request) -> str:
    # Limiter bucket key; behind a proxy the first X-Forwarded-For hop is the client.
    if settings.TRUST_PROXY:
        fwd = request.headers.get("x-forwarded-for")
        if fwd:
            return fwd.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def init_rate_limiter() -> None:
    """
    Connect to REDIS_URL and hand the connection to fastapi-limiter.
    No-op unless RATE_LIMIT_ENABLED. Raises if Redis is unreachable.
    """
    global _redis
    if not settings.RATE_LIMIT_ENABLED or _redis is not None:
        return
    _redis = from_url(
        settings.REDIS_URL,
        encoding="utf-8",
        socket_keepalive=True,
        health_check_interval=30,
    )
    await _redis.ping()
    await FastAPILimiter.init(_redis, identifier=client_ip)
    logger.info(
        "ratelimit.ready times=%d seconds=%d",
        settings.RATE_LIMIT_TIMES,
        settings.RATE_LIMIT_SECONDS,
    )


async def close_rate_limiter() -> None:
    global _redis
    if _redis is not None:
        await _redis.aclose()
        _redis = None
