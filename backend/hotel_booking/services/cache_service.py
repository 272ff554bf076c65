"""
Redis cache for the booking read path.

CACHING STRATEGY
================

What we cache:
  - The serialized GET /booking response of one user
  - Cache key pattern: BOOKING_CACHE_PREFIX + user id ("booking:user:42")

Why:
  - Attendees poll their booking page far more often than they change rooms
  - The read joins enrollment, booking and room; Redis answers in ~1ms

Invalidation strategy:
  - On create/update: delete the acting user's key. A user can only move
    their own booking, so no other user's view changes.
  - TTL-based expiry as safety net (REDIS_CACHE_TTL)

Why NOT cache occupancy:
  - Create/update decide availability from the store. A stale "room is free"
    answer would only push the conflict down to the unique constraint, so
    there is nothing to gain.

Redis is optional: when disabled or unreachable every call degrades to a
cache miss and the service keeps working against the database.
"""

import json
from typing import Optional

import redis.asyncio as redis
from hotel_booking.core.config import get_settings
from hotel_booking.core.logging import get_logger
from hotel_booking.core.metrics import record_cache_operation, redis_connection_errors

logger = get_logger(__name__)
settings = get_settings()

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create Redis connection. Returns None if Redis is disabled."""
    global _redis_client

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        try:
            _redis_client = redis.from_url(
                settings.REDIS_URL,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
            )
            await _redis_client.ping()
            logger.info("redis_connected", url=settings.REDIS_URL)
        except Exception as e:
            redis_connection_errors.inc()
            logger.error("redis_connection_failed", error=str(e))
            _redis_client = None
            return None

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


def _make_booking_key(user_id: int) -> str:
    return f"{settings.BOOKING_CACHE_PREFIX}{user_id}"


async def get_cached_booking(user_id: int) -> Optional[dict]:
    """Retrieve the cached booking view of a user."""
    client = await get_redis()
    if not client:
        return None

    key = _make_booking_key(user_id)
    try:
        data = await client.get(key)
        if data:
            record_cache_operation("get", "hit")
            logger.debug("cache_hit", key=key)
            return json.loads(data)
        record_cache_operation("get", "miss")
        logger.debug("cache_miss", key=key)
    except Exception as e:
        record_cache_operation("get", "error")
        logger.error("cache_get_error", key=key, error=str(e))

    return None


async def set_cached_booking(user_id: int, data: dict) -> None:
    """Cache a user's booking view with TTL."""
    client = await get_redis()
    if not client:
        return

    key = _make_booking_key(user_id)
    try:
        await client.setex(key, settings.REDIS_CACHE_TTL, json.dumps(data, default=str))
        record_cache_operation("set", "ok")
        logger.debug("cache_set", key=key, ttl=settings.REDIS_CACHE_TTL)
    except Exception as e:
        record_cache_operation("set", "error")
        logger.error("cache_set_error", key=key, error=str(e))


async def invalidate_booking_cache(user_id: int) -> None:
    """Drop a user's cached booking view after it changed."""
    client = await get_redis()
    if not client:
        return

    key = _make_booking_key(user_id)
    try:
        deleted = await client.delete(key)
        record_cache_operation("delete", "ok")
        logger.info("cache_invalidated", key=key, keys_deleted=deleted)
    except Exception as e:
        record_cache_operation("delete", "error")
        logger.error("cache_invalidation_error", key=key, error=str(e))


async def get_cache_stats() -> dict:
    """Get Redis cache statistics for monitoring."""
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "status": "connected",
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
        }
    except Exception as e:
        return {"status": "error", "error": str(e)}
