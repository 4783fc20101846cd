"""
Redis Module - Upstash client for the durable cart slot

The cart is mirrored as one JSON string under a single key. Upstash is
reached over its REST API, so no connection pool is kept open.
"""

from typing import Optional

from upstash_redis.asyncio import Redis as AsyncRedis

from cartsync import config
from cartsync.errors import ConfigurationError


_redis_client: Optional[AsyncRedis] = None


def get_redis() -> AsyncRedis:
    """
    Get async Upstash Redis client (created on first use).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN

    Raises:
        ConfigurationError: If either variable is empty
    """
    global _redis_client

    if _redis_client is None:
        if not config.UPSTASH_REDIS_REST_URL or not config.UPSTASH_REDIS_REST_TOKEN:
            raise ConfigurationError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = AsyncRedis(url=config.UPSTASH_REDIS_REST_URL, token=config.UPSTASH_REDIS_REST_TOKEN)

    return _redis_client


class RedisKeys:
    """Redis keys used by cart sync."""

    # Serialized cart (JSON array of line items), no TTL
    CART = config.CART_STORAGE_KEY
