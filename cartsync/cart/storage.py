"""Durable cart slot on top of Redis."""
from typing import Optional

from cartsync.db import get_redis
from cartsync.errors import CartStorageError
from cartsync.logging import get_logger

logger = get_logger(__name__)


class CartStorage:
    """
    Raw get/set of the serialized cart.

    Values are written without TTL: the cart lives until the key is
    cleared outside this package.
    """

    def __init__(self, redis_client=None):
        self._redis = redis_client  # Lazy initialization

    @property
    def redis(self):
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            self._redis = get_redis()
        return self._redis

    async def read_raw(self, key: str) -> Optional[str]:
        try:
            data = await self.redis.get(key)
        except Exception as e:
            logger.error(f"Failed to read {key} from Redis: {e}")
            raise CartStorageError(f"Cart storage unavailable: {e}") from e

        if data is None:
            return None
        if isinstance(data, bytes):
            return data.decode("utf-8", errors="replace")
        return str(data)

    async def write_raw(self, key: str, raw: str) -> None:
        try:
            await self.redis.set(key, raw)
        except Exception as e:
            logger.error(f"Failed to write {key} to Redis: {e}")
            raise CartStorageError(f"Cart storage unavailable: {e}") from e
