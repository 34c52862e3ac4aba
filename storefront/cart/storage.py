"""Redis hash access for cart records."""
from typing import Dict, Optional

from storefront.db import get_redis, RedisKeys
from storefront.errors import StoreUnavailableError, ERROR_STORE_UNAVAILABLE
from storefront.logging import get_logger

logger = get_logger(__name__)

__all__ = ["CartStorage", "get_redis", "RedisKeys"]


class CartStorage:
    """
    Thin wrapper over the Redis hash commands a cart record needs.

    One cart record is one hash: product id -> JSON line item, plus the
    reserved `metadata` field. Every client failure surfaces as
    StoreUnavailableError; nothing is retried.
    """

    def __init__(self, redis=None):
        self._redis = redis  # Lazy initialization

    @property
    def redis(self):
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            try:
                self._redis = get_redis()
            except ValueError as e:
                raise StoreUnavailableError(f"{ERROR_STORE_UNAVAILABLE}: {e}") from e
        return self._redis

    async def read(self, key: str) -> Dict[str, str]:
        """All fields of a cart record; empty dict when absent."""
        try:
            return await self.redis.hgetall(key) or {}
        except StoreUnavailableError:
            raise
        except Exception as e:
            logger.error(f"Failed to read cart record: {e}")
            raise StoreUnavailableError(f"{ERROR_STORE_UNAVAILABLE}: {e}") from e

    async def get_field(self, key: str, field: str) -> Optional[str]:
        try:
            return await self.redis.hget(key, field)
        except StoreUnavailableError:
            raise
        except Exception as e:
            logger.error(f"Failed to read cart field: {e}")
            raise StoreUnavailableError(f"{ERROR_STORE_UNAVAILABLE}: {e}") from e

    async def write_fields(self, key: str, values: Dict[str, str]) -> None:
        if not values:
            return
        try:
            await self.redis.hset(key, values=values)
        except StoreUnavailableError:
            raise
        except Exception as e:
            logger.error(f"Failed to write cart record: {e}")
            raise StoreUnavailableError(f"{ERROR_STORE_UNAVAILABLE}: {e}") from e

    async def delete_fields(self, key: str, *fields: str) -> int:
        """Remove fields; returns how many existed."""
        if not fields:
            return 0
        try:
            return await self.redis.hdel(key, *fields)
        except StoreUnavailableError:
            raise
        except Exception as e:
            logger.error(f"Failed to delete cart fields: {e}")
            raise StoreUnavailableError(f"{ERROR_STORE_UNAVAILABLE}: {e}") from e

    async def expire(self, key: str, seconds: int) -> None:
        try:
            await self.redis.expire(key, seconds)
        except StoreUnavailableError:
            raise
        except Exception as e:
            logger.error(f"Failed to set cart expiry: {e}")
            raise StoreUnavailableError(f"{ERROR_STORE_UNAVAILABLE}: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await self.redis.delete(key)
        except StoreUnavailableError:
            raise
        except Exception as e:
            logger.error(f"Failed to delete cart record: {e}")
            raise StoreUnavailableError(f"{ERROR_STORE_UNAVAILABLE}: {e}") from e
