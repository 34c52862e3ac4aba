"""
Redis Module - Upstash Redis client and cart key layout.

Provides a singleton async Upstash Redis client for cart storage.
The Supabase catalog client lives in storefront.services.catalog.
"""

import os
from typing import Optional

from upstash_redis.asyncio import Redis as AsyncRedis


# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")


_redis_client: Optional[AsyncRedis] = None


def get_redis() -> AsyncRedis:
    """
    Get async Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _redis_client

    if _redis_client is None:
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = AsyncRedis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _redis_client


async def close_redis() -> None:
    """Close the shared Redis client, if one was opened."""
    global _redis_client
    if _redis_client is not None:
        await _redis_client.close()
        _redis_client = None


class RedisKeys:
    """Redis key layout for carts."""

    CART_USER = "cart:user:"  # cart:user:{user_id} -> hash
    CART_GUEST = "cart:guest:"  # cart:guest:{session_id} -> hash

    # Reserved hash field; every other field is a product id
    METADATA_FIELD = "metadata"

    @staticmethod
    def user_cart_key(user_id: str) -> str:
        return f"{RedisKeys.CART_USER}{user_id}"

    @staticmethod
    def guest_cart_key(session_id: str) -> str:
        return f"{RedisKeys.CART_GUEST}{session_id}"
