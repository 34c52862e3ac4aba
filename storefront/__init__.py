"""
Storefront Cart Module

This package contains the cart subsystem of the storefront:
- db: Upstash Redis client and cart key layout
- cart: Redis hash-backed cart store
- services: Product lookup and money helpers
- routers: FastAPI JSON adapter for the page layer

Note: Imports are lazy so that importing a leaf module does not
pull in the store clients.
"""

__all__ = [
    "get_redis",
    "get_catalog",
    "get_cart_store",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "get_redis":
        from storefront.db import get_redis
        return get_redis
    elif name == "get_catalog":
        from storefront.services.catalog import get_catalog
        return get_catalog
    elif name == "get_cart_store":
        from storefront.cart import get_cart_store
        return get_cart_store
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
