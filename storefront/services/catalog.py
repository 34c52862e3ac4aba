"""
Catalog Service - product lookup for the cart.

Usage:
    from storefront.services.catalog import get_catalog

    # At FastAPI startup (lifespan):
    await init_catalog()

    catalog = get_catalog()
    product = await catalog.get_product_by_id("3f1c...")
"""

import os
from typing import Optional, Protocol

from supabase._async.client import AsyncClient
from supabase._async.client import create_client as acreate_client

from storefront.logging import get_logger
from storefront.services.models import Product
from storefront.services.repositories import ProductRepository

logger = get_logger(__name__)


class ProductLookup(Protocol):
    """Anything that resolves a product id to live catalog data."""

    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        ...


class Catalog:
    """Supabase-backed product lookup."""

    def __init__(self, client: AsyncClient):
        """Private constructor. Use Catalog.create() or init_catalog() instead."""
        self.client = client
        self._products_repo = ProductRepository(self.client)

    @classmethod
    async def create(cls) -> "Catalog":
        """Async factory: creates the Supabase client from the environment."""
        url = os.environ.get("SUPABASE_URL")
        key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY")
        if not url or not key:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

        client = await acreate_client(url, key)
        return cls(client)

    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        return await self._products_repo.get_by_id(product_id)


_catalog: Optional[Catalog] = None


async def init_catalog() -> Catalog:
    """Initialize the catalog singleton. Call once at startup."""
    global _catalog
    if _catalog is not None:
        return _catalog

    _catalog = await Catalog.create()
    logger.info("Catalog initialized")
    return _catalog


def get_catalog() -> Catalog:
    """
    Get catalog instance.

    Raises:
        RuntimeError: If init_catalog() has not run
    """
    if _catalog is None:
        raise RuntimeError("Catalog not initialized. Call init_catalog() at startup.")
    return _catalog


def close_catalog() -> None:
    """Drop the catalog singleton (FastAPI shutdown)."""
    global _catalog
    _catalog = None
