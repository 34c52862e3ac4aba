"""Pytest configuration and fixtures"""
import os
import pytest
from decimal import Decimal

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_key")
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")

from storefront.cart import CartIdentity, CartStore
from storefront.config import CartSettings
from storefront.services.models import Product


class FakeRedis:
    """In-memory stand-in for the Upstash async client (hash commands only)."""

    def __init__(self):
        self.hashes = {}
        self.ttls = {}

    async def hgetall(self, key):
        return dict(self.hashes.get(key, {}))

    async def hget(self, key, field):
        return self.hashes.get(key, {}).get(field)

    async def hset(self, key, field=None, value=None, values=None):
        items = dict(values or {})
        if field is not None:
            items[field] = value
        record = self.hashes.setdefault(key, {})
        added = 0
        for f, v in items.items():
            if f not in record:
                added += 1
            record[f] = v
        return added

    async def hdel(self, key, *fields):
        record = self.hashes.get(key)
        if not record:
            return 0
        removed = 0
        for f in fields:
            if record.pop(f, None) is not None:
                removed += 1
        if not record:
            self._drop(key)
        return removed

    async def expire(self, key, seconds):
        if key not in self.hashes:
            return False
        self.ttls[key] = seconds
        return True

    async def ttl(self, key):
        if key not in self.hashes:
            return -2
        return self.ttls.get(key, -1)

    async def delete(self, *keys):
        count = 0
        for key in keys:
            if key in self.hashes:
                count += 1
            self._drop(key)
        return count

    def _drop(self, key):
        self.hashes.pop(key, None)
        self.ttls.pop(key, None)


class FakeCatalog:
    """Product lookup over a plain dict."""

    def __init__(self, products):
        self.products = {p.id: p for p in products}

    async def get_product_by_id(self, product_id):
        return self.products.get(product_id)


@pytest.fixture
def sample_products():
    """Sample catalog"""
    return [
        Product(id="prod-a", name="Linen Shirt", slug="linen-shirt", price="20.00", stock_quantity=10),
        Product(id="prod-b", name="Canvas Tote", slug="canvas-tote", price="15.50", stock_quantity=0, manage_stock=False),
        Product(id="prod-c", name="Wool Scarf", slug="wool-scarf", price=35.0, stock_quantity=2),
    ]


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def catalog(sample_products):
    return FakeCatalog(sample_products)


@pytest.fixture
def cart_settings():
    return CartSettings(
        guest_ttl_seconds=2592000,
        tax_rate=Decimal("0.20"),
        free_shipping_threshold=Decimal("50"),
        shipping_fee=Decimal("4.99"),
    )


@pytest.fixture
def store(fake_redis, catalog, cart_settings):
    """Cart store wired to the in-memory backends"""
    return CartStore(redis=fake_redis, products=catalog, settings=cart_settings)


@pytest.fixture
def guest():
    return CartIdentity.guest("guest-session-1")


@pytest.fixture
def user():
    return CartIdentity.user("42", session_id="guest-session-1")
