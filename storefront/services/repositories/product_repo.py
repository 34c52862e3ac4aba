"""Product Repository - product lookups for the cart."""
import uuid
from typing import Optional
from .base import BaseRepository
from storefront.services.models import Product

# Catalog status that no longer resolves for carts
ARCHIVED_STATUS = "archived"


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


class ProductRepository(BaseRepository):
    """Product database operations."""

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        """Get product by its public uuid; archived products do not resolve."""
        # products.uuid is a Postgres uuid column; PostgREST rejects anything else
        if not _is_uuid(product_id):
            return None

        result = await (
            self.client.table("products")
            .select("*")
            .eq("uuid", product_id)
            .neq("status", ARCHIVED_STATUS)
            .limit(1)
            .execute()
        )

        if not result.data:
            return None

        row = dict(result.data[0])
        row["id"] = row.pop("uuid")
        return Product(**row)
