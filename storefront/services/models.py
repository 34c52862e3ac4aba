"""Catalog Models - Pydantic models for the entities the cart reads."""
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator

from storefront.services.money import to_decimal as _to_decimal


class Product(BaseModel):
    """Product as resolved from the catalog."""
    model_config = ConfigDict(extra="ignore")  # Ignore unknown columns from DB

    id: str  # product uuid
    name: str
    slug: Optional[str] = None
    price: Decimal
    currency: str = "EUR"
    status: str = "active"  # active, inactive, draft, archived
    stock_quantity: int = 0
    manage_stock: bool = True
    featured_image: Optional[str] = None

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)

    def has_stock_for(self, quantity: int) -> bool:
        """True when the product can supply `quantity` units."""
        if not self.manage_stock:
            return True
        return self.stock_quantity >= quantity
