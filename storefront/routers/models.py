"""
Cart API Pydantic Models

Request bodies for the cart endpoints.
"""
from typing import Dict
from pydantic import BaseModel, Field


class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(default=1, ge=1, le=99)
    variants: Dict[str, str] = Field(default_factory=dict)


class UpdateCartItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=0, le=99)  # 0 removes the item
