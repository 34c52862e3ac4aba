"""Cart models with Decimal-based pricing."""
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional

from storefront.services.models import Product
from storefront.services.money import ZERO, to_decimal, to_float


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class LineItem:
    """
    One product entry in a cart record.

    `price` is the catalog price when the item was first added. It is kept
    for audit only; cart totals always use the live product price.
    """
    product_id: str
    quantity: int
    variants: Dict[str, str] = field(default_factory=dict)
    price: Decimal = ZERO
    added_at: str = ""
    updated_at: str = ""

    def __post_init__(self):
        now = utcnow_iso()
        if not self.added_at:
            self.added_at = now
        if not self.updated_at:
            self.updated_at = now
        self.price = to_decimal(self.price)
        self.quantity = int(self.quantity)

    def touch(self) -> None:
        self.updated_at = utcnow_iso()

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "quantity": self.quantity,
            "variants": dict(self.variants),
            "price": str(self.price),
            "added_at": self.added_at,
            "updated_at": self.updated_at,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        return cls(
            product_id=data["product_id"],
            quantity=int(data["quantity"]),
            variants=dict(data.get("variants") or {}),
            price=to_decimal(data.get("price")),
            added_at=data.get("added_at", ""),
            updated_at=data.get("updated_at", ""),
        )

    @classmethod
    def from_json(cls, payload: str) -> "LineItem":
        """Parse a stored line item. Raises ValueError/KeyError/TypeError on bad data."""
        return cls.from_dict(json.loads(payload))


@dataclass
class CartMetadata:
    """Bookkeeping stored under the reserved `metadata` hash field."""
    session_id: str
    owner: Optional[str] = None
    updated_at: str = ""

    def __post_init__(self):
        if not self.updated_at:
            self.updated_at = utcnow_iso()

    def to_json(self) -> str:
        return json.dumps({
            "updated_at": self.updated_at,
            "owner": self.owner,
            "session_id": self.session_id,
        })

    @classmethod
    def from_json(cls, payload: str) -> "CartMetadata":
        data = json.loads(payload)
        return cls(
            session_id=data.get("session_id") or "",
            owner=data.get("owner"),
            updated_at=data.get("updated_at", ""),
        )


@dataclass
class CartViewItem:
    """Line item joined with its live product."""
    line_item: LineItem
    product: Product
    subtotal: Decimal

    @property
    def product_id(self) -> str:
        return self.line_item.product_id

    @property
    def quantity(self) -> int:
        return self.line_item.quantity

    def to_dict(self) -> dict:
        return {
            **self.line_item.to_dict(),
            "price": to_float(self.line_item.price),
            "product": {
                "id": self.product.id,
                "name": self.product.name,
                "slug": self.product.slug,
                "price": to_float(self.product.price),
                "currency": self.product.currency,
                "featured_image": self.product.featured_image,
            },
            "subtotal": to_float(self.subtotal),
        }


@dataclass
class CartView:
    """Read-time view of a cart; never persisted."""
    items: List[CartViewItem]
    total: Decimal = ZERO
    quantity: int = 0
    updated_at: str = ""
    # Dangling line items dropped from the record while building this view
    pruned: int = 0

    def __post_init__(self):
        if not self.updated_at:
            self.updated_at = utcnow_iso()

    @classmethod
    def empty(cls) -> "CartView":
        return cls(items=[])

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find(self, product_id: str) -> Optional[CartViewItem]:
        return next((item for item in self.items if item.product_id == product_id), None)

    def to_dict(self) -> dict:
        return {
            "items": [item.to_dict() for item in self.items],
            "total": to_float(self.total),
            "quantity": self.quantity,
            "updated_at": self.updated_at,
            "pruned": self.pruned,
        }


@dataclass(frozen=True)
class Totals:
    """Checkout breakdown derived from a cart subtotal."""
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal

    def to_dict(self) -> dict:
        return {
            "subtotal": to_float(self.subtotal),
            "tax": to_float(self.tax),
            "shipping": to_float(self.shipping),
            "total": to_float(self.total),
        }
