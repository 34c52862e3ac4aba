"""Cart package: identity, models, storage, totals, and the store facade."""
from .keys import CartIdentity, resolve_cart_key
from .models import CartMetadata, CartView, CartViewItem, LineItem, Totals
from .service import CartStore, get_cart_store
from .totals import compute_totals

__all__ = [
    "CartIdentity",
    "resolve_cart_key",
    "CartMetadata",
    "CartView",
    "CartViewItem",
    "LineItem",
    "Totals",
    "CartStore",
    "get_cart_store",
    "compute_totals",
]
