"""
Shared Dependencies for Routers

Lazy-loaded singletons so importing the routers does not open clients.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from storefront.cart import CartStore


_cart_store: Optional["CartStore"] = None


def get_cart_store_lazy() -> "CartStore":
    """Get or create CartStore singleton (lazy loaded)"""
    global _cart_store
    if _cart_store is None:
        from storefront.cart import get_cart_store
        _cart_store = get_cart_store()
    return _cart_store
