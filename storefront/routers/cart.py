"""
Cart Router

JSON endpoints the storefront pages call for cart state. The identity of
the caller is resolved once per request and handed to the cart store.

Response format:
- cart: items with live prices, total, quantity
- totals: subtotal, tax, shipping, grand total
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.auth.identity import require_user, resolve_identity
from storefront.cart import CartIdentity, CartStore, CartView
from storefront.errors import (
    ERROR_INSUFFICIENT_STOCK,
    ERROR_PRODUCT_NOT_FOUND,
    CartError,
    NotFoundError,
)
from storefront.logging import get_logger
from .deps import get_cart_store_lazy
from .models import AddToCartRequest, UpdateCartItemRequest

logger = get_logger(__name__)

router = APIRouter(tags=["cart"])


def _format_cart_response(store: CartStore, view: CartView) -> dict:
    return {
        "cart": view.to_dict(),
        "totals": store.compute_totals(view).to_dict(),
    }


def _to_http(e: CartError) -> HTTPException:
    if e.status_code >= 500:
        logger.error(f"Cart operation failed: {e}")
    return HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/cart")
async def get_cart(
    identity: CartIdentity = Depends(resolve_identity),
    store: CartStore = Depends(get_cart_store_lazy),
):
    """Current cart with totals."""
    try:
        view = await store.get_cart(identity)
    except CartError as e:
        raise _to_http(e)
    return _format_cart_response(store, view)


@router.get("/cart/count")
async def get_cart_count(
    identity: CartIdentity = Depends(resolve_identity),
    store: CartStore = Depends(get_cart_store_lazy),
):
    """Number of units in the cart (header badge)."""
    try:
        count = await store.get_cart_count(identity)
    except CartError as e:
        raise _to_http(e)
    return {"count": count}


@router.post("/cart/add")
async def add_to_cart(
    request: AddToCartRequest,
    identity: CartIdentity = Depends(resolve_identity),
    store: CartStore = Depends(get_cart_store_lazy),
):
    """Add a product; it must exist and have stock for the quantity."""
    try:
        if await store.products.get_product_by_id(request.product_id) is None:
            raise NotFoundError(ERROR_PRODUCT_NOT_FOUND)
        if not await store.validate_stock(request.product_id, request.quantity):
            raise HTTPException(status_code=409, detail=ERROR_INSUFFICIENT_STOCK)
        view = await store.add_item(
            identity,
            request.product_id,
            quantity=request.quantity,
            variants=request.variants,
        )
    except CartError as e:
        raise _to_http(e)
    return _format_cart_response(store, view)


@router.patch("/cart/item")
async def update_cart_item(
    request: UpdateCartItemRequest,
    identity: CartIdentity = Depends(resolve_identity),
    store: CartStore = Depends(get_cart_store_lazy),
):
    """Set a line item's quantity (0 = remove)."""
    try:
        view = await store.update_item(identity, request.product_id, request.quantity)
    except CartError as e:
        raise _to_http(e)
    return _format_cart_response(store, view)


@router.delete("/cart/item")
async def remove_cart_item(
    product_id: str,
    identity: CartIdentity = Depends(resolve_identity),
    store: CartStore = Depends(get_cart_store_lazy),
):
    """Remove a line item."""
    try:
        view = await store.remove_item(identity, product_id)
    except CartError as e:
        raise _to_http(e)
    return _format_cart_response(store, view)


@router.delete("/cart/last")
async def remove_last_cart_item(
    identity: CartIdentity = Depends(resolve_identity),
    store: CartStore = Depends(get_cart_store_lazy),
):
    """Remove the most recently added line item."""
    try:
        view = await store.remove_last_item(identity)
    except CartError as e:
        raise _to_http(e)
    return _format_cart_response(store, view)


@router.post("/cart/clear")
async def clear_cart(
    identity: CartIdentity = Depends(resolve_identity),
    store: CartStore = Depends(get_cart_store_lazy),
):
    """Empty the cart."""
    try:
        view = await store.clear_cart(identity)
    except CartError as e:
        raise _to_http(e)
    return _format_cart_response(store, view)


@router.post("/cart/merge")
async def merge_guest_cart(
    identity: CartIdentity = Depends(require_user),
    store: CartStore = Depends(get_cart_store_lazy),
):
    """
    Hand the guest cart of this session over to the logged-in user.

    Called once right after login/registration, with the same session
    header or cookie the guest used.
    """
    try:
        view = await store.merge_guest_into_user(identity.session_id, identity.user_id)
    except CartError as e:
        raise _to_http(e)
    return _format_cart_response(store, view)
