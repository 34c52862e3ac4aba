"""Cart store service using Redis hash storage."""
from typing import Dict, List, Optional, Tuple

from storefront.config import CartSettings
from storefront.errors import (
    ERROR_INVALID_QUANTITY,
    ERROR_ITEM_NOT_IN_CART,
    ERROR_MISSING_SESSION,
    ERROR_MISSING_USER,
    ERROR_PRODUCT_NOT_FOUND,
    InvalidArgumentError,
    NotFoundError,
)
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.catalog import ProductLookup
from storefront.services.money import ZERO, multiply, round_money
from .keys import CartIdentity, resolve_cart_key
from .models import CartMetadata, CartView, CartViewItem, LineItem, Totals
from .storage import CartStorage, RedisKeys
from .totals import compute_totals

logger = get_logger(__name__)


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def _line_items(record: Dict[str, str]) -> Dict[str, str]:
    """Strip the reserved metadata field from a raw cart record."""
    return {k: v for k, v in record.items() if k != RedisKeys.METADATA_FIELD}


class CartStore:
    """
    Per-identity shopping carts in Redis.

    Every operation takes an explicit CartIdentity and is a plain
    read-then-write against the store: no locks, no transactions. Two
    concurrent writes for the same identity resolve as last-writer-wins.

    Usage:
        store = CartStore(products=catalog)
        view = await store.add_item(identity, product_id, quantity=2)
        totals = store.compute_totals(view)
    """

    def __init__(
        self,
        redis=None,
        products: Optional[ProductLookup] = None,
        settings: Optional[CartSettings] = None,
    ):
        self.storage = CartStorage(redis)
        self._products = products  # Lazy initialization
        self.settings = settings or CartSettings.from_env()

    @property
    def products(self) -> ProductLookup:
        """Product lookup (defaults to the Supabase catalog)."""
        if self._products is None:
            from storefront.services.catalog import get_catalog
            self._products = get_catalog()
        return self._products

    # ==================== READ ====================

    async def get_cart(self, identity: CartIdentity) -> CartView:
        """
        Build the cart view for an identity.

        Line items whose product no longer resolves (or whose stored JSON
        is unreadable) are deleted from the record; the count is reported
        in `CartView.pruned`.
        """
        return await self._build_view(resolve_cart_key(identity))

    async def get_cart_count(self, identity: CartIdentity) -> int:
        """Total units in the cart (for the header badge)."""
        view = await self.get_cart(identity)
        return view.quantity

    async def _build_view(self, key: str) -> CartView:
        record = await self.storage.read(key)
        if not record:
            return CartView.empty()

        items: List[CartViewItem] = []
        dangling: List[str] = []
        total = ZERO
        quantity = 0

        for product_id, payload in _line_items(record).items():
            try:
                line = LineItem.from_json(payload)
            except (ValueError, KeyError, TypeError) as e:
                logger.warning(
                    f"Corrupted line item {sanitize_id_for_logging(product_id)} in cart: {e}"
                )
                dangling.append(product_id)
                continue

            product = await self.products.get_product_by_id(product_id)
            if product is None:
                logger.warning(
                    f"Dropping line item for missing product {sanitize_id_for_logging(product_id)}"
                )
                dangling.append(product_id)
                continue

            subtotal = round_money(multiply(product.price, line.quantity))
            items.append(CartViewItem(line_item=line, product=product, subtotal=subtotal))
            total += subtotal
            quantity += line.quantity

        if dangling:
            await self.storage.delete_fields(key, *dangling)

        return CartView(items=items, total=total, quantity=quantity, pruned=len(dangling))

    async def _read_line(self, key: str, product_id: str) -> Optional[LineItem]:
        payload = await self.storage.get_field(key, product_id)
        if payload is None:
            return None
        try:
            return LineItem.from_json(payload)
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(
                f"Corrupted line item {sanitize_id_for_logging(product_id)} in cart: {e}"
            )
            return None

    # ==================== WRITE ====================

    async def _write_metadata(self, key: str, session_id: str, owner: Optional[str]) -> None:
        metadata = CartMetadata(session_id=session_id, owner=owner)
        await self.storage.write_fields(key, {RedisKeys.METADATA_FIELD: metadata.to_json()})

    async def _touch(self, key: str, identity: CartIdentity) -> None:
        await self._write_metadata(key, identity.session_id, identity.user_id)

    async def add_item(
        self,
        identity: CartIdentity,
        product_id: str,
        quantity: int = 1,
        variants: Optional[Dict[str, str]] = None,
    ) -> CartView:
        """
        Add units of a product to the cart.

        An existing line item for the product is incremented and keeps its
        original variants; otherwise a new line item is created with a
        snapshot of the current price. Guest carts get their retention
        window (re)applied; user carts never expire.

        Raises:
            InvalidArgumentError: quantity is not a positive integer
            NotFoundError: product does not resolve
        """
        if not product_id or not isinstance(product_id, str):
            raise InvalidArgumentError("product_id must be a non-empty string")
        if not _is_positive_int(quantity):
            raise InvalidArgumentError(ERROR_INVALID_QUANTITY)

        product = await self.products.get_product_by_id(product_id)
        if product is None:
            raise NotFoundError(ERROR_PRODUCT_NOT_FOUND)

        key = resolve_cart_key(identity)
        line = await self._read_line(key, product_id)

        if line is not None:
            line.quantity += quantity
            line.touch()
        else:
            line = LineItem(
                product_id=product_id,
                quantity=quantity,
                variants=dict(variants or {}),
                price=product.price,
            )

        await self.storage.write_fields(key, {product_id: line.to_json()})

        if not identity.is_authenticated:
            await self.storage.expire(key, self.settings.guest_ttl_seconds)

        await self._touch(key, identity)

        logger.info(
            f"Cart add: product={sanitize_id_for_logging(product_id)} "
            f"qty={quantity} line_qty={line.quantity}"
        )
        return await self._build_view(key)

    async def update_item(
        self,
        identity: CartIdentity,
        product_id: str,
        quantity: int,
    ) -> CartView:
        """
        Replace the quantity of a line item (0 or less removes it).

        Raises:
            NotFoundError: the product is not in the cart
        """
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise InvalidArgumentError("quantity must be an integer")
        if quantity <= 0:
            return await self.remove_item(identity, product_id)

        key = resolve_cart_key(identity)
        line = await self._read_line(key, product_id)
        if line is None:
            raise NotFoundError(ERROR_ITEM_NOT_IN_CART)

        line.quantity = quantity
        line.touch()
        await self.storage.write_fields(key, {product_id: line.to_json()})
        await self._touch(key, identity)

        return await self._build_view(key)

    async def remove_item(self, identity: CartIdentity, product_id: str) -> CartView:
        """Remove a line item. Absent items are not an error."""
        key = resolve_cart_key(identity)
        removed = await self.storage.delete_fields(key, product_id)
        # An absent item leaves the record untouched, metadata included
        if removed:
            await self._touch(key, identity)
        return await self._build_view(key)

    async def remove_last_item(self, identity: CartIdentity) -> CartView:
        """Remove the most recently added line item ("undo last add")."""
        key = resolve_cart_key(identity)
        record = await self.storage.read(key)

        latest: Optional[Tuple[str, str]] = None
        for product_id, payload in _line_items(record).items():
            try:
                added_at = LineItem.from_json(payload).added_at
            except (ValueError, KeyError, TypeError):
                continue
            if latest is None or added_at > latest[1]:
                latest = (product_id, added_at)

        if latest is None:
            return await self._build_view(key)

        await self.storage.delete_fields(key, latest[0])
        await self._touch(key, identity)
        return await self._build_view(key)

    async def clear_cart(self, identity: CartIdentity) -> CartView:
        """Delete the whole cart record, metadata included."""
        key = resolve_cart_key(identity)
        await self.storage.delete(key)
        return CartView.empty()

    async def merge_guest_into_user(self, guest_session_id: str, user_id: str) -> CartView:
        """
        Move a guest cart into a user cart at login.

        Quantities of products present in both carts are summed and the
        user's variants win (last-owner-wins on variant metadata); products
        only in the guest cart are copied verbatim. The guest record is
        deleted afterwards, so calling this twice is harmless.

        A guest line that cannot be parsed while the user also holds the
        product is dropped with a warning: the user line is kept unchanged
        and the guest quantity is lost with the guest record.
        """
        if not guest_session_id:
            raise InvalidArgumentError(ERROR_MISSING_SESSION)
        if not user_id:
            raise InvalidArgumentError(ERROR_MISSING_USER)

        guest_key = RedisKeys.guest_cart_key(guest_session_id)
        user_key = RedisKeys.user_cart_key(str(user_id))

        guest_record = await self.storage.read(guest_key)
        guest_items = _line_items(guest_record)

        if not guest_items:
            if guest_record:
                # Metadata-only leftover
                await self.storage.delete(guest_key)
            return await self._build_view(user_key)

        user_items = _line_items(await self.storage.read(user_key))

        updates: Dict[str, str] = {}
        for product_id, payload in guest_items.items():
            existing = user_items.get(product_id)
            if existing is None:
                updates[product_id] = payload
                continue
            try:
                guest_line = LineItem.from_json(payload)
                user_line = LineItem.from_json(existing)
            except (ValueError, KeyError, TypeError) as e:
                logger.warning(
                    f"Skipping unreadable line item {sanitize_id_for_logging(product_id)} during merge: {e}"
                )
                continue
            user_line.quantity += guest_line.quantity
            user_line.touch()
            updates[product_id] = user_line.to_json()

        await self.storage.write_fields(user_key, updates)
        await self.storage.delete(guest_key)
        await self._write_metadata(user_key, guest_session_id, str(user_id))

        logger.info(
            f"Merged guest cart {sanitize_id_for_logging(guest_session_id)} "
            f"into user {sanitize_id_for_logging(str(user_id))}: {len(updates)} line items"
        )
        return await self._build_view(user_key)

    # ==================== STOCK & TOTALS ====================

    async def validate_stock(self, product_id: str, quantity: int) -> bool:
        """True when the product exists and can supply `quantity` units."""
        product = await self.products.get_product_by_id(product_id)
        if product is None:
            return False
        return product.has_stock_for(quantity)

    def compute_totals(self, view: CartView) -> Totals:
        """Tax/shipping/grand total for a view, using this store's settings."""
        return compute_totals(view, self.settings)


# Singleton instance
_cart_store: Optional[CartStore] = None


def get_cart_store() -> CartStore:
    """Get CartStore singleton."""
    global _cart_store
    if _cart_store is None:
        _cart_store = CartStore()
    return _cart_store
