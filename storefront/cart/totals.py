"""Tax and shipping arithmetic for a cart subtotal."""
from decimal import Decimal
from typing import Optional, Union

from storefront.config import CartSettings
from storefront.services.money import ZERO, multiply, round_money, to_decimal
from .models import CartView, Totals


def shipping_for(subtotal: Decimal, settings: CartSettings) -> Decimal:
    """Flat fee below the free-shipping threshold, free at or above it."""
    if subtotal >= settings.free_shipping_threshold:
        return round_money(ZERO)
    return round_money(settings.shipping_fee)


def compute_totals(
    cart: Union[CartView, Decimal, int, float, str],
    settings: Optional[CartSettings] = None,
) -> Totals:
    """
    Break a cart subtotal down into tax, shipping and grand total.

    Accepts a CartView or a bare subtotal. Pure: no I/O.

    Example (default settings):
        subtotal 40 -> tax 8.00, shipping 4.99, total 52.99
        subtotal 60 -> tax 12.00, shipping 0.00, total 72.00
    """
    settings = settings or CartSettings()
    raw = cart.total if isinstance(cart, CartView) else cart
    subtotal = round_money(to_decimal(raw))

    tax = round_money(multiply(subtotal, settings.tax_rate))
    shipping = shipping_for(subtotal, settings)

    return Totals(
        subtotal=subtotal,
        tax=tax,
        shipping=shipping,
        total=round_money(subtotal + tax + shipping),
    )
