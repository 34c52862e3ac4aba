"""Cart configuration read from the environment."""
import os
from dataclasses import dataclass
from decimal import Decimal

from storefront.services.money import to_decimal


# Guest carts are kept for 30 days; user carts never expire
DEFAULT_GUEST_TTL_SECONDS = 2592000
DEFAULT_TAX_RATE = "0.20"
DEFAULT_FREE_SHIPPING_THRESHOLD = "50"
DEFAULT_SHIPPING_FEE = "4.99"


@dataclass(frozen=True)
class CartSettings:
    """Retention and pricing knobs for the cart store."""
    guest_ttl_seconds: int = DEFAULT_GUEST_TTL_SECONDS
    tax_rate: Decimal = Decimal(DEFAULT_TAX_RATE)
    free_shipping_threshold: Decimal = Decimal(DEFAULT_FREE_SHIPPING_THRESHOLD)
    shipping_fee: Decimal = Decimal(DEFAULT_SHIPPING_FEE)

    @classmethod
    def from_env(cls) -> "CartSettings":
        """Build settings from CART_* environment variables."""
        ttl = os.environ.get("CART_GUEST_TTL_SECONDS", "")
        return cls(
            guest_ttl_seconds=int(ttl) if ttl.isdigit() else DEFAULT_GUEST_TTL_SECONDS,
            tax_rate=to_decimal(os.environ.get("CART_TAX_RATE", DEFAULT_TAX_RATE)),
            free_shipping_threshold=to_decimal(
                os.environ.get("CART_FREE_SHIPPING_THRESHOLD", DEFAULT_FREE_SHIPPING_THRESHOLD)
            ),
            shipping_fee=to_decimal(os.environ.get("CART_SHIPPING_FEE", DEFAULT_SHIPPING_FEE)),
        )
