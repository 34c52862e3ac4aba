"""
Cart Errors

Centralized error messages and the exception types raised by the cart store.
The request layer translates these into HTTP responses.
"""

# Product errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"
ERROR_INSUFFICIENT_STOCK = "Insufficient stock for this product"

# Cart errors
ERROR_ITEM_NOT_IN_CART = "Product not found in cart"
ERROR_INVALID_QUANTITY = "quantity must be a positive integer"
ERROR_MISSING_SESSION = "session_id must be a non-empty string"
ERROR_MISSING_USER = "user_id must be a non-empty string"

# Store errors
ERROR_STORE_UNAVAILABLE = "Cart service unavailable"


class CartError(Exception):
    """Base class for cart store failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CartError, LookupError):
    """Referenced product does not resolve, or line item is absent."""

    status_code = 404


class InvalidArgumentError(CartError, ValueError):
    """Caller passed an argument the cart cannot accept."""

    status_code = 400


class StoreUnavailableError(CartError):
    """The key-value store could not be reached."""

    status_code = 503


__all__ = [
    "ERROR_PRODUCT_NOT_FOUND",
    "ERROR_INSUFFICIENT_STOCK",
    "ERROR_ITEM_NOT_IN_CART",
    "ERROR_INVALID_QUANTITY",
    "ERROR_MISSING_SESSION",
    "ERROR_MISSING_USER",
    "ERROR_STORE_UNAVAILABLE",
    "CartError",
    "NotFoundError",
    "InvalidArgumentError",
    "StoreUnavailableError",
]
