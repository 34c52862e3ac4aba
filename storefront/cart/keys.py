"""Cart identity and key resolution."""
from dataclasses import dataclass
from typing import Optional

from storefront.db import RedisKeys
from storefront.errors import InvalidArgumentError, ERROR_MISSING_SESSION


@dataclass(frozen=True)
class CartIdentity:
    """
    Who the cart belongs to for the current request.

    The session id is always known (guests and users both have one);
    user_id is set only once the session is authenticated.
    """
    session_id: str
    user_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)

    @classmethod
    def guest(cls, session_id: str) -> "CartIdentity":
        return cls(session_id=session_id)

    @classmethod
    def user(cls, user_id: str, session_id: str = "") -> "CartIdentity":
        return cls(session_id=session_id, user_id=str(user_id))


def resolve_cart_key(identity: CartIdentity) -> str:
    """
    Resolve the Redis key for an identity.

    Authenticated identities always map to their user cart, whatever the
    session; anonymous ones map to the guest cart of their session.
    """
    if identity.is_authenticated:
        return RedisKeys.user_cart_key(identity.user_id)
    if not identity.session_id:
        raise InvalidArgumentError(ERROR_MISSING_SESSION)
    return RedisKeys.guest_cart_key(identity.session_id)
