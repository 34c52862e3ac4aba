"""Resolve the cart identity of the current request."""
from typing import Optional

from fastapi import Cookie, Depends, Header, HTTPException, Response

from storefront.cart import CartIdentity
from .session import new_guest_session_id, verify_web_session_token

SESSION_COOKIE = "cart_session"
SESSION_HEADER = "X-Cart-Session"
SESSION_COOKIE_MAX_AGE = 2592000  # matches guest cart retention


def _bearer_user_id(authorization: Optional[str]) -> Optional[str]:
    """User id for a valid `Authorization: Bearer <session>` header."""
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=401, detail="Unsupported authorization scheme")
    session = verify_web_session_token(parts[1])
    if not session:
        raise HTTPException(status_code=401, detail="Invalid session token")
    return session["user_id"]


async def resolve_identity(
    response: Response,
    authorization: str = Header(None, alias="Authorization"),
    x_cart_session: str = Header(None, alias=SESSION_HEADER),
    cart_session: str = Cookie(None, alias=SESSION_COOKIE),
) -> CartIdentity:
    """
    Build the CartIdentity for this request.

    The guest session comes from the X-Cart-Session header or the
    cart_session cookie; a fresh one is issued (and set as cookie) when
    neither is present. A valid bearer token makes the identity a user.
    """
    user_id = _bearer_user_id(authorization)

    session_id = x_cart_session or cart_session
    if not session_id:
        session_id = new_guest_session_id()
        response.set_cookie(
            SESSION_COOKIE,
            session_id,
            max_age=SESSION_COOKIE_MAX_AGE,
            httponly=True,
            samesite="lax",
        )

    return CartIdentity(session_id=session_id, user_id=user_id)


async def require_user(identity: CartIdentity = Depends(resolve_identity)) -> CartIdentity:
    """Identity of an authenticated user, 401 otherwise."""
    if not identity.is_authenticated:
        raise HTTPException(status_code=401, detail="Authentication required")
    return identity
