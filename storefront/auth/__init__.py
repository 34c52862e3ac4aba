"""Authentication package."""
from .identity import resolve_identity, SESSION_COOKIE, SESSION_HEADER
from .session import create_web_session, verify_web_session_token, revoke_web_session

__all__ = [
    "resolve_identity",
    "SESSION_COOKIE",
    "SESSION_HEADER",
    "create_web_session",
    "verify_web_session_token",
    "revoke_web_session",
]
