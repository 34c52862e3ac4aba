"""Tests for web sessions"""
from datetime import datetime, timedelta, timezone

from storefront.auth import create_web_session, revoke_web_session, verify_web_session_token
from storefront.auth import session as session_module
from storefront.logging import sanitize_id_for_logging


def test_session_round_trip():
    token = create_web_session("42", username="tester")

    session = verify_web_session_token(token)
    assert session["user_id"] == "42"
    assert session["username"] == "tester"


def test_unknown_token():
    assert verify_web_session_token("missing") is None


def test_expired_session_is_dropped():
    token = create_web_session("42")
    past = datetime.now(timezone.utc) - timedelta(minutes=1)
    session_module._web_sessions[token]["expires_at"] = past.isoformat()

    assert verify_web_session_token(token) is None
    assert token not in session_module._web_sessions


def test_revoke():
    token = create_web_session("42")
    revoke_web_session(token)

    assert verify_web_session_token(token) is None


def test_session_ids_are_sanitized_for_logs():
    assert sanitize_id_for_logging("abcdefghijkl") == "abcdefgh"
    assert sanitize_id_for_logging("a\nb") == "a\\nb"
    assert sanitize_id_for_logging(None) == "N/A"
