"""
Session authentication for member pages.
The sign-in flow stores the member id under ``user_id``; routes depend on
get_authenticated_member and never read the id from client input.
"""
from __future__ import annotations

import logging
from urllib.parse import quote

from fastapi import Request

logger = logging.getLogger(__name__)


class AuthenticationRequired(Exception):
    def __init__(self, redirect_to: str = "/"):
        super().__init__("auth_required")
        self.redirect_to = redirect_to


def sign_in_url(sign_in_path: str, redirect_to: str) -> str:
    return f"{sign_in_path}?redirect={quote(redirect_to or '/', safe='/')}"


def get_authenticated_member(request: Request) -> int:
    """Member id from the signed session cookie. Raises AuthenticationRequired when absent."""
    session_member_id = request.session.get("user_id")
    if not session_member_id:
        logger.info("auth: no session member for path=%s", request.url.path)
        raise AuthenticationRequired(redirect_to=request.url.path)
    try:
        return int(session_member_id)
    except (TypeError, ValueError):
        logger.warning("auth: malformed session user_id=%r", session_member_id)
        request.session.pop("user_id", None)
        raise AuthenticationRequired(redirect_to=request.url.path)
