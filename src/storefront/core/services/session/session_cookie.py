"""Session cookie emission and removal.

Browsers only delete a cookie when the deleting Set-Cookie header carries the
same path, domain, secure and samesite attributes it was set with, so both
helpers derive their attributes from ``session_cookie_settings``.
"""

from typing import Any

from fastapi import Response

from src.storefront.runtime.config.config_data import SessionConfig
from src.storefront.runtime.context import get_config


def session_cookie_settings(session: SessionConfig | None = None) -> dict[str, Any]:
    """Attributes shared by setting and clearing the session cookie."""
    session = session or get_config().session
    return {
        "httponly": True,
        "secure": session.cookie_secure,
        "samesite": session.cookie_samesite,
        "path": session.cookie_path,
        "domain": session.cookie_domain,
    }


def set_session_cookie(
    response: Response, token: str, session: SessionConfig | None = None
) -> None:
    session = session or get_config().session
    response.set_cookie(
        key=session.cookie_name,
        value=token,
        max_age=session.ttl_seconds,
        **session_cookie_settings(session),
    )


def clear_session_cookie(response: Response, session: SessionConfig | None = None) -> None:
    session = session or get_config().session
    response.delete_cookie(key=session.cookie_name, **session_cookie_settings(session))
