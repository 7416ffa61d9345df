from .session_cookie import clear_session_cookie, session_cookie_settings, set_session_cookie
from .session_tokens import DEV_SIGNING_SECRET, SessionTokenService, resolve_signing_secret

__all__ = [
    "DEV_SIGNING_SECRET",
    "SessionTokenService",
    "clear_session_cookie",
    "resolve_signing_secret",
    "session_cookie_settings",
    "set_session_cookie",
]
