"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.storefront.api.http.app_data import ApplicationDependencies
from src.storefront.core.errors import UnauthenticatedError, ValidationError
from src.storefront.core.services import (
    CatalogQueryService,
    PasswordHasher,
    SessionTokenService,
    UserService,
)
from src.storefront.core.services.catalog.query_builder import LISTING_PARAMS
from src.storefront.runtime.context import get_config


def _app_deps(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a database session that is closed when the request ends."""
    session = _app_deps(request).database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_password_hasher(request: Request) -> PasswordHasher:
    return _app_deps(request).password_hasher


def get_session_token_service(request: Request) -> SessionTokenService:
    return _app_deps(request).session_token_service


def get_user_service(
    db_session: Session = Depends(get_db_session),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    token_service: SessionTokenService = Depends(get_session_token_service),
) -> UserService:
    return UserService(db_session, password_hasher, token_service)


def get_catalog_service(
    db_session: Session = Depends(get_db_session),
) -> CatalogQueryService:
    return CatalogQueryService(db_session)


def require_user_id(
    request: Request,
    token_service: SessionTokenService = Depends(get_session_token_service),
) -> str:
    """Resolve the session cookie to a user id or fail with 401.

    The id is also stored on ``request.state.user_id`` for logging.
    """
    token = request.cookies.get(get_config().session.cookie_name)
    if not token:
        raise UnauthenticatedError()

    user_id = token_service.verify(token)
    request.state.user_id = user_id
    return user_id


def get_listing_params(request: Request) -> dict[str, str]:
    """Collect the single-valued listing parameters from the query string.

    Raises:
        ValidationError: If a listing parameter is given more than once
    """
    params: dict[str, str] = {}
    for key in LISTING_PARAMS:
        values = request.query_params.getlist(key)
        if len(values) > 1:
            raise ValidationError(f"'{key}' must be given at most once")
        if values:
            params[key] = values[0]
    return params
