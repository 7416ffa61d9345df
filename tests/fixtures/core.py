from __future__ import annotations

import random
from collections.abc import Generator
from contextvars import ContextVar

import pytest
from sqlmodel import Session

from src.storefront.core.services import (
    DbManageService,
    DbSessionService,
    PasswordHasher,
    SessionTokenService,
)
from src.storefront.core.services.catalog import generate_seed_products
from src.storefront.entities.product import Product
from src.storefront.runtime import context as context_module
from src.storefront.runtime.config.config_data import (
    AppConfig,
    CatalogConfig,
    ConfigData,
    PasswordConfig,
    SessionConfig,
)
from src.storefront.runtime.context import AppContext

TEST_SIGNING_SECRET = "test-signing-secret"


@pytest.fixture
def test_config() -> ConfigData:
    return ConfigData(
        app=AppConfig(environment="test"),
        session=SessionConfig(signing_secret=TEST_SIGNING_SECRET),
        password=PasswordConfig(bcrypt_rounds=4),
        catalog=CatalogConfig(seed_on_startup=False),
    )


@pytest.fixture
def app_config(test_config: ConfigData, monkeypatch) -> ConfigData:
    """Make ``test_config`` the configuration seen by every thread.

    A fresh ContextVar default is used because request handlers run in
    worker threads that do not inherit the test's context.
    """
    monkeypatch.setattr(
        context_module,
        "_app_context",
        ContextVar("app_context", default=AppContext(config=test_config)),
    )
    return test_config


@pytest.fixture
def db_service(test_config: ConfigData) -> Generator[DbSessionService]:
    """In-memory SQLite database with the storefront schema."""
    service = DbSessionService("sqlite://", config=test_config)
    DbManageService(service).create_all()
    try:
        yield service
    finally:
        service.dispose()


@pytest.fixture
def session(db_service: DbSessionService) -> Generator[Session]:
    db = db_service.get_session()
    try:
        yield db
    finally:
        db.rollback()
        db.close()


@pytest.fixture
def password_hasher() -> PasswordHasher:
    # Minimum cost keeps the suite fast
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_service() -> SessionTokenService:
    return SessionTokenService(TEST_SIGNING_SECRET)


@pytest.fixture
def seed_products() -> list[Product]:
    return generate_seed_products(50, rng=random.Random(1234))
