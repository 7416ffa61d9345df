"""Unit tests for the user entity package."""

from uuid import UUID

import pytest
from sqlmodel import Session

from src.storefront.core.errors import ConflictError
from src.storefront.entities.user import User, UserRepository


class TestUserRepository:
    """Test user persistence."""

    def test_create_assigns_uuid(self, session: Session):
        repository = UserRepository(session)

        user = repository.create(User(name="Ada", email="ada@example.com", password_hash="h"))

        UUID(user.id)
        assert repository.get(user.id) == user

    def test_get_by_email(self, session: Session):
        repository = UserRepository(session)
        created = repository.create(User(name="Ada", email="ada@example.com", password_hash="h"))

        assert repository.get_by_email("ada@example.com") == created
        assert repository.get_by_email("ADA@example.com") is None

    def test_duplicate_email_raises_conflict(self, session: Session):
        repository = UserRepository(session)
        repository.create(User(name="Ada", email="ada@example.com", password_hash="h"))

        with pytest.raises(ConflictError, match="User already exists"):
            repository.create(User(name="Other", email="ada@example.com", password_hash="h"))

    def test_password_hash_not_in_repr(self):
        user = User(name="Ada", email="ada@example.com", password_hash="secret-hash")

        assert "secret-hash" not in repr(user)
