from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from src.storefront.core.errors import ConflictError

from .entity import User
from .table import UserTable


class UserRepository:
    """Data-access layer for users."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, user_id: str) -> User | None:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def get_by_email(self, email: str) -> User | None:
        statement = select(UserTable).where(UserTable.email == email)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def create(self, user: User) -> User:
        """Insert ``user`` and commit.

        Raises:
            ConflictError: If the email is already taken; the unique index
                catches concurrent registrations that passed the lookup
        """
        row = UserTable.model_validate(user.model_dump())
        self._session.add(row)
        try:
            self._session.commit()
        except IntegrityError as exc:
            self._session.rollback()
            raise ConflictError("User already exists") from exc
        self._session.refresh(row)
        return User.model_validate(row, from_attributes=True)
