from loguru import logger
from sqlmodel import Session

from src.storefront.core.errors import (
    ConflictError,
    UnauthenticatedError,
    ValidationError,
)
from src.storefront.core.services.password_service import MAX_PASSWORD_BYTES, PasswordHasher
from src.storefront.core.services.session.session_tokens import SessionTokenService
from src.storefront.entities.user import User, UserRepository

ALL_FIELDS_REQUIRED = "All fields are required"
INVALID_CREDENTIALS = "Invalid credentials"


def _required(*values: object) -> list[str]:
    cleaned = [value.strip() if isinstance(value, str) else "" for value in values]
    if not all(cleaned):
        raise ValidationError(ALL_FIELDS_REQUIRED)
    return cleaned


def _required_password(password: object) -> str:
    # Used verbatim; only an empty value counts as missing
    if not isinstance(password, str) or not password:
        raise ValidationError(ALL_FIELDS_REQUIRED)
    return password


class UserService:
    """Registration, login and identity lookup for shoppers."""

    def __init__(
        self,
        db_session: Session,
        password_hasher: PasswordHasher,
        token_service: SessionTokenService,
    ):
        self._users = UserRepository(db_session)
        self._password_hasher = password_hasher
        self._token_service = token_service

    def register(self, name: str, email: str, password: str) -> tuple[User, str]:
        """Create an account and issue a session token for it.

        Raises:
            ValidationError: If a field is missing or the password is too long
            ConflictError: If the email is already registered
        """
        name, email = _required(name, email)
        password = _required_password(password)
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

        if self._users.get_by_email(email) is not None:
            raise ConflictError("User already exists")

        user = self._users.create(
            User(name=name, email=email, password_hash=self._password_hasher.hash(password))
        )
        logger.info("Registered user {}", user.id)
        return user, self._token_service.issue(user.id)

    def login(self, email: str, password: str) -> tuple[User, str]:
        """Verify credentials and issue a session token.

        Unknown email and wrong password fail with the same message.
        """
        (email,) = _required(email)
        password = _required_password(password)

        user = self._users.get_by_email(email)
        if user is None or not self._password_hasher.verify(password, user.password_hash):
            logger.info("Failed login attempt")
            raise ValidationError(INVALID_CREDENTIALS)

        logger.info("User {} logged in", user.id)
        return user, self._token_service.issue(user.id)

    def get_user(self, user_id: str) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise UnauthenticatedError("User not found")
        return user
