from dataclasses import dataclass

from src.storefront.core.services import (
    DbSessionService,
    PasswordHasher,
    SessionTokenService,
)
from src.storefront.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    password_hasher: PasswordHasher
    session_token_service: SessionTokenService

    @classmethod
    def from_config(cls, config: ConfigData) -> "ApplicationDependencies":
        """Build the process-wide services; fails fast on a missing production secret."""
        session_token_service = SessionTokenService.from_config(config)
        return cls(
            database_service=DbSessionService(config=config),
            password_hasher=PasswordHasher(rounds=config.password.bcrypt_rounds),
            session_token_service=session_token_service,
        )
