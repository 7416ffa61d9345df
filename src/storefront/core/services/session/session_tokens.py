"""Signed session tokens bound to a user id and an expiry."""

import time
from collections.abc import Callable

from authlib.jose import JoseError, JsonWebToken
from loguru import logger

from src.storefront.core.errors import InvalidTokenError
from src.storefront.runtime.config.config_data import ConfigData

# Only for local development and tests; production refuses to start without a secret.
DEV_SIGNING_SECRET = "storefront-dev-secret-change-me"


def resolve_signing_secret(config: ConfigData) -> str:
    """Return the configured session signing secret.

    Raises:
        RuntimeError: In production when no secret is configured
    """
    secret = config.session.signing_secret
    if secret:
        return secret
    if config.app.environment == "production":
        raise RuntimeError(
            "Session signing secret not configured; set SESSION_SIGNING_SECRET"
        )
    logger.warning(
        "Session signing secret not configured; using the built-in development secret"
    )
    return DEV_SIGNING_SECRET


class SessionTokenService:
    """Issue and verify HMAC-signed JWT session tokens."""

    def __init__(
        self,
        secret: str,
        ttl_seconds: int = 7 * 24 * 3600,
        issuer: str = "storefront-api",
        algorithm: str = "HS256",
        clock_skew: int = 0,
        clock: Callable[[], float] = time.time,
    ):
        if not secret:
            raise ValueError("Session signing secret must not be empty")
        self._secret = secret
        self._ttl_seconds = ttl_seconds
        self._issuer = issuer
        self._algorithm = algorithm
        self._clock_skew = clock_skew
        self._clock = clock
        # Restricting the instance to one algorithm rejects "none" and downgrade attempts
        self._jwt = JsonWebToken([algorithm])

    @classmethod
    def from_config(cls, config: ConfigData) -> "SessionTokenService":
        session = config.session
        return cls(
            secret=resolve_signing_secret(config),
            ttl_seconds=session.ttl_seconds,
            issuer=session.issuer,
            algorithm=session.algorithm,
            clock_skew=session.clock_skew,
        )

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def issue(self, user_id: str) -> str:
        """Create a signed token for ``user_id`` that expires after the configured TTL.

        Args:
            user_id: Identifier of the authenticated user

        Returns:
            Compact JWT string
        """
        if not user_id:
            raise ValueError("user_id is required")
        now = int(self._clock())
        header = {"alg": self._algorithm, "typ": "JWT"}
        payload = {
            "sub": str(user_id),
            "iss": self._issuer,
            "iat": now,
            "exp": now + self._ttl_seconds,
        }
        token = self._jwt.encode(header, payload, self._secret)
        return token.decode("ascii") if isinstance(token, bytes) else token

    def verify(self, token: str) -> str:
        """Verify a token and return the user id it was issued for.

        Raises:
            InvalidTokenError: If the signature, format, issuer or expiry check fails
        """
        if not token or not isinstance(token, str):
            raise InvalidTokenError()

        claims_options = {
            "sub": {"essential": True},
            "exp": {"essential": True},
            "iss": {"essential": True, "value": self._issuer},
        }
        try:
            claims = self._jwt.decode(token, self._secret, claims_options=claims_options)
            claims.validate(now=int(self._clock()), leeway=self._clock_skew)
        except (JoseError, ValueError, TypeError) as exc:
            logger.debug("Session token rejected: {}", type(exc).__name__)
            raise InvalidTokenError() from exc

        user_id = claims.get("sub")
        if not isinstance(user_id, str) or not user_id:
            raise InvalidTokenError()
        return user_id
