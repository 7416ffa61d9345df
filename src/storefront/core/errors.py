"""Error taxonomy shared by services and the HTTP layer.

Each error carries the HTTP status and the taxonomy code it maps to at the
route boundary. Services raise these; ``api.http.app`` converts them to JSON.
"""


class StorefrontError(Exception):
    """Base class for all expected application failures."""

    status_code: int = 500
    code: str = "server_error"
    default_message: str = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """Missing or malformed client input."""

    status_code = 400
    code = "validation_error"
    default_message = "Invalid request"


class ConflictError(StorefrontError):
    """The request collides with existing state (e.g. duplicate email)."""

    status_code = 400
    code = "conflict"
    default_message = "Resource already exists"


class UnauthenticatedError(StorefrontError):
    """No usable credentials on a protected route."""

    status_code = 401
    code = "unauthenticated"
    default_message = "No authentication token provided"


class InvalidTokenError(UnauthenticatedError):
    """Session token failed signature, format or expiry checks."""

    code = "invalid_token"
    default_message = "Invalid token"


class NotFoundError(StorefrontError):
    status_code = 404
    code = "not_found"
    default_message = "Not found"


class StoreFaultError(StorefrontError):
    """The data store failed; the cause is logged, never returned."""

    status_code = 500
    code = "store_fault"
    default_message = "Server error"
