"""User domain entity."""

from pydantic import Field

from src.storefront.entities._base import Entity


class User(Entity):
    """A registered shopper.

    ``password_hash`` never leaves the service layer; HTTP responses are
    built from ``UserOut`` which omits it.
    """

    name: str = Field(description="Display name")
    email: str = Field(description="Login email, unique per user")
    password_hash: str = Field(repr=False)
