"""Core services exports."""

# Catalog Services
from .catalog import CatalogQueryService, build_query_spec, parse_latest_limit

# Database Services
from .database import DbManageService, DbSessionService

# Password Service
from .password_service import PasswordHasher

# Session Services
from .session import SessionTokenService

# User Services
from .user import UserService

__all__ = [
    # Catalog Services
    "CatalogQueryService",
    "build_query_spec",
    "parse_latest_limit",
    # Database Services
    "DbManageService",
    "DbSessionService",
    # Password Service
    "PasswordHasher",
    # Session Services
    "SessionTokenService",
    # User Services
    "UserService",
]
