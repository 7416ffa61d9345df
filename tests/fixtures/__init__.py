"""Shared pytest fixtures for storefront tests."""

from .core import *  # noqa: F401,F403
from .http import *  # noqa: F401,F403
