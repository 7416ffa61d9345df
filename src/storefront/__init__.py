"""Storefront catalog API.

Authentication with cookie-carried session tokens and a filterable, paginated
product catalog served over FastAPI.
"""

__version__ = "0.1.0"
