"""
App package - Application configuration and core utilities.
Contains settings and the exceptions that abort an interactive session.
"""

from app.config import settings
from app.exceptions import StoreFailureError, ConfigurationError

__all__ = [
    "settings",
    "StoreFailureError",
    "ConfigurationError",
]
