"""
Player Registry Backend Application Package.

This package contains the application logic for managing game-character
records: creation, partial updates, lookups and filtered, paginated listing.
"""

from .core import get_global_settings, db_manager, get_db

__version__ = "1.0.0"

__all__ = [
    "get_global_settings",
    "db_manager",
    "get_db",
]
