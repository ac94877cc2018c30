"""Core infrastructure module.

This module exports core utilities used across features.
Never imports from features - only from external libraries.
"""

from .config import Settings, get_settings, get_global_settings
from .database import get_db, db_manager, DatabaseManager
from .exceptions import (
    ServiceException,
    ClientInputError,
    NotFoundError,
    PlayerNotFoundError,
)
from .enums import Race, Profession, PlayerOrder
from .models import Base

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "get_global_settings",
    # Database
    "get_db",
    "db_manager",
    "DatabaseManager",
    # Exceptions
    "ServiceException",
    "ClientInputError",
    "NotFoundError",
    "PlayerNotFoundError",
    # Enums
    "Race",
    "Profession",
    "PlayerOrder",
    # Models
    "Base",
]
