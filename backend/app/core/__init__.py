"""Core infrastructure module.

This module exports core utilities used across features.
Never imports from features - only from external libraries.
"""

from .config import Settings, get_settings, get_global_settings
from .database import get_db, db_manager, dialect_insert
from .exceptions import (
    ServiceException,
    NotFoundError,
    ForbiddenError,
    ValidationError,
    StateConflictError,
    DuplicateResourceError,
    DatabaseError,
)
from .enums import MatchStatus, Difficulty, RankingLevel
from .models import Base

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "get_global_settings",
    # Database
    "get_db",
    "db_manager",
    "dialect_insert",
    # Exceptions
    "ServiceException",
    "NotFoundError",
    "ForbiddenError",
    "ValidationError",
    "StateConflictError",
    "DuplicateResourceError",
    "DatabaseError",
    # Enums
    "MatchStatus",
    "Difficulty",
    "RankingLevel",
    # Models
    "Base",
]
