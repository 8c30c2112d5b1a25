"""Session resolution for authenticated routes."""

from .dependencies import CurrentPlayerDep, get_current_player
from .service import AuthService

__all__ = ["AuthService", "CurrentPlayerDep", "get_current_player"]
