"""Background jobs: scheduler lifecycle and the presence sweep."""

from .base import BaseJob
from .presence_sweeper import StalePresenceSweeperJob
from .scheduler import get_scheduler, shutdown_scheduler, start_scheduler

__all__ = [
    "BaseJob",
    "StalePresenceSweeperJob",
    "get_scheduler",
    "shutdown_scheduler",
    "start_scheduler",
]
