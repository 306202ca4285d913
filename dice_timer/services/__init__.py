"""
Services package for the Dice Round Timer.

This package contains service classes that handle business logic.
Includes factory for dependency injection.
"""
from .scheduler import Scheduler, RepeatingTask, ThreadScheduler, TkScheduler
from .stopwatch import Stopwatch
from .session_service import (
    SessionService, TeamValidator, TeamValidationError, TeamNotFoundError
)
from .analytics_service import AnalyticsService
from .service_factory import ServiceFactory

__all__ = [
    "Scheduler", "RepeatingTask", "ThreadScheduler", "TkScheduler",
    "Stopwatch", "SessionService", "TeamValidator", "TeamValidationError",
    "TeamNotFoundError", "AnalyticsService", "ServiceFactory"
]
