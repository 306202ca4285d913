"""
Service Factory for dependency injection.

This module provides a factory for creating properly configured service
instances around a shared session state and stopwatch.
"""
from typing import Dict, Optional

from ..models import SessionState
from .analytics_service import AnalyticsService
from .scheduler import Scheduler, ThreadScheduler
from .session_service import SessionService, TeamValidator
from .stopwatch import Stopwatch


class ServiceFactory:
    """
    Factory for creating service instances with proper dependency injection.

    The scheduler decides where stopwatch ticks run: a background thread by
    default, or the Tk event loop for the desktop app.
    """

    def __init__(self, scheduler: Optional[Scheduler] = None):
        """Initialize factory with default configurations."""
        self._scheduler: Scheduler = scheduler or ThreadScheduler()
        self._validator: Optional[TeamValidator] = None

    def create_stopwatch(self) -> Stopwatch:
        """
        Create a Stopwatch driven by the configured scheduler.

        Returns:
            Idle Stopwatch instance
        """
        return Stopwatch(self._scheduler)

    def create_session_service(
        self,
        state: SessionState,
        stopwatch: Optional[Stopwatch] = None,
    ) -> SessionService:
        """
        Create SessionService with injected dependencies.

        Args:
            state: Session state to manage
            stopwatch: Optional stopwatch; a new one is created if omitted

        Returns:
            Configured SessionService instance
        """
        return SessionService(
            state=state,
            stopwatch=stopwatch or self.create_stopwatch(),
            validator=self._get_validator(),
        )

    def create_analytics_service(self, state: SessionState) -> AnalyticsService:
        return AnalyticsService(state)

    def create_complete_service_suite(self, state: SessionState) -> Dict[str, object]:
        """
        Create a complete suite of services sharing one session state.

        Args:
            state: Session state for the services

        Returns:
            Dictionary containing all configured services
        """
        session_service = self.create_session_service(state)
        return {
            'session': session_service,
            'stopwatch': session_service.stopwatch,
            'analytics': self.create_analytics_service(state),
        }

    def _get_validator(self) -> TeamValidator:
        """Get singleton team validator."""
        if self._validator is None:
            self._validator = TeamValidator()
        return self._validator

    def configure_custom_validator(self, validator: TeamValidator) -> None:
        """Configure custom team validator."""
        self._validator = validator
