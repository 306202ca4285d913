"""
Session service for the Dice Round Timer application.

This module holds the session controller: it owns the session state and the
stopwatch, validates new teams, and stamps dice events with the stopwatch's
elapsed time for the round in progress.
"""
import logging
from typing import Any, Dict, List, Optional

from ..models import SessionState, Team
from ..utils import MIN_PLAYERS, MAX_PLAYERS, RESET_SCOPES, fmt_seconds
from .stopwatch import Stopwatch

logger = logging.getLogger(__name__)


class TeamValidationError(ValueError):
    """Raised when team details are rejected."""
    pass


class TeamNotFoundError(KeyError):
    """Raised when a team id does not belong to the session."""
    pass


class TeamValidator:
    """Validates team details before a team joins the session."""

    def __init__(self, min_players: int = MIN_PLAYERS, max_players: int = MAX_PLAYERS):
        self.min_players = min_players
        self.max_players = max_players

    def validate(self, name: Any, player_count: Any) -> List[str]:
        """
        Validate team details and return list of validation errors.

        Args:
            name: Proposed team name
            player_count: Proposed number of players

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not isinstance(name, str) or not name.strip():
            errors.append("Team name is required")

        if isinstance(player_count, bool) or not isinstance(player_count, int):
            errors.append("Number of players must be a whole number")
        elif not self.min_players <= player_count <= self.max_players:
            errors.append(
                f"Number of players must be between {self.min_players} and {self.max_players}"
            )

        return errors


class SessionService:
    """
    Controller for a dice game session.

    All session mutations go through this class. Dice events are only
    recorded while the stopwatch is running.
    """

    def __init__(
        self,
        state: Optional[SessionState] = None,
        stopwatch: Optional[Stopwatch] = None,
        validator: Optional[TeamValidator] = None,
    ):
        self.state = state or SessionState()
        self.stopwatch = stopwatch or Stopwatch()
        self.validator = validator or TeamValidator()

    # ------------------------------------------------------------------
    # Teams
    # ------------------------------------------------------------------
    def add_team(self, name: str, player_count: int) -> Team:
        """
        Add a team to the session.

        Raises:
            TeamValidationError: If the name is blank or the player count
                                 is out of range.
        """
        errors = self.validator.validate(name, player_count)
        if errors:
            raise TeamValidationError("; ".join(errors))

        team = Team(name=name.strip(), player_count=player_count)
        self.state.teams.append(team)
        logger.info("Added team %r with %d players", team.name, team.player_count)
        return team

    def get_team(self, team_id: str) -> Team:
        team = self.state.find_team(team_id)
        if team is None:
            raise TeamNotFoundError(team_id)
        return team

    def remove_team(self, team_id: str) -> Team:
        team = self.get_team(team_id)
        self.state.teams.remove(team)
        logger.info("Removed team %r", team.name)
        return team

    @property
    def teams(self) -> List[Team]:
        return self.state.teams

    @property
    def current_round(self) -> int:
        return self.state.current_round

    # ------------------------------------------------------------------
    # Dice events
    # ------------------------------------------------------------------
    def record_first_dice(self, team_id: str) -> bool:
        """Stamp the first dice of the current round. False when not timing."""

        team = self.get_team(team_id)
        if not self.stopwatch.is_running:
            logger.debug("Ignoring first dice for %r: stopwatch idle", team.name)
            return False

        team.record_first_dice(self.stopwatch.elapsed_seconds, self.state.current_round)
        return True

    def record_last_dice(self, team_id: str) -> bool:
        """
        Stamp the last dice of the current round.

        Stops the stopwatch once every team has finished the round.
        """

        team = self.get_team(team_id)
        if not self.stopwatch.is_running:
            logger.debug("Ignoring last dice for %r: stopwatch idle", team.name)
            return False

        team.record_last_dice(self.stopwatch.elapsed_seconds, self.state.current_round)
        if self.all_teams_finished:
            self.stopwatch.stop()
            logger.info("Round %d complete", self.state.current_round)
        return True

    # ------------------------------------------------------------------
    # Round status
    # ------------------------------------------------------------------
    def _has_finished(self, team: Team) -> bool:
        timing = team.round_timing(self.state.current_round)
        return timing is not None and timing.last_dice_time is not None

    @property
    def completed_count(self) -> int:
        return sum(1 for team in self.state.teams if self._has_finished(team))

    @property
    def all_teams_finished(self) -> bool:
        if not self.state.teams:
            return False
        return all(self._has_finished(team) for team in self.state.teams)

    @property
    def can_start_timer(self) -> bool:
        return bool(self.state.teams) and not self.all_teams_finished

    @property
    def can_advance_round(self) -> bool:
        return self.all_teams_finished and not self.stopwatch.is_running

    # ------------------------------------------------------------------
    # Timer controls
    # ------------------------------------------------------------------
    def start_timer(self) -> bool:
        if not self.can_start_timer:
            logger.debug("Refusing to start timer for round %d", self.state.current_round)
            return False
        self.stopwatch.start()
        logger.info("Timer started for round %d", self.state.current_round)
        return True

    def stop_timer(self) -> None:
        self.stopwatch.stop()

    def toggle_timer(self) -> bool:
        """
        Pause a running stopwatch, or start/resume an idle one.

        Returns:
            True if the stopwatch is running afterwards
        """
        if self.stopwatch.is_running:
            self.stopwatch.pause()
            return False

        if not self.can_start_timer:
            return False

        if self.stopwatch.elapsed_seconds > 0:
            self.stopwatch.resume()
        else:
            self.stopwatch.start()
        return True

    def next_round(self) -> bool:
        """Advance to the next round once every team has finished."""

        if not self.can_advance_round:
            logger.debug("Round %d not finished; staying", self.state.current_round)
            return False

        self.state.current_round += 1
        self.stopwatch.reset()
        logger.info("Advanced to round %d", self.state.current_round)
        return True

    # ------------------------------------------------------------------
    # Resets
    # ------------------------------------------------------------------
    def reset_current_round(self) -> None:
        """Reset the stopwatch; recorded dice times are kept."""
        self.stopwatch.reset()

    def reset_all_rounds(self) -> None:
        """Back to round 1 with every team's round ledger cleared."""
        self.state.current_round = 1
        self.stopwatch.reset()
        for team in self.state.teams:
            team.reset_rounds()
        logger.info("All rounds reset")

    def reset_everything(self) -> None:
        """Back to round 1 with no teams."""
        self.state.current_round = 1
        self.stopwatch.reset()
        self.state.teams = []
        logger.info("Session reset")

    def reset(self, scope: str) -> None:
        """
        Apply one of the named reset scopes.

        Raises:
            ValueError: If ``scope`` is not a known reset scope.
        """
        if scope not in RESET_SCOPES:
            raise ValueError(f"Unknown reset scope: {scope}")
        if scope == "current_round":
            self.reset_current_round()
        elif scope == "all_rounds":
            self.reset_all_rounds()
        else:
            self.reset_everything()

    # ------------------------------------------------------------------
    # Presentation payload
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        """Return timer, round and team data for display."""

        elapsed = self.stopwatch.elapsed_seconds
        state = self.state.to_json()
        for team, payload in zip(self.state.teams, state["teams"]):
            timing = team.round_timing(self.state.current_round)
            payload["current_round_timing"] = timing.to_json() if timing else None
            payload["finished"] = self._has_finished(team)

        return {
            "timer": {
                "running": self.stopwatch.is_running,
                "elapsed_seconds": elapsed,
                "elapsed_display": fmt_seconds(elapsed),
            },
            "round": {
                "number": state["current_round"],
                "all_teams_finished": self.all_teams_finished,
                "completed_count": self.completed_count,
                "team_count": len(self.state.teams),
                "can_start_timer": self.can_start_timer,
                "can_advance": self.can_advance_round,
            },
            "teams": state["teams"],
        }
