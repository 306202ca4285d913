"""
SessionState model for the Dice Round Timer application.

This module contains the SessionState dataclass which holds the mutable state
of one game session: the participating teams and the round being played.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .team import Team


@dataclass
class SessionState:
    """
    Represents the state of a dice game session.

    Attributes:
        teams: Teams in the order they were added
        current_round: Round being played (1-based)
    """
    teams: List[Team] = field(default_factory=list)
    current_round: int = 1

    def find_team(self, team_id: str) -> Optional[Team]:
        """Return the team with the given id, or None."""
        return next((team for team in self.teams if team.id == team_id), None)

    def to_json(self) -> Dict[str, Any]:
        return {
            "current_round": self.current_round,
            "teams": [team.to_json() for team in self.teams],
        }
