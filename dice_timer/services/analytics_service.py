"""Analytics helpers for the Dice Round Timer."""

from __future__ import annotations

import csv
import datetime as dt
import io
from typing import List, Optional

from ..models import (
    RoundResult, RoundRow, RoundSummary, SessionReport, SessionState, Team,
    TeamSummary
)
from ..utils import mean_or_none, now_ts, sample_stdev_or_none


def _fmt_csv(value: Optional[float]) -> object:
    return "" if value is None else round(value, 2)


class AnalyticsService:
    """Build team and round statistics reports for a session."""

    def __init__(self, state: SessionState) -> None:
        self.state = state

    def summarize_team(self, team: Team) -> TeamSummary:
        """Build a :class:`TeamSummary` from a team's round ledger."""

        rows = [
            RoundRow(
                round=index + 1,
                first_dice_time=timing.first_dice_time,
                last_dice_time=timing.last_dice_time,
                duration=timing.duration,
            )
            for index, timing in enumerate(team.rounds)
        ]
        fastest = team.fastest_round
        return TeamSummary(
            team_id=team.id,
            name=team.name,
            player_count=team.player_count,
            rounds=rows,
            completed_rounds=len(team.completed_durations),
            average_duration=team.average_duration,
            average_duration_per_player=team.average_duration_per_player,
            standard_deviation=team.standard_deviation,
            fastest_round=fastest.round if fastest else None,
            fastest_duration=fastest.duration if fastest else None,
        )

    def summarize_round(self, round_number: int) -> RoundSummary:
        """Compare the teams that completed ``round_number``, fastest first."""

        results: List[RoundResult] = []
        for team in self.state.teams:
            timing = team.round_timing(round_number)
            if timing is None or timing.duration is None:
                continue
            results.append(
                RoundResult(team_id=team.id, team_name=team.name, duration=timing.duration)
            )

        # sorted() is stable, so equal durations keep team order
        results = sorted(results, key=lambda result: result.duration)
        durations = [result.duration for result in results]
        return RoundSummary(
            round=round_number,
            results=results,
            average_duration=mean_or_none(durations),
            standard_deviation=sample_stdev_or_none(durations),
        )

    def reported_rounds(self) -> List[int]:
        """Rounds that are over: every earlier round plus a finished current one."""

        current = self.state.current_round
        last = current - 1
        teams = self.state.teams
        if teams and all(self._finished(team, current) for team in teams):
            last = current
        return list(range(1, last + 1))

    @staticmethod
    def _finished(team: Team, round_number: int) -> bool:
        timing = team.round_timing(round_number)
        return timing is not None and timing.last_dice_time is not None

    def generate_session_report(self) -> SessionReport:
        """Build a :class:`SessionReport` snapshot for the session."""

        return SessionReport(
            generated_ts=now_ts(),
            current_round=self.state.current_round,
            team_count=len(self.state.teams),
            teams=[self.summarize_team(team) for team in self.state.teams],
            rounds=[self.summarize_round(number) for number in self.reported_rounds()],
        )

    def generate_report_csv(self, report: Optional[SessionReport] = None) -> str:
        """Return a CSV document describing the session results.

        Args:
            report: Optional pre-generated :class:`SessionReport` snapshot. When
                omitted the method generates a fresh report.

        Returns:
            CSV formatted string with a summary block, a team statistics
            table and one row per team per reported round.

        Raises:
            ValueError: If there are no teams to include in the report.
        """

        report = report or self.generate_session_report()
        if report.team_count == 0:
            raise ValueError("Cannot export results without any teams")

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")

        generated_dt = dt.datetime.fromtimestamp(report.generated_ts)
        writer.writerow(["Dice Round Timer Report"])
        writer.writerow(["Generated", generated_dt.isoformat(timespec="seconds")])
        writer.writerow(["Current Round", report.current_round])
        writer.writerow(["Teams", report.team_count])
        writer.writerow([])

        writer.writerow(
            [
                "Team",
                "Players",
                "Completed Rounds",
                "Average Seconds",
                "Average Seconds Per Player",
                "Standard Deviation",
                "Fastest Round",
                "Fastest Seconds",
            ]
        )
        for summary in report.teams:
            writer.writerow(
                [
                    summary.name,
                    summary.player_count,
                    summary.completed_rounds,
                    _fmt_csv(summary.average_duration),
                    _fmt_csv(summary.average_duration_per_player),
                    _fmt_csv(summary.standard_deviation),
                    summary.fastest_round or "",
                    _fmt_csv(summary.fastest_duration),
                ]
            )
        writer.writerow([])

        writer.writerow(["Round", "Rank", "Team", "Seconds", "Round Average", "Round Std Dev"])
        for round_summary in report.rounds:
            for rank, result in enumerate(round_summary.results, start=1):
                writer.writerow(
                    [
                        round_summary.round,
                        rank,
                        result.team_name,
                        _fmt_csv(result.duration),
                        _fmt_csv(round_summary.average_duration),
                        _fmt_csv(round_summary.standard_deviation),
                    ]
                )

        csv_text = buffer.getvalue()
        buffer.close()
        return csv_text
