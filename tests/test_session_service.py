"""
Unit tests for SessionService.

Tests team validation, dice recording gated on the stopwatch, round
completion and the reset scopes.
"""
import unittest
from unittest.mock import patch

from dice_timer.models import SessionState
from dice_timer.services import (
    SessionService, Stopwatch, TeamNotFoundError, TeamValidationError, TeamValidator
)
from tests.fakes import FakeScheduler

CLOCK = "dice_timer.services.stopwatch.monotonic_ts"


class TestTeamValidator(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = TeamValidator()

    def test_valid_team(self) -> None:
        self.assertEqual(self.validator.validate("Red", 4), [])
        self.assertEqual(self.validator.validate("Red", 1), [])
        self.assertEqual(self.validator.validate("Red", 20), [])

    def test_blank_name(self) -> None:
        self.assertIn("Team name is required", self.validator.validate("   ", 4))
        self.assertIn("Team name is required", self.validator.validate(None, 4))

    def test_player_count_out_of_range(self) -> None:
        self.assertEqual(len(self.validator.validate("Red", 0)), 1)
        self.assertEqual(len(self.validator.validate("Red", 21)), 1)

    def test_player_count_must_be_integer(self) -> None:
        self.assertEqual(len(self.validator.validate("Red", "4")), 1)
        self.assertEqual(len(self.validator.validate("Red", 2.5)), 1)
        self.assertEqual(len(self.validator.validate("Red", True)), 1)


class TestSessionService(unittest.TestCase):
    def setUp(self) -> None:
        self.scheduler = FakeScheduler()
        self.stopwatch = Stopwatch(self.scheduler)
        self.state = SessionState()
        self.service = SessionService(self.state, self.stopwatch)
        self.red = self.service.add_team("  Red  ", 4)
        self.blue = self.service.add_team("Blue", 2)

    def _sample(self, ts: float) -> None:
        with patch(CLOCK, return_value=ts):
            self.scheduler.tick()

    def _start(self, ts: float = 100.0) -> None:
        with patch(CLOCK, return_value=ts):
            self.assertTrue(self.service.start_timer())

    # ---------- Teams ---------- #
    def test_add_team_strips_name(self) -> None:
        self.assertEqual(self.red.name, "Red")
        self.assertEqual([team.name for team in self.state.teams], ["Red", "Blue"])

    def test_add_team_rejects_invalid_details(self) -> None:
        with self.assertRaises(TeamValidationError):
            self.service.add_team("", 3)
        with self.assertRaises(TeamValidationError):
            self.service.add_team("Green", 0)
        self.assertEqual(len(self.state.teams), 2)

    def test_remove_and_get_team(self) -> None:
        self.assertIs(self.service.get_team(self.blue.id), self.blue)
        self.service.remove_team(self.blue.id)
        self.assertEqual(self.state.teams, [self.red])

        with self.assertRaises(TeamNotFoundError):
            self.service.get_team(self.blue.id)
        with self.assertRaises(TeamNotFoundError):
            self.service.remove_team("missing")

    # ---------- Recording ---------- #
    def test_recording_requires_running_stopwatch(self) -> None:
        self.assertFalse(self.service.record_first_dice(self.red.id))
        self.assertFalse(self.service.record_last_dice(self.red.id))
        self.assertEqual(self.red.rounds, [])

    def test_records_elapsed_time_for_current_round(self) -> None:
        self._start()
        self._sample(102.5)
        self.assertTrue(self.service.record_first_dice(self.red.id))
        self._sample(110.0)
        self.assertTrue(self.service.record_last_dice(self.red.id))

        self.assertEqual(self.red.rounds[0].first_dice_time, 2.5)
        self.assertEqual(self.red.rounds[0].last_dice_time, 10.0)
        self.assertEqual(self.red.rounds[0].duration, 7.5)
        self.assertEqual(self.service.completed_count, 1)
        self.assertFalse(self.service.all_teams_finished)
        self.assertTrue(self.stopwatch.is_running)

    def test_stopwatch_stops_when_all_teams_finish(self) -> None:
        self._start()
        self._sample(101.0)
        self.service.record_first_dice(self.red.id)
        self.service.record_first_dice(self.blue.id)
        self._sample(105.0)
        self.service.record_last_dice(self.red.id)
        self._sample(108.0)
        self.service.record_last_dice(self.blue.id)

        self.assertTrue(self.service.all_teams_finished)
        self.assertFalse(self.stopwatch.is_running)
        self.assertFalse(self.service.can_start_timer)
        self.assertTrue(self.service.can_advance_round)
        self.assertFalse(self.service.start_timer())

    def test_last_dice_without_first_does_not_finish_team(self) -> None:
        self._start()
        self._sample(101.0)
        self.service.record_last_dice(self.red.id)

        self.assertEqual(self.service.completed_count, 0)
        self.assertIsNone(self.red.rounds[0].last_dice_time)

    def test_start_requires_teams(self) -> None:
        service = SessionService(SessionState(), Stopwatch(FakeScheduler()))
        self.assertFalse(service.can_start_timer)
        self.assertFalse(service.start_timer())
        self.assertFalse(service.all_teams_finished)

    # ---------- Timer ---------- #
    def test_toggle_pauses_and_resumes(self) -> None:
        with patch(CLOCK, return_value=100.0):
            self.assertTrue(self.service.toggle_timer())
        with patch(CLOCK, return_value=103.0):
            self.assertFalse(self.service.toggle_timer())
        self.assertEqual(self.stopwatch.elapsed_seconds, 3.0)

        with patch(CLOCK, return_value=200.0):
            self.assertTrue(self.service.toggle_timer())
        self._sample(201.0)
        self.assertEqual(self.stopwatch.elapsed_seconds, 4.0)

    def test_toggle_refused_when_round_finished(self) -> None:
        self._start()
        for team in (self.red, self.blue):
            self.service.record_first_dice(team.id)
            self.service.record_last_dice(team.id)

        self.assertFalse(self.service.toggle_timer())
        self.assertFalse(self.stopwatch.is_running)

    # ---------- Rounds ---------- #
    def test_next_round_requires_finished_round(self) -> None:
        self.assertFalse(self.service.next_round())
        self.assertEqual(self.service.current_round, 1)

    def test_next_round_advances_and_resets_stopwatch(self) -> None:
        self._start()
        self._sample(104.0)
        for team in (self.red, self.blue):
            self.service.record_first_dice(team.id)
            self.service.record_last_dice(team.id)

        self.assertTrue(self.service.next_round())
        self.assertEqual(self.service.current_round, 2)
        self.assertEqual(self.stopwatch.elapsed_seconds, 0)
        self.assertFalse(self.service.all_teams_finished)
        self.assertTrue(self.service.can_start_timer)

        self._start(300.0)
        self._sample(301.0)
        self.service.record_first_dice(self.red.id)
        self.assertEqual(len(self.red.rounds), 2)
        self.assertEqual(self.red.rounds[1].first_dice_time, 1.0)

    # ---------- Resets ---------- #
    def test_reset_current_round_keeps_times(self) -> None:
        self._start()
        self._sample(102.0)
        self.service.record_first_dice(self.red.id)

        self.service.reset_current_round()

        self.assertFalse(self.stopwatch.is_running)
        self.assertEqual(self.stopwatch.elapsed_seconds, 0)
        self.assertEqual(self.red.rounds[0].first_dice_time, 2.0)

    def test_reset_all_rounds(self) -> None:
        self._start()
        for team in (self.red, self.blue):
            self.service.record_first_dice(team.id)
            self.service.record_last_dice(team.id)
        self.service.next_round()

        self.service.reset_all_rounds()

        self.assertEqual(self.service.current_round, 1)
        self.assertEqual(self.red.rounds, [])
        self.assertEqual(self.blue.rounds, [])
        self.assertEqual(len(self.state.teams), 2)

    def test_reset_everything(self) -> None:
        self._start()
        self.service.reset_everything()

        self.assertEqual(self.state.teams, [])
        self.assertEqual(self.service.current_round, 1)
        self.assertFalse(self.stopwatch.is_running)

    def test_reset_by_scope(self) -> None:
        self.service.reset("all_rounds")
        self.assertEqual(len(self.state.teams), 2)
        self.service.reset("everything")
        self.assertEqual(self.state.teams, [])
        with self.assertRaises(ValueError):
            self.service.reset("nonsense")

    # ---------- Snapshot ---------- #
    def test_snapshot(self) -> None:
        self._start()
        self._sample(101.234)
        self.service.record_first_dice(self.red.id)

        snapshot = self.service.snapshot()

        self.assertTrue(snapshot["timer"]["running"])
        self.assertEqual(snapshot["timer"]["elapsed_display"], "1.23")
        self.assertEqual(snapshot["round"]["number"], 1)
        self.assertEqual(snapshot["round"]["team_count"], 2)
        self.assertEqual(snapshot["round"]["completed_count"], 0)
        red = snapshot["teams"][0]
        self.assertEqual(red["name"], "Red")
        self.assertIsNotNone(red["current_round_timing"]["first_dice_time"])
        self.assertFalse(red["finished"])
        self.assertIsNone(snapshot["teams"][1]["current_round_timing"])

    def test_snapshot_extends_state_json(self) -> None:
        state_json = self.state.to_json()
        snapshot = self.service.snapshot()

        self.assertEqual(state_json["current_round"], snapshot["round"]["number"])
        for plain, shown in zip(state_json["teams"], snapshot["teams"]):
            self.assertEqual({**plain, **shown}, shown)
            self.assertNotIn("finished", plain)


if __name__ == "__main__":
    unittest.main()
