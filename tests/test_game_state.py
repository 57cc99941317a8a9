"""Tests for score and status derivation."""

from datetime import datetime, timezone

import pytest

from conftest import ALABAMA, FLORIDA_STATE, make_competition
from models import GameState
from services.game_state import format_start_time, get_timezone, parse_espn_date, read_state


def _competition(**kwargs):
    competition = make_competition(FLORIDA_STATE, ALABAMA, **kwargs)
    return competition, competition["competitors"][1]  # Alabama is away


def test_scheduled_game_hides_score_and_shows_kickoff():
    competition, alabama = _competition(state="pre", description="Scheduled",
                                        date="2025-08-30T23:30Z", home_score=0, away_score=0)

    reading = read_state(competition, alabama, tz_name="America/New_York")

    assert reading.game_state == GameState.SCHEDULED
    assert reading.team_score is None
    assert reading.opponent_score is None
    assert reading.lead_margin is None
    assert reading.status_text == "7:30 PM"
    assert reading.scheduled_start == datetime(2025, 8, 30, 23, 30, tzinfo=timezone.utc)
    assert reading.opponent_name == "Florida State Seminoles"


def test_in_progress_game_scores_and_margin():
    competition, alabama = _competition(state="in", description="2nd Quarter",
                                        home_score=10, away_score=14)

    reading = read_state(competition, alabama)

    assert reading.game_state == GameState.IN_PROGRESS
    assert reading.team_score == 14
    assert reading.opponent_score == 10
    assert reading.lead_margin == 4
    assert reading.status_text == "2nd Quarter"


def test_completed_game_trailing_margin():
    competition, alabama = _competition(state="post", description="Final",
                                        home_score=31, away_score=17)

    reading = read_state(competition, alabama)

    assert reading.game_state == GameState.COMPLETED
    assert reading.lead_margin == -14
    assert reading.status_text == "Final"


def test_unknown_state():
    competition, alabama = _competition(state="postponed", description="Postponed",
                                        home_score=0, away_score=0)

    reading = read_state(competition, alabama)

    assert reading.game_state == GameState.UNKNOWN
    assert reading.status_text == "Postponed"


def test_missing_scores_stay_absent():
    competition, alabama = _competition(state="in", description="1st Quarter")

    reading = read_state(competition, alabama)

    assert reading.team_score is None
    assert reading.lead_margin is None


def test_scheduled_without_date_uses_description():
    competition, alabama = _competition(state="pre", description="TBD", date=None)

    reading = read_state(competition, alabama)

    assert reading.scheduled_start is None
    assert reading.status_text == "TBD"


def test_missing_status_and_competition():
    assert read_state(None, None).game_state == GameState.UNKNOWN
    assert read_state({}, None).status_text == "Unknown"


def test_parse_espn_date():
    assert parse_espn_date("2025-08-30T16:00Z") == datetime(2025, 8, 30, 16, 0, tzinfo=timezone.utc)
    assert parse_espn_date("not a date") is None
    assert parse_espn_date(None) is None


def test_format_start_time_noon():
    start = datetime(2025, 8, 30, 16, 0, tzinfo=timezone.utc)
    assert format_start_time(start, "America/New_York") == "12:00 PM"


def test_get_timezone():
    assert get_timezone("America/Chicago").key == "America/Chicago"


@pytest.mark.parametrize("name", ["America/Not_A_Zone", "", None])
def test_unknown_timezone_rejected(name):
    with pytest.raises(ValueError, match="Unknown display timezone"):
        get_timezone(name)
