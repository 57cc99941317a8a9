"""Shared fixtures: ESPN-shaped payloads and an in-memory feed client."""

import copy

import pytest

import logger
from models import build_matchups
from services.espn import FetchError


@pytest.fixture(autouse=True)
def quiet_log_file(tmp_path):
    """Keep test runs from appending to the real logs.txt."""
    logger.set_log_file(tmp_path / "test.log")
    yield


def make_team(team_id, location, name):
    return {
        "id": str(team_id),
        "location": location,
        "name": name,
        "displayName": f"{location} {name}",
        "shortDisplayName": location,
    }


def make_competitor(team, score=None, home_away="home"):
    competitor = {"id": team["id"], "homeAway": home_away, "team": team}
    if score is not None:
        competitor["score"] = str(score)
    return competitor


def make_competition(home, away, state="in", description="In Progress",
                     date="2025-08-30T23:30Z", home_score=None, away_score=None):
    return {
        "date": date,
        "status": {"type": {"state": state, "description": description}},
        "competitors": [
            make_competitor(home, home_score, "home"),
            make_competitor(away, away_score, "away"),
        ],
    }


def make_event(event_id, home, away, **kwargs):
    return {"id": str(event_id), "competitions": [make_competition(home, away, **kwargs)]}


def passing_stats(yards):
    if yards is None:
        return []
    return [
        {"name": "firstDowns", "displayValue": "12", "label": "1st Downs"},
        {"name": "netPassingYards", "displayValue": str(yards), "label": "Passing"},
        {"name": "yardsPerPass", "displayValue": "7.1", "label": "Yards per pass"},
    ]


def make_summary(event, home_yards=None, away_yards=None):
    competition = copy.deepcopy(event["competitions"][0])
    home, away = (c["team"] for c in competition["competitors"])
    return {
        "header": {"id": event["id"], "competitions": [competition]},
        "boxscore": {
            "teams": [
                {"team": home, "statistics": passing_stats(home_yards)},
                {"team": away, "statistics": passing_stats(away_yards)},
            ]
        },
    }


WASHINGTON = make_team(264, "Washington", "Huskies")
WASHINGTON_STATE = make_team(265, "Washington State", "Cougars")
COLORADO_STATE = make_team(36, "Colorado State", "Rams")
IDAHO = make_team(70, "Idaho", "Vandals")
ALABAMA = make_team(333, "Alabama", "Crimson Tide")
FLORIDA_STATE = make_team(52, "Florida State", "Seminoles")
BOSTON_COLLEGE = make_team(103, "Boston College", "Eagles")
FORDHAM = make_team(2230, "Fordham", "Rams")


class FakeESPNClient:
    """Serves canned scoreboard/summary payloads; can fail on demand."""

    def __init__(self, scoreboard, summaries, failing=(), scoreboard_error=None, health_error=None):
        self.scoreboard = scoreboard
        self.summaries = summaries
        self.failing = set(failing)
        self.scoreboard_error = scoreboard_error
        self.health_error = health_error
        self.scoreboard_calls = 0
        self.summary_calls = []

    def get_scoreboard(self, date):
        self.scoreboard_calls += 1
        if self.scoreboard_error is not None:
            raise self.scoreboard_error
        return copy.deepcopy(self.scoreboard)

    def get_summary(self, event_id):
        self.summary_calls.append(event_id)
        if event_id in self.failing:
            raise FetchError(f"ESPN summary returned status 503 for {event_id}")
        return copy.deepcopy(self.summaries[event_id])

    def check_health(self):
        if self.health_error is not None:
            raise self.health_error
        return True


@pytest.fixture
def game_day():
    """Scoreboard and summaries for one Saturday of games."""
    events = [
        make_event(401, WASHINGTON, COLORADO_STATE, state="in", description="3rd Quarter",
                   date="2025-08-30T20:00Z", home_score=21, away_score=14),
        make_event(402, WASHINGTON_STATE, IDAHO, state="pre", description="Scheduled",
                   date="2025-08-30T23:30Z"),
        make_event(403, FLORIDA_STATE, ALABAMA, state="post", description="Final",
                   date="2025-08-30T19:30Z", home_score=31, away_score=17),
        make_event(404, BOSTON_COLLEGE, FORDHAM, state="pre", description="Scheduled",
                   date="2025-08-30T16:00Z"),
    ]
    summaries = {
        "401": make_summary(events[0], home_yards=250, away_yards=120),
        "402": make_summary(events[1]),
        "403": make_summary(events[2], home_yards=230, away_yards=180),
        "404": make_summary(events[3]),
    }
    return {"events": events}, summaries


@pytest.fixture
def matchups():
    return build_matchups([
        ("Blake", "Washington"),
        ("David", "Washington State"),
        ("Q", "Alabama"),
        ("Nic", "Florida State"),
        ("Chris", "Boston College"),
        ("Will", "UAlbany"),
    ])


@pytest.fixture
def fake_client(game_day):
    scoreboard, summaries = game_day
    return FakeESPNClient(scoreboard, summaries)
