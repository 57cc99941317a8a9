"""
Score, lead and status reading for a resolved game
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from config import Config
from models import GameState


@dataclass
class GameReading:
    """Game state fields derived from one competition record"""
    game_state: GameState = GameState.UNKNOWN
    team_score: Optional[int] = None
    opponent_score: Optional[int] = None
    lead_margin: Optional[int] = None
    status_text: str = 'Unknown'
    scheduled_start: Optional[datetime] = None
    opponent_name: Optional[str] = None


def parse_espn_date(value) -> Optional[datetime]:
    """Parse ESPN dates like '2025-08-30T23:30Z' into aware UTC datetimes"""
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def get_timezone(name: str) -> ZoneInfo:
    """Look up a display timezone by IANA name"""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, TypeError):
        raise ValueError(f"Unknown display timezone {name!r}") from None


def format_start_time(start: datetime, tz_name: str = None) -> str:
    """'7:30 PM' in the display timezone"""
    local = start.astimezone(get_timezone(tz_name or Config.DISPLAY_TIMEZONE))
    return local.strftime('%I:%M %p').lstrip('0')


def _parse_score(raw) -> Optional[int]:
    # Header scores are strings ("21"), some feeds nest {"value": 21.0}
    if isinstance(raw, dict):
        raw = raw.get('value', raw.get('displayValue'))
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return int(float(raw))
    except (TypeError, ValueError):
        return None


def _status_type(competition: Dict) -> Dict:
    status = competition.get('status')
    if not isinstance(status, dict):
        return {}
    status_type = status.get('type')
    return status_type if isinstance(status_type, dict) else {}


def _opponent(competition: Dict, team_competitor: Optional[Dict]) -> Optional[Dict]:
    if not isinstance(team_competitor, dict):
        return None
    team_id = team_competitor.get('id')
    for competitor in competition.get('competitors') or []:
        if not isinstance(competitor, dict) or competitor is team_competitor:
            continue
        if team_id is not None and competitor.get('id') == team_id:
            continue
        return competitor
    return None


def read_state(competition: Optional[Dict], team_competitor: Optional[Dict],
               tz_name: str = None) -> GameReading:
    """
    Derive state, score and status text for the tracked team.

    Scores are only surfaced once the game has left the SCHEDULED state;
    before kickoff every score field stays None.
    """
    if not isinstance(competition, dict):
        return GameReading()

    status_type = _status_type(competition)
    game_state = GameState.from_espn(status_type.get('state'))
    description = status_type.get('description')
    if not isinstance(description, str) or not description:
        description = 'Unknown'

    reading = GameReading(
        game_state=game_state,
        scheduled_start=parse_espn_date(competition.get('date')),
        status_text=description,
    )

    opponent = _opponent(competition, team_competitor)
    if opponent is not None:
        opponent_team = opponent.get('team')
        if isinstance(opponent_team, dict):
            reading.opponent_name = opponent_team.get('displayName') or opponent_team.get('location')

    if game_state == GameState.SCHEDULED:
        if reading.scheduled_start is not None:
            reading.status_text = format_start_time(reading.scheduled_start, tz_name)
        return reading

    if isinstance(team_competitor, dict):
        reading.team_score = _parse_score(team_competitor.get('score'))
    if opponent is not None:
        reading.opponent_score = _parse_score(opponent.get('score'))
    if reading.team_score is not None and reading.opponent_score is not None:
        reading.lead_margin = reading.team_score - reading.opponent_score

    return reading
