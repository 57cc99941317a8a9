"""
Data models for the passing-yards leaderboard
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from typing import List, Dict, Optional, Tuple, Iterable


class GameState(Enum):
    """Game state, valued by ESPN's status.type.state strings"""
    SCHEDULED = 'pre'
    IN_PROGRESS = 'in'
    COMPLETED = 'post'
    UNKNOWN = 'unknown'

    @classmethod
    def from_espn(cls, state) -> 'GameState':
        for member in cls:
            if member.value == state:
                return member
        return cls.UNKNOWN


class ResultStatus(Enum):
    """How a matchup row was produced in a cycle"""
    OK = 'ok'
    NOT_FOUND = 'not_found'
    ERROR = 'error'


@dataclass(frozen=True)
class Matchup:
    """A participant and the team they are tracking"""
    participant_name: str
    team_name: str


@dataclass
class ResolvedEvent:
    """Scoreboard event matched to a configured team"""
    event_id: Optional[str]
    raw_event: Dict
    team_id: Optional[str] = None
    matched_name: Optional[str] = None


@dataclass
class MatchupResult:
    """One leaderboard row for one refresh cycle"""
    participant_name: str
    team_name: str
    event_id: Optional[str] = None
    passing_yards: Optional[int] = None
    team_score: Optional[int] = None
    opponent_score: Optional[int] = None
    lead_margin: Optional[int] = None
    game_state: GameState = GameState.UNKNOWN
    status_text: str = ''
    scheduled_start: Optional[datetime] = None
    status: ResultStatus = ResultStatus.OK
    error: Optional[str] = None
    opponent_name: Optional[str] = None
    yards_increased: bool = False

    @property
    def score_display(self) -> str:
        """Get formatted score display"""
        if self.team_score is None or self.opponent_score is None:
            return ''
        return f"{self.team_score} - {self.opponent_score}"

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['game_state'] = self.game_state.value
        data['status'] = self.status.value
        data['scheduled_start'] = self.scheduled_start.isoformat() if self.scheduled_start else None
        data['score'] = self.score_display
        return data


@dataclass
class LeaderboardSnapshot:
    """Complete ranked result set published after a cycle"""
    results: Tuple[MatchupResult, ...]
    refreshed_at: datetime
    error: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            'refreshed_at': self.refreshed_at.isoformat(),
            'error': self.error,
            'results': [
                dict(result.to_dict(), rank=position)
                for position, result in enumerate(self.results, 1)
            ],
        }


def build_matchups(pairs: Iterable[Tuple[str, str]]) -> List[Matchup]:
    """
    Build the configured matchups, in order.
    Raises ValueError on blank fields or a repeated participant name.
    """
    matchups = []
    seen = set()
    for participant_name, team_name in pairs:
        participant_name = (participant_name or '').strip()
        team_name = (team_name or '').strip()
        if not participant_name or not team_name:
            raise ValueError(f"Matchup needs a participant and a team, got {participant_name!r}/{team_name!r}")
        if participant_name in seen:
            raise ValueError(f"Duplicate participant name: {participant_name}")
        seen.add(participant_name)
        matchups.append(Matchup(participant_name=participant_name, team_name=team_name))
    return matchups


def parse_matchups(raw: str) -> List[Tuple[str, str]]:
    """Parse "Name=Team;Name=Team" into (participant, team) pairs"""
    pairs = []
    for chunk in raw.split(';'):
        chunk = chunk.strip()
        if not chunk:
            continue
        if '=' not in chunk:
            raise ValueError(f"Matchup entry must look like Name=Team, got {chunk!r}")
        participant_name, team_name = chunk.split('=', 1)
        pairs.append((participant_name.strip(), team_name.strip()))
    return pairs
