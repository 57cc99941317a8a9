"""
Leaderboard ordering and passing-yard change detection
"""

from typing import Dict, Iterable, List, Optional

from models import GameState, MatchupResult
from .matching import normalize


def _sort_key(result: MatchupResult):
    if result.passing_yards is not None:
        return (0, -result.passing_yards)
    if result.game_state == GameState.SCHEDULED:
        if result.scheduled_start is not None:
            return (1, result.scheduled_start.timestamp())
        return (2, 0)
    return (3, 0)


def rank(results: Iterable[MatchupResult]) -> List[MatchupResult]:
    """
    Order rows for display:
    1. passing yards, highest first (0 is a real value and beats no value)
    2. no yards yet, scheduled: earliest kickoff first
    3. no yards yet, scheduled without a kickoff time
    4. everything else (not found, errors), in configured order
    """
    # sorted() is stable, so ties keep configuration order
    return sorted(results, key=_sort_key)


class ChangeTracker:
    """Remembers each team's last passing-yards reading for the process lifetime"""

    def __init__(self):
        self._previous: Dict[str, int] = {}

    def previous(self, identity: str) -> Optional[int]:
        return self._previous.get(normalize(identity))

    def record_and_check(self, identity: str, value: Optional[int]) -> bool:
        """
        Return True when value is strictly above the last reading.

        The first reading for an identity only sets the baseline. A missing
        value never overwrites a previous real one.
        """
        if value is None:
            return False

        key = normalize(identity)
        previous = self._previous.get(key)
        self._previous[key] = value
        return previous is not None and value > previous

    def reset(self):
        self._previous.clear()
