"""
Services package for business logic
"""

from .espn import ESPNClient, FetchError
from .matching import TeamResolver, MatchPolicy, get_policy, normalize
from .stats import extract_passing_yards
from .game_state import get_timezone, read_state
from .ranking import ChangeTracker, rank
from .tracker import LeaderboardTracker
from .poller import Poller, PollerState

__all__ = [
    'ESPNClient',
    'FetchError',
    'TeamResolver',
    'MatchPolicy',
    'get_policy',
    'normalize',
    'extract_passing_yards',
    'get_timezone',
    'read_state',
    'ChangeTracker',
    'rank',
    'LeaderboardTracker',
    'Poller',
    'PollerState',
]
