"""
Team name matching (Strategy Pattern)

ESPN spells the same team differently across endpoints and fields
("Washington", "Washington Huskies", "UW"), so every lookup goes through
one MatchPolicy shared by the scoreboard and the summary steps.
"""

import re
from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from logger import debug
from models import ResolvedEvent

_NON_ALNUM = re.compile(r'[^a-z0-9]')

# Team fields ESPN uses for names
TEAM_NAME_FIELDS = ('location', 'shortDisplayName', 'displayName', 'name')


def normalize(name) -> str:
    """Lower-case and keep only [a-z0-9]. Never raises."""
    if not isinstance(name, str):
        return ''
    return _NON_ALNUM.sub('', name.lower())


def exact_match(configured: str, candidate: str) -> bool:
    return bool(configured) and configured == candidate


def substring_match(configured: str, candidate: str) -> bool:
    if not configured or not candidate:
        return False
    return configured in candidate or candidate in configured


class MatchPolicy(ABC):
    """Abstract base class for name matching policies"""

    name = ''

    @abstractmethod
    def passes(self) -> List[Callable[[str, str], bool]]:
        """
        Comparisons to try, in order. Each pass is run over the whole
        candidate set before the next one is tried.
        """
        pass


class ExactPolicy(MatchPolicy):
    """Normalized names must be identical"""

    name = 'exact'

    def passes(self):
        return [exact_match]


class SubstringPolicy(MatchPolicy):
    """Either normalized name may contain the other"""

    name = 'substring'

    def passes(self):
        return [substring_match]


class ExactThenSubstringPolicy(MatchPolicy):
    """
    Exact match first; substring only when nothing matched exactly.
    Keeps "Washington" off "Washington State" while still catching
    "UAlbany" vs "Albany" style differences.
    """

    name = 'exact_then_substring'

    def passes(self):
        return [exact_match, substring_match]


POLICIES = {
    policy.name: policy
    for policy in (ExactPolicy, SubstringPolicy, ExactThenSubstringPolicy)
}


def get_policy(name: str) -> MatchPolicy:
    """Look up a policy by its config name"""
    try:
        return POLICIES[(name or '').strip().lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown match policy {name!r}; expected one of {', '.join(sorted(POLICIES))}"
        ) from None


def _team_names(team: Dict) -> List[str]:
    if not isinstance(team, dict):
        return []
    return [normalize(team.get(field)) for field in TEAM_NAME_FIELDS if team.get(field)]


def _team_of(entry) -> Dict:
    """Scoreboard competitors, header competitors and boxscore teams all nest a 'team' dict"""
    if not isinstance(entry, dict):
        return {}
    team = entry.get('team')
    return team if isinstance(team, dict) else {}


def _team_id(entry) -> Optional[str]:
    team_id = _team_of(entry).get('id') or (entry.get('id') if isinstance(entry, dict) else None)
    return str(team_id) if team_id is not None else None


class TeamResolver:
    """Finds events and per-team records for a configured team name"""

    def __init__(self, policy: MatchPolicy = None):
        self.policy = policy or ExactThenSubstringPolicy()

    def _first_match(self, team_name: str, candidates: Iterable[Tuple[object, Dict]]):
        """Return the first (payload, entry) whose team matches under the policy"""
        target = normalize(team_name)
        candidates = list(candidates)

        for compare in self.policy.passes():
            for payload, entry in candidates:
                names = _team_names(_team_of(entry))
                if any(compare(target, candidate) for candidate in names):
                    return payload, entry
        return None

    def resolve(self, team_name: str, scoreboard: Dict) -> Optional[ResolvedEvent]:
        """
        Find the scoreboard event featuring the configured team.
        Returns None when no event matches (NotFound is not an error).
        """
        events = scoreboard.get('events') if isinstance(scoreboard, dict) else None
        if not isinstance(events, list):
            events = []

        candidates = []
        for event in events:
            if not isinstance(event, dict):
                continue
            for competition in event.get('competitions') or []:
                if not isinstance(competition, dict):
                    continue
                for competitor in competition.get('competitors') or []:
                    candidates.append((event, competitor))

        match = self._first_match(team_name, candidates)
        if match is None:
            debug(f"No scoreboard event for '{team_name}' among {len(events)} events ({self.policy.name})")
            return None

        event, competitor = match
        event_id = event.get('id')
        matched_name = _team_of(competitor).get('displayName')
        debug(f"Matched '{team_name}' -> '{matched_name}' in event {event_id}")
        return ResolvedEvent(
            event_id=str(event_id) if event_id is not None else None,
            raw_event=event,
            team_id=_team_id(competitor),
            matched_name=matched_name,
        )

    def _find(self, team_name: str, entries, team_id: Optional[str]) -> Optional[Dict]:
        if not isinstance(entries, list):
            return None
        entries = [entry for entry in entries if isinstance(entry, dict)]

        if team_id is not None:
            for entry in entries:
                if _team_id(entry) == team_id:
                    return entry

        match = self._first_match(team_name, [(entry, entry) for entry in entries])
        return match[0] if match else None

    def find_team(self, team_name: str, boxscore_teams, team_id: Optional[str] = None) -> Optional[Dict]:
        """Locate the configured team's entry in summary.boxscore.teams"""
        return self._find(team_name, boxscore_teams, team_id)

    def find_competitor(self, team_name: str, competitors, team_id: Optional[str] = None) -> Optional[Dict]:
        """Locate the configured team's competitor in a competition"""
        return self._find(team_name, competitors, team_id)
