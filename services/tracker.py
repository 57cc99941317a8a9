"""
Main tracking logic - one refresh cycle across every configured matchup
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from typing import Dict, List, Optional

from config import Config
from models import (
    LeaderboardSnapshot, Matchup, MatchupResult, ResolvedEvent, ResultStatus,
)
from logger import debug, log, warning
from .espn import ESPNClient
from .game_state import read_state
from .matching import TeamResolver
from .stats import extract_passing_yards

NOT_FOUND_TEXT = 'No game found'
ERROR_TEXT = 'Error'


def _first_competition(container) -> Optional[Dict]:
    if not isinstance(container, dict):
        return None
    competitions = container.get('competitions')
    if isinstance(competitions, list) and competitions and isinstance(competitions[0], dict):
        return competitions[0]
    return None


class LeaderboardTracker:
    """Resolves every matchup against the ESPN feed and collects one row each"""

    def __init__(self, client: ESPNClient, matchups: List[Matchup],
                 resolver: Optional[TeamResolver] = None, max_workers: int = None):
        self.client = client
        self.matchups = list(matchups)
        self.resolver = resolver or TeamResolver()
        self.max_workers = max_workers or Config.MAX_WORKERS

    def process_matchup(self, matchup: Matchup, scoreboard: Dict) -> MatchupResult:
        """
        Build the row for one matchup.
        Fetch failures propagate; run_cycle turns them into error rows.
        """
        resolved = self.resolver.resolve(matchup.team_name, scoreboard)
        if resolved is None:
            return MatchupResult(
                participant_name=matchup.participant_name,
                team_name=matchup.team_name,
                status=ResultStatus.NOT_FOUND,
                status_text=NOT_FOUND_TEXT,
            )

        summary = {}
        if resolved.event_id is not None:
            summary = self.client.get_summary(resolved.event_id)
        else:
            warning(f"Event for '{matchup.team_name}' has no id, using scoreboard data only")

        return self._build_result(matchup, resolved, summary)

    def _build_result(self, matchup: Matchup, resolved: ResolvedEvent, summary: Dict) -> MatchupResult:
        header = summary.get('header') if isinstance(summary, dict) else None
        competition = _first_competition(header) or _first_competition(resolved.raw_event)
        competitors = competition.get('competitors') if competition else None

        competitor = self.resolver.find_competitor(
            matchup.team_name, competitors, team_id=resolved.team_id
        )

        boxscore = summary.get('boxscore') if isinstance(summary, dict) else None
        boxscore_teams = boxscore.get('teams') if isinstance(boxscore, dict) else None
        boxscore_team = self.resolver.find_team(
            matchup.team_name, boxscore_teams, team_id=resolved.team_id
        )
        passing_yards = None
        if boxscore_team is not None:
            passing_yards = extract_passing_yards(boxscore_team.get('statistics'))

        reading = read_state(competition, competitor)

        return MatchupResult(
            participant_name=matchup.participant_name,
            team_name=matchup.team_name,
            event_id=resolved.event_id,
            passing_yards=passing_yards,
            team_score=reading.team_score,
            opponent_score=reading.opponent_score,
            lead_margin=reading.lead_margin,
            game_state=reading.game_state,
            status_text=reading.status_text,
            scheduled_start=reading.scheduled_start,
            opponent_name=reading.opponent_name,
        )

    def _safe_process(self, matchup: Matchup, scoreboard: Dict) -> MatchupResult:
        try:
            return self.process_matchup(matchup, scoreboard)
        except Exception as e:
            # One team's failure must not cost the other rows
            warning(f"Failed to build row for {matchup.participant_name} ({matchup.team_name}): {e}")
            return MatchupResult(
                participant_name=matchup.participant_name,
                team_name=matchup.team_name,
                status=ResultStatus.ERROR,
                status_text=ERROR_TEXT,
                error=str(e) or type(e).__name__,
            )

    def run_cycle(self, game_date: str = None) -> LeaderboardSnapshot:
        """
        Fetch the scoreboard once, then resolve all matchups concurrently.

        A scoreboard failure raises and fails the whole cycle. Results come
        back in configured order, unranked.
        """
        game_date = game_date or Config.GAME_DATE
        scoreboard = self.client.get_scoreboard(game_date)
        debug(f"Scoreboard {game_date}: {len(scoreboard.get('events') or [])} events")

        results: List[Optional[MatchupResult]] = [None] * len(self.matchups)
        if self.matchups:
            workers = min(self.max_workers, len(self.matchups))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = {
                    executor.submit(self._safe_process, matchup, scoreboard): index
                    for index, matchup in enumerate(self.matchups)
                }
                for future in as_completed(futures):
                    results[futures[future]] = future.result()

        found = sum(1 for r in results if r.status == ResultStatus.OK)
        errors = sum(1 for r in results if r.status == ResultStatus.ERROR)
        log(f"Cycle {game_date}: {found}/{len(results)} matched, {errors} errors")

        return LeaderboardSnapshot(
            results=tuple(results),
            refreshed_at=datetime.now(timezone.utc),
        )
