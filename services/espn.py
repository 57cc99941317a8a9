"""
ESPN public API client for college-football scoreboards and game summaries
"""

import time
from typing import Dict, Optional

import requests

from config import Config
from logger import debug, warning


class FetchError(Exception):
    """Raised when an ESPN endpoint cannot be fetched or decoded"""


class ESPNClient:
    """
    Read-only client for ESPN's site API.

    Two endpoints are used:
    - scoreboard: every event on a given date
    - summary: header, boxscore and team statistics for one event

    No API key required. Response shapes are not guaranteed, so callers
    treat everything returned here as loosely typed JSON.
    """

    def __init__(self, base_url: str = None, timeout: int = None,
                 retries: int = None, retry_delay: float = None):
        self.base_url = (base_url or Config.ESPN_BASE_URL).rstrip('/')
        self.timeout = timeout if timeout is not None else Config.API_TIMEOUT
        self.retries = retries if retries is not None else Config.API_RETRIES
        self.retry_delay = retry_delay if retry_delay is not None else Config.API_RETRY_DELAY
        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
            'Accept': 'application/json, text/plain, */*',
            'Accept-Language': 'en-US,en;q=0.9',
            'Cache-Control': 'no-cache',
        })

    def _get_json(self, path: str, params: Dict) -> Dict:
        """GET an endpoint, retrying transport failures and non-200 responses"""
        url = f"{self.base_url}/{path}"
        attempts = max(self.retries, 0) + 1
        last_error = None

        for attempt in range(attempts):
            try:
                response = self.session.get(url, params=params, timeout=self.timeout)
                if response.status_code != 200:
                    raise FetchError(f"ESPN {path} returned status {response.status_code}")
                data = response.json()
                if not isinstance(data, dict):
                    raise FetchError(f"ESPN {path} returned unexpected payload type {type(data).__name__}")
                return data
            except requests.exceptions.JSONDecodeError as e:
                # Invalid JSON is not retried
                raise FetchError(f"ESPN {path} returned invalid JSON: {e}") from e
            except requests.exceptions.RequestException as e:
                last_error = FetchError(f"ESPN {path} request failed: {e}")
            except FetchError as e:
                last_error = e

            if attempt < attempts - 1:
                warning(f"{last_error} (attempt {attempt + 1}/{attempts}), retrying")
                time.sleep(self.retry_delay * (attempt + 1))

        raise last_error

    def get_scoreboard(self, date: str, groups: Optional[str] = None,
                       limit: Optional[int] = None) -> Dict:
        """Fetch the scoreboard for a YYYYMMDD date"""
        params = {'dates': date}
        groups = groups if groups is not None else Config.SCOREBOARD_GROUPS
        limit = limit if limit is not None else Config.SCOREBOARD_LIMIT
        if groups:
            params['groups'] = groups
        if limit:
            params['limit'] = limit

        data = self._get_json('scoreboard', params)
        debug(f"ESPN scoreboard {date}: {len(data.get('events') or [])} events")
        return data

    def get_summary(self, event_id: str) -> Dict:
        """Fetch the game summary (header + boxscore) for one event"""
        return self._get_json('summary', {'event': event_id})

    def check_health(self) -> bool:
        """Check the scoreboard endpoint answers with an events list"""
        data = self._get_json('scoreboard', {'dates': Config.GAME_DATE, 'limit': 1})
        if 'events' not in data:
            raise FetchError("ESPN scoreboard response missing 'events' field")
        return True
