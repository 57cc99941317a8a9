"""
Background polling of the leaderboard.

Runs refresh cycles on a fixed interval in a daemon thread and keeps the
latest snapshot plus loading/error state for readers and subscribers.

Usage:
    poller = Poller(tracker, ChangeTracker(), game_date='20250830')
    poller.start(15)
    ...
    poller.stop()
"""

import threading
import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable, List, Optional

from config import Config
from models import LeaderboardSnapshot
from logger import error, log, warning
from .matching import normalize
from .ranking import ChangeTracker, rank
from .tracker import LeaderboardTracker


@dataclass(frozen=True)
class PollerState:
    """What the presentation layer sees"""
    snapshot: Optional[LeaderboardSnapshot] = None
    is_loading: bool = False
    error: Optional[str] = None
    last_attempt: Optional[datetime] = None


class Poller:
    """Single-flight refresh loop around LeaderboardTracker"""

    def __init__(self, tracker: LeaderboardTracker, change_tracker: ChangeTracker = None,
                 game_date: str = None, interval_seconds: float = None):
        self.tracker = tracker
        self.change_tracker = change_tracker or ChangeTracker()
        self.game_date = game_date or Config.GAME_DATE
        self.interval_seconds = interval_seconds or Config.REFRESH_INTERVAL

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._cycle_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._state = PollerState()
        self._subscribers: List[Callable[[PollerState], None]] = []

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop_event.is_set()

    @property
    def state(self) -> PollerState:
        with self._state_lock:
            return self._state

    def subscribe(self, callback: Callable[[PollerState], None]) -> Callable[[], None]:
        """Register for state changes. Returns an unsubscribe function."""
        with self._state_lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self._state_lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def start(self, interval_seconds: float = None) -> bool:
        """
        Start polling; the first cycle runs immediately.

        Returns:
            True if started, False if already running
        """
        if self.is_running:
            warning("Poller already running")
            return False

        if interval_seconds:
            self.interval_seconds = interval_seconds

        # Fresh event per run so a previous loop still finishing its cycle stays stopped
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run_loop,
            args=(self._stop_event,),
            name='leaderboard-poller',
            daemon=True,
        )
        self._thread.start()
        log(f"Poller started (interval: {self.interval_seconds}s, date: {self.game_date})")
        return True

    def stop(self, timeout: float = None) -> bool:
        """
        Stop polling. The pending wait is cancelled at once; a cycle already
        in flight finishes but its result is dropped.

        Args:
            timeout: Seconds to wait for the loop thread; None returns at once

        Returns:
            False only if the thread was still alive after timeout
        """
        self._stop_event.set()
        thread = self._thread
        if thread is None:
            return True

        if timeout is not None:
            thread.join(timeout=timeout)
            if thread.is_alive():
                warning("Poller thread did not stop in time")
                return False

        log("Poller stopped")
        return True

    def refresh_once(self) -> bool:
        """
        Run one cycle now, unless one is already in flight.

        Returns:
            True if a cycle ran, False if skipped
        """
        return self._run_cycle(threading.Event())

    def _run_loop(self, stop_event: threading.Event):
        next_tick = time.monotonic()
        # The first cycle queues behind one left in flight by a previous start()
        wait_for_lock = True
        while not stop_event.is_set():
            try:
                self._run_cycle(stop_event, wait_for_lock)
            except Exception as e:
                error(f"Refresh cycle crashed: {e}")
                self._fail(f"Failed to refresh leaderboard: {e}")
            wait_for_lock = False

            # Ticks missed while a cycle overran are skipped, not queued
            next_tick += self.interval_seconds
            now = time.monotonic()
            if next_tick < now:
                next_tick = now + self.interval_seconds
            if stop_event.wait(next_tick - now):
                return

    def _run_cycle(self, stop_event: threading.Event, wait_for_lock: bool = False) -> bool:
        if not self._cycle_lock.acquire(blocking=wait_for_lock):
            return False

        try:
            if stop_event.is_set():
                return False
            self._update(is_loading=True, last_attempt=datetime.now(timezone.utc))
            try:
                snapshot = self.tracker.run_cycle(self.game_date)
            except Exception as e:
                if stop_event.is_set():
                    self._update(is_loading=False)
                    return True
                error(f"Refresh cycle failed: {e}")
                self._fail(f"Failed to refresh leaderboard: {e}")
                return True

            if stop_event.is_set():
                self._update(is_loading=False)
                return True

            ranked = self._flag_increases(rank(snapshot.results))
            snapshot = replace(snapshot, results=tuple(ranked), error=None)
            self._update(snapshot=snapshot, is_loading=False, error=None)
            return True
        finally:
            self._cycle_lock.release()

    def _flag_increases(self, ranked):
        # Memory is keyed by team, so a team shared by two participants is checked once
        increased = {}
        flagged = []
        for result in ranked:
            key = normalize(result.team_name)
            if key not in increased:
                increased[key] = self.change_tracker.record_and_check(key, result.passing_yards)
            flagged.append(replace(result, yards_increased=increased[key]))
        return flagged

    def _fail(self, message: str):
        current = self.state
        snapshot = current.snapshot
        if snapshot is not None:
            snapshot = replace(snapshot, error=message)
        self._update(snapshot=snapshot, is_loading=False, error=message)

    def _update(self, **changes):
        with self._state_lock:
            self._state = replace(self._state, **changes)
            state = self._state
            subscribers = list(self._subscribers)

        for callback in subscribers:
            try:
                callback(state)
            except Exception as e:
                error(f"Poller subscriber {callback!r} failed: {e}")
