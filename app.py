"""
Flask REST API publishing the passing-yards leaderboard
"""

from flask import Flask, jsonify, request
from flask_cors import CORS
from datetime import datetime, timezone

from config import Config
from models import build_matchups, parse_matchups
from services import (
    ESPNClient, FetchError, ChangeTracker, LeaderboardTracker, Poller, TeamResolver, get_policy, get_timezone,
)
from logger import log, warning

app = Flask(__name__)
CORS(app)  # The leaderboard page is served from elsewhere


def create_poller() -> Poller:
    """Wire the services from Config. Bad matchups, policy or timezone raise ValueError."""
    get_timezone(Config.DISPLAY_TIMEZONE)
    pairs = parse_matchups(Config.MATCHUPS_ENV) if Config.MATCHUPS_ENV else Config.MATCHUPS
    matchups = build_matchups(pairs)
    tracker = LeaderboardTracker(
        ESPNClient(),
        matchups,
        resolver=TeamResolver(get_policy(Config.MATCH_POLICY)),
        max_workers=Config.MAX_WORKERS,
    )
    return Poller(
        tracker,
        ChangeTracker(),
        game_date=Config.GAME_DATE,
        interval_seconds=Config.REFRESH_INTERVAL,
    )


poller = create_poller()

if Config.AUTOSTART_POLLER:
    poller.start()


@app.route('/api/leaderboard', methods=['GET'])
def get_leaderboard():
    """
    GET /api/leaderboard

    Returns the latest ranked snapshot with loading/error state.
    """
    state = poller.state

    if state.snapshot is None:
        return jsonify({
            'error': state.error or 'Data not yet available',
            'message': 'Server is fetching initial data, please retry in a few seconds',
            'is_loading': state.is_loading
        }), 503

    response_data = state.snapshot.to_dict()
    response_data['is_loading'] = state.is_loading
    response_data['game_date'] = poller.game_date
    response_data['title'] = Config.LEADERBOARD_TITLE
    response_data['refresh_interval'] = poller.interval_seconds

    return jsonify(response_data), 200


@app.route('/api/refresh', methods=['GET', 'POST'])
def refresh():
    """
    GET/POST /api/refresh

    Run a refresh cycle now. Reports "busy" if one is already running.
    """
    ran = poller.refresh_once()
    state = poller.state
    snapshot = state.snapshot
    return jsonify({
        'status': 'refreshed' if ran else 'busy',
        'error': state.error,
        'rows': len(snapshot.results) if snapshot else 0,
        'timestamp': snapshot.refreshed_at.isoformat() if snapshot else None
    }), 200


@app.route('/api/health', methods=['GET'])
def health_check():
    """
    GET /api/health

    Query params:
        feed=1: also check that the ESPN scoreboard answers
    """
    state = poller.state
    cache_age = None
    if state.snapshot:
        cache_age = (datetime.now(timezone.utc) - state.snapshot.refreshed_at).total_seconds()

    response_data = {
        'status': 'healthy',
        'poller_running': poller.is_running,
        'cache_status': 'populated' if state.snapshot else 'empty',
        'cache_age_seconds': cache_age,
        'is_loading': state.is_loading,
        'last_error': state.error
    }

    if request.args.get('feed') in ('1', 'true'):
        try:
            poller.tracker.client.check_health()
            response_data['feed_status'] = 'ok'
        except FetchError as e:
            warning(f"ESPN health check failed: {e}")
            response_data['status'] = 'degraded'
            response_data['feed_status'] = 'unavailable'
            response_data['feed_error'] = str(e)

    return jsonify(response_data), 200


if __name__ == '__main__':
    print("=" * 80)
    print(Config.LEADERBOARD_TITLE)
    print("=" * 80)
    print(f"\nTracking {len(poller.tracker.matchups)} teams on {Config.GAME_DATE}")
    print(f"Starting server on {Config.FLASK_HOST}:{Config.FLASK_PORT}")
    print(f"\nAPI Endpoints:")
    print(f"  - GET  http://localhost:{Config.FLASK_PORT}/api/leaderboard")
    print(f"  - GET  http://localhost:{Config.FLASK_PORT}/api/health")
    print(f"  - POST http://localhost:{Config.FLASK_PORT}/api/refresh")
    print(f"\nPress Ctrl+C to stop")
    print("=" * 80 + "\n")

    if not poller.is_running:
        poller.start()

    try:
        app.run(
            host=Config.FLASK_HOST,
            port=Config.FLASK_PORT,
            debug=Config.FLASK_DEBUG
        )
    finally:
        poller.stop(timeout=Config.API_TIMEOUT)
        log("Server stopped")
