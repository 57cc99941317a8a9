"""
Application configuration
"""
import os


class Config:
    """Application configuration"""
    # ESPN public college-football API
    ESPN_BASE_URL = os.environ.get(
        'ESPN_BASE_URL',
        'https://site.api.espn.com/apis/site/v2/sports/football/college-football'
    )

    # API limits
    API_TIMEOUT = int(os.environ.get('API_TIMEOUT', 10))
    API_RETRIES = int(os.environ.get('API_RETRIES', 2))
    API_RETRY_DELAY = 1  # seconds, multiplied by attempt number
    SCOREBOARD_GROUPS = os.environ.get('SCOREBOARD_GROUPS') or None  # e.g. '80' for FBS only
    SCOREBOARD_LIMIT = int(os.environ.get('SCOREBOARD_LIMIT', 300))
    MAX_WORKERS = int(os.environ.get('MAX_WORKERS', 8))

    # Game day being tracked (YYYYMMDD, as ESPN expects)
    GAME_DATE = os.environ.get('GAME_DATE', '20250830')

    # Participant -> team pairs, in display order.
    # Override with MATCHUPS="Blake=Washington;Chris=Boston College"
    MATCHUPS = [
        ('Blake', 'Washington'),
        ('Chris', 'Boston College'),
        ('David', 'Washington State'),
        ('Higgins', 'Eastern Michigan'),
        ('Nic', 'Florida State'),
        ('Q', 'Alabama'),
        ('Sam', 'Nicholls'),
        ('Shyam', 'Middle Tennessee'),
        ('Steven', 'Oklahoma'),
        ('Tommy', 'Florida'),
        ('Vandy', 'Northern Arizona'),
        ('Will', 'UAlbany'),
    ]
    MATCHUPS_ENV = os.environ.get('MATCHUPS', '')

    # Team name matching: exact, substring or exact_then_substring
    MATCH_POLICY = os.environ.get('MATCH_POLICY', 'exact_then_substring')

    # Start times of scheduled games are shown in this zone
    DISPLAY_TIMEZONE = os.environ.get('DISPLAY_TIMEZONE', 'America/New_York')

    # Data refresh settings
    REFRESH_INTERVAL = int(os.environ.get('REFRESH_INTERVAL', 15))  # seconds

    LEADERBOARD_TITLE = os.environ.get(
        'LEADERBOARD_TITLE', 'Fantasy Fellas Draft Order Tracker'
    )

    # Flask config
    FLASK_HOST = '0.0.0.0'
    FLASK_PORT = int(os.environ.get('PORT', 5001))
    FLASK_DEBUG = False

    # Start polling when app.py is imported by a WSGI server
    AUTOSTART_POLLER = os.environ.get('AUTOSTART_POLLER', '').lower() in ('1', 'true', 'yes')
