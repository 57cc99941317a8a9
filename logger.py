"""
Logging utility that writes leveled messages to both stdout and a file
"""
import os
import sys
import threading
from datetime import datetime
from pathlib import Path

LOG_FILE = Path(os.environ.get('LEADERBOARD_LOG_FILE', 'logs.txt'))
DEBUG_ENABLED = os.environ.get('LEADERBOARD_DEBUG', '').lower() in ('1', 'true', 'yes')


class DualLogger:
    """Logger that writes to both stdout and file"""

    def __init__(self, log_file: Path = LOG_FILE, debug: bool = DEBUG_ENABLED):
        self.log_file = log_file
        self.debug_enabled = debug
        # Worker threads log concurrently during a refresh cycle
        self._lock = threading.Lock()
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    def log(self, message: str, level: str = 'INFO'):
        """Write message to both stdout and file"""
        if level == 'DEBUG' and not self.debug_enabled:
            return

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        log_message = f"[{timestamp}] [{level}] {message}"

        with self._lock:
            print(log_message, flush=True)

            try:
                with open(self.log_file, 'a', encoding='utf-8') as f:
                    f.write(log_message + '\n')
            except OSError as e:
                print(f"[ERROR] Failed to write to log file: {e}", file=sys.stderr, flush=True)


# Global logger instance
_logger = DualLogger()


def log(message: str, level: str = 'INFO'):
    """Convenience function to log messages"""
    _logger.log(message, level)


def debug(message: str):
    _logger.log(message, 'DEBUG')


def warning(message: str):
    _logger.log(message, 'WARNING')


def error(message: str):
    _logger.log(message, 'ERROR')


def set_log_file(log_file: Path):
    """Change the log file location"""
    global _logger
    _logger = DualLogger(log_file, _logger.debug_enabled)


def set_debug(enabled: bool):
    """Toggle DEBUG output"""
    _logger.debug_enabled = enabled
