"""
Statistic extraction from ESPN boxscore team statistics
"""

import re
from typing import Callable, Dict, List, Optional

_LEADING_INT = re.compile(r'-?\d+')
_NOT_NUMERIC = re.compile(r'[^0-9-]')


def is_passing_yards(stat_name: str) -> bool:
    """'netPassingYards', 'Passing Yards', 'passYds' all qualify"""
    name = stat_name.lower()
    return 'pass' in name and ('yd' in name or 'yard' in name)


def parse_stat_value(raw) -> int:
    """
    Convert a displayValue/value to an int.
    Anything unparseable becomes 0.
    """
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        return int(raw)

    cleaned = _NOT_NUMERIC.sub('', str(raw))
    match = _LEADING_INT.match(cleaned)
    return int(match.group()) if match else 0


def extract_stat(stat_list: List[Dict], predicate: Callable[[str], bool]) -> Optional[int]:
    """
    Pull the first statistic whose name satisfies predicate.

    Returns None when the list is missing or nothing matches, so callers
    can tell "no data" apart from a real 0.
    """
    if not isinstance(stat_list, list):
        return None

    for stat in stat_list:
        if not isinstance(stat, dict):
            continue
        name = stat.get('name')
        if not isinstance(name, str) or not predicate(name):
            continue

        display_value = stat.get('displayValue')
        value = stat.get('value')
        if display_value:
            return parse_stat_value(display_value)
        if value is not None:
            return parse_stat_value(value)
        return None

    return None


def extract_passing_yards(stat_list: List[Dict]) -> Optional[int]:
    return extract_stat(stat_list, is_passing_yards)
