"""Heuristics that pull a time range and a result limit out of free text.

Both extractors are best effort: anything they do not recognise yields None
and the caller falls back to its own default.
"""

import re
from typing import Optional

_UNITS = r"(hours?|days?|weeks?|months?)"

TIME_RANGE_PATTERNS = [
    re.compile(rf"(?:in|for|over|during) the (?:last|past) (\d+) {_UNITS}", re.IGNORECASE),
    re.compile(r"(?:in|for|over|during) the (?:last|past) (hour|day|week|month)", re.IGNORECASE),
    re.compile(rf"(?:since|from) (\d+) {_UNITS} ago", re.IGNORECASE),
]

LIMIT_PATTERNS = [
    re.compile(r"\btop (\d+)\b", re.IGNORECASE),
    re.compile(r"\blimit (\d+)\b", re.IGNORECASE),
    re.compile(r"\bshow me (\d+)\b", re.IGNORECASE),
    re.compile(r"\bonly (\d+)\b", re.IGNORECASE),
]


def extract_time_range(text: str) -> Optional[str]:
    """Return the first time range phrase found, exactly as written."""
    for pattern in TIME_RANGE_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(0)
    return None


def extract_limit(text: str) -> Optional[int]:
    """Return the number from the first "top N" style phrase found."""
    for pattern in LIMIT_PATTERNS:
        match = pattern.search(text)
        if match:
            return int(match.group(1), 10)
    return None
