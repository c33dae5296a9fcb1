"""Derive zone type, city and lifecycle status"""
import logging
import re
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from ..config import UNKNOWN_CITY_TOKEN

logger = logging.getLogger(__name__)


class ZoneType(str, Enum):
    """Kind of emission zone"""
    ZERO_EMISSION = "ZE"
    LOW_EMISSION = "LEZ"


class ZoneStatus(str, Enum):
    """Lifecycle of a zone relative to the transformation time"""
    ACTIVE = "active"
    UPCOMING = "upcoming"
    INACTIVE = "inactive"


ZERO_EMISSION_MARKERS = [
    re.compile(r"\bZE\b"),
    re.compile(r"ZERO"),
    re.compile(r"NUL-?EMISSIE"),
]

# First match wins
CITY_PATTERNS = [
    re.compile(r"\bZE\s+(\w+)", re.IGNORECASE),
    re.compile(r"\bLEZ\s+(\w+)", re.IGNORECASE),
    re.compile(r"(\w+)\s+ZE\b", re.IGNORECASE),
    re.compile(r"(\w+)\s+LEZ\b", re.IGNORECASE),
    re.compile(r"(\w+)\s+\d{4}"),
]


def classify_zone_type(name: str) -> ZoneType:
    upper = (name or "").upper()
    if any(marker.search(upper) for marker in ZERO_EMISSION_MARKERS):
        return ZoneType.ZERO_EMISSION
    return ZoneType.LOW_EMISSION


def extract_city(name: str) -> str:
    """Guess the city from a zone name, e.g. 'ZE Rotterdam' -> 'Rotterdam'"""
    for pattern in CITY_PATTERNS:
        match = pattern.search(name or "")
        if match and match.group(1):
            return match.group(1)

    words = (name or "").split()
    return words[0] if words else UNKNOWN_CITY_TOKEN


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO 8601 date or timestamp into an aware datetime.

    Returns None for missing or unparseable values; naive values are taken as UTC.
    """
    if not value or not value.strip():
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.warning(f"Unparseable date: {value!r}")
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def determine_status(
    valid_from: Optional[str] = None,
    valid_to: Optional[str] = None,
    now: Optional[datetime] = None
) -> ZoneStatus:
    """A future start wins over a past end; unparseable dates are ignored"""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    start = parse_date(valid_from)
    if start is not None and start > now:
        return ZoneStatus.UPCOMING

    end = parse_date(valid_to)
    if end is not None and end < now:
        return ZoneStatus.INACTIVE

    return ZoneStatus.ACTIVE
