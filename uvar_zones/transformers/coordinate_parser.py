"""Parse GML posList strings into (lat, lon) points"""
import logging
from typing import Dict, List, Optional, Tuple

from ..config import NL_BOUNDS

logger = logging.getLogger(__name__)

Point = Tuple[float, float]  # (latitude, longitude)


def in_bounds(lat: float, lon: float, bounds: Dict[str, float] = NL_BOUNDS) -> bool:
    """Check if a coordinate falls inside the bounding envelope"""
    return (
        bounds["min_lat"] <= lat <= bounds["max_lat"] and
        bounds["min_lon"] <= lon <= bounds["max_lon"]
    )


def orient_pair(a: float, b: float, bounds: Dict[str, float] = NL_BOUNDS) -> Optional[Point]:
    """
    Return the pair as (lat, lon), swapping it when it was given as (lon, lat).

    The as-is reading wins when both readings are plausible. Returns None when
    neither reading falls inside the envelope.
    """
    if in_bounds(a, b, bounds):
        return (a, b)
    if in_bounds(b, a, bounds):
        return (b, a)
    return None


def parse_coordinates(pos_list: Optional[str], bounds: Dict[str, float] = NL_BOUNDS) -> List[Point]:
    """
    Parse a whitespace separated list of numbers into (lat, lon) points.

    Each adjacent pair of tokens is one point. Pairs with a non-numeric token
    or outside the envelope in both orders are skipped; a trailing unpaired
    token is ignored.
    """
    if not pos_list:
        return []

    tokens = pos_list.split()
    points: List[Point] = []
    skipped = 0

    for i in range(0, len(tokens) - 1, 2):
        try:
            a = float(tokens[i])
            b = float(tokens[i + 1])
        except ValueError:
            logger.debug(f"Skipping non-numeric pair: {tokens[i]!r} {tokens[i + 1]!r}")
            skipped += 1
            continue

        point = orient_pair(a, b, bounds)
        if point is None:
            logger.debug(f"Skipping pair outside envelope in both orders: [{a}, {b}]")
            skipped += 1
            continue

        points.append(point)

    if len(tokens) % 2:
        logger.debug(f"Ignoring trailing unpaired token {tokens[-1]!r}")

    if skipped:
        logger.warning(f"Skipped {skipped} of {len(tokens) // 2} coordinate pairs")

    return points
