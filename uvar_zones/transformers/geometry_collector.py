"""Locate polygon boundaries inside a traffic regulation's conditions"""
import logging
from typing import Callable, List, Optional, Sequence, Set, Tuple

from lxml import etree

from ..config import NL_BOUNDS
from .coordinate_parser import Point, parse_coordinates
from .xml_helpers import find_all, iter_descendants, local_name, text_of, type_attribute

logger = logging.getLogger(__name__)

Ring = Tuple[Point, ...]
Strategy = Callable[[etree._Element], List[etree._Element]]

LOCATION_CONDITION_TYPE = "tro:LocationCondition"

# Text with more tokens than this is treated as a coordinate list
MIN_POSLIST_TOKENS = 10


# Location condition search, strictest first

def _typed_location_conditions(node: etree._Element) -> List[etree._Element]:
    return [c for c in find_all(node, "conditions") if type_attribute(c) == LOCATION_CONDITION_TYPE]


def _unqualified_location_conditions(node: etree._Element) -> List[etree._Element]:
    unqualified = LOCATION_CONDITION_TYPE.split(":", 1)[1]
    return [c for c in find_all(node, "conditions") if type_attribute(c) == unqualified]


def _location_like_conditions(node: etree._Element) -> List[etree._Element]:
    return [c for c in find_all(node, "conditions") if "Location" in type_attribute(c)]


def _all_conditions(node: etree._Element) -> List[etree._Element]:
    return find_all(node, "conditions")


CONDITION_STRATEGIES: Sequence[Tuple[str, Strategy]] = (
    ("typed location condition", _typed_location_conditions),
    ("unqualified location condition", _unqualified_location_conditions),
    ("location-like condition", _location_like_conditions),
    ("any condition", _all_conditions),
)


# Polygon search within one condition, strictest first

def _gml_polygons(node: etree._Element) -> List[etree._Element]:
    return find_all(node, "gmlPolygon")


def _polygon_tags(node: etree._Element) -> List[etree._Element]:
    return [el for el in iter_descendants(node) if "polygon" in local_name(el).lower()]


def _polygon_tags_or_types(node: etree._Element) -> List[etree._Element]:
    return [
        el for el in iter_descendants(node)
        if "polygon" in local_name(el).lower() or "polygon" in type_attribute(el).lower()
    ]


def _bare_pos_lists(node: etree._Element) -> List[etree._Element]:
    # Each posList is treated as an implicit single-ring polygon
    return find_all(node, "posList")


POLYGON_STRATEGIES: Sequence[Tuple[str, Strategy]] = (
    ("gmlPolygon", _gml_polygons),
    ("polygon tag", _polygon_tags),
    ("polygon tag or type", _polygon_tags_or_types),
    ("bare posList", _bare_pos_lists),
)


def first_match(
    node: etree._Element,
    strategies: Sequence[Tuple[str, Strategy]]
) -> Tuple[Optional[str], List[etree._Element]]:
    """Run strategies in order and return the first non-empty result with its label"""
    for label, strategy in strategies:
        found = strategy(node)
        if found:
            return label, found
    return None, []


def find_pos_list(polygon: etree._Element) -> Optional[etree._Element]:
    """Find the coordinate list element of a polygon-like node"""
    if local_name(polygon) == "posList":
        return polygon

    descendants = list(iter_descendants(polygon))

    for el in descendants:
        if local_name(el) == "posList":
            return el

    for el in descendants:
        if "poslist" in local_name(el).lower() or len(text_of(el).split()) > MIN_POSLIST_TOKENS:
            return el

    return None


class GeometryCollector:
    """
    Collects polygon rings from a traffic regulation.

    Both the condition search and the polygon search are fallback cascades:
    a looser strategy only runs when every stricter one found nothing.
    """

    def __init__(self, bounds=NL_BOUNDS):
        self.bounds = bounds

    def find_location_conditions(self, traffic_regulation: etree._Element) -> List[etree._Element]:
        label, conditions = first_match(traffic_regulation, CONDITION_STRATEGIES)
        if conditions:
            logger.debug(f"Found {len(conditions)} conditions via {label}")
        return conditions

    def find_polygons(self, condition: etree._Element) -> List[etree._Element]:
        label, polygons = first_match(condition, POLYGON_STRATEGIES)
        if polygons:
            logger.debug(f"Found {len(polygons)} polygons via {label}")
        return polygons

    def collect_rings(self, traffic_regulation: etree._Element, label: str = "") -> List[Ring]:
        """
        Return every non-empty ring found under the regulation, in document order.

        A coordinate list reachable from several candidates (nested conditions or
        nested polygon tags) is only used once.
        """
        rings: List[Ring] = []
        used: Set[etree._Element] = set()

        for condition_index, condition in enumerate(self.find_location_conditions(traffic_regulation)):
            for polygon_index, polygon in enumerate(self.find_polygons(condition)):
                pos_list = find_pos_list(polygon)
                if pos_list is None:
                    logger.debug(
                        f"{label}: no posList in condition {condition_index} polygon {polygon_index}"
                    )
                    continue
                if pos_list in used:
                    continue
                used.add(pos_list)

                ring = parse_coordinates(text_of(pos_list), self.bounds)
                if not ring:
                    logger.warning(
                        f"{label}: condition {condition_index} polygon {polygon_index} "
                        f"has no valid coordinates, skipping"
                    )
                    continue

                rings.append(tuple(ring))
                logger.debug(f"{label}: added polygon with {len(ring)} coordinates")

        return rings
