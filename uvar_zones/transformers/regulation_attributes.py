"""Extract per-regulation metadata from a UVAR record"""
import logging
from dataclasses import dataclass
from typing import Optional

from lxml import etree

from ..config import NAME_LANGUAGE, UNKNOWN_CITY_NAME
from .xml_helpers import find_all, first_text, localized_text, type_attribute

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegulationAttributes:
    """Metadata of one urbanVehicleAccessRegulation record"""
    regulation_id: str
    name: str
    valid_from: Optional[str] = None
    valid_to: Optional[str] = None
    url: Optional[str] = None
    authority: str = ""


def find_validity_condition(node: etree._Element) -> Optional[etree._Element]:
    for condition in find_all(node, "conditions"):
        if "ValidityCondition" in type_attribute(condition):
            return condition
    return None


def extract_attributes(
    regulation: etree._Element,
    index: int,
    language: str = NAME_LANGUAGE
) -> RegulationAttributes:
    """
    Pull name, identifier, validity window, URL and authority from a regulation.

    Every field except the name is optional; a missing name becomes an
    index based placeholder.
    """
    name = localized_text(regulation, "name", language)
    if not name:
        name = UNKNOWN_CITY_NAME.format(index=index + 1)
        logger.warning(f"Regulation {index} has no '{language}' name, using '{name}'")

    regulation_id = regulation.get("id") or f"zone_{index}"

    valid_from = valid_to = None
    validity = find_validity_condition(regulation)
    if validity is not None:
        valid_from = first_text(validity, "overallStartTime") or None
        valid_to = first_text(validity, "overallEndTime") or None
    else:
        logger.debug(f"{name}: no validity condition")

    return RegulationAttributes(
        regulation_id=regulation_id,
        name=name,
        valid_from=valid_from,
        valid_to=valid_to,
        url=first_text(regulation, "urlForFurtherInformation") or None,
        authority=localized_text(regulation, "issuingAuthority", language),
    )
