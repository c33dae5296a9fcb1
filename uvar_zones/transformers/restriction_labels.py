"""Human readable restriction and exemption labels for a zone"""
import logging
from typing import FrozenSet, Set, Tuple

from lxml import etree

from ..config import DEFAULT_EXEMPTIONS, DEFAULT_RESTRICTIONS, LABEL_MODE
from .xml_helpers import find_all, first_text, local_name, text_of

logger = logging.getLogger(__name__)

LABEL_MODES = ("fixed", "detailed")


def is_negated(node: etree._Element, stop: etree._Element) -> bool:
    """True when ``node`` sits under a condition whose ``negate`` child is true"""
    current = node.getparent()
    while current is not None:
        for child in current:
            if local_name(child) == "negate" and text_of(child).lower() in ("true", "1"):
                return True
        if current is stop:
            break
        current = current.getparent()
    return False


class RegulationLabelSynthesizer:
    """
    Produces restriction and exemption label sets.

    ``fixed`` mode returns the same labels for every zone. ``detailed`` mode
    decodes the vehicle characteristics of the regulation: plain conditions
    become restrictions, negated conditions become exemptions. Both are an
    approximation of the full regulation grammar.
    """

    def __init__(self, mode: str = LABEL_MODE):
        if mode not in LABEL_MODES:
            raise ValueError(f"Unknown label mode '{mode}', expected one of {LABEL_MODES}")
        self.mode = mode

    def labels_for(self, regulation: etree._Element) -> Tuple[FrozenSet[str], FrozenSet[str]]:
        """Return (restrictions, exemptions) for one regulation"""
        restrictions: FrozenSet[str] = frozenset(DEFAULT_RESTRICTIONS)
        exemptions: FrozenSet[str] = frozenset(DEFAULT_EXEMPTIONS)

        if self.mode == "fixed":
            return restrictions, exemptions

        decoded_restrictions, decoded_exemptions = self.decode(regulation)
        # Empty decodes keep the fixed labels
        return (
            frozenset(decoded_restrictions) or restrictions,
            frozenset(decoded_exemptions) or exemptions,
        )

    def decode(self, regulation: etree._Element) -> Tuple[Set[str], Set[str]]:
        restrictions: Set[str] = set()
        exemptions: Set[str] = set()

        for characteristics in find_all(regulation, "vehicleCharacteristics"):
            fuel_type = first_text(characteristics, "fuelType")

            if is_negated(characteristics, regulation):
                special = first_text(characteristics, "euSpecialPurposeVehicle")
                if special:
                    exemptions.add(f"Speciale Voertuigen: {special}")

                owner_type = first_text(characteristics, "ownerType")
                if owner_type:
                    exemptions.add(f"Eigenaar Type: {owner_type}")

                for age in find_all(characteristics, "ageCharacteristic"):
                    operator = first_text(age, "comparisonOperator")
                    years = first_text(age, "vehicleAge")
                    if operator and years:
                        exemptions.add(f"Voertuig Leeftijd: {operator} {years} jaar")

                if fuel_type:
                    exemptions.add(f"Brandstof Type: {fuel_type}")
            else:
                category = first_text(characteristics, "euVehicleCategory")
                if category:
                    restrictions.add(f"EU Voertuig Categorie: {category}")

                euro_class = first_text(characteristics, "emissionClassificationEuro")
                if euro_class:
                    restrictions.add(f"Euro Emissie Norm: {euro_class}")

                if fuel_type:
                    restrictions.add(f"Brandstof Type: {fuel_type}")

        logger.debug(f"Decoded {len(restrictions)} restrictions, {len(exemptions)} exemptions")
        return restrictions, exemptions
