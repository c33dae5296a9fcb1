"""Tests for restriction and exemption labels"""
import pytest

# Add parent directory to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from uvar_zones.config import DEFAULT_EXEMPTIONS, DEFAULT_RESTRICTIONS
from uvar_zones.transformers.restriction_labels import RegulationLabelSynthesizer
from uvar_zones.transformers.xml_helpers import find_first, parse_document

from uvar_documents import document, regulation

RESTRICTED_VEHICLES = (
    '<tro:conditions xsi:type="tro:VehicleCondition">'
    "<tro:vehicleCharacteristics>"
    "<com:fuelType>diesel</com:fuelType>"
    "<com:emissions><com:emissionClassificationEuro>euro5</com:emissionClassificationEuro></com:emissions>"
    "<com:_vehicleCharacteristicsExtension><com:vehicleCharacteristicsExtended>"
    "<comx:regulatedCharacteristics xmlns:comx=\"http://example.org/comx\">"
    "<comx:euVehicleCategory>n2</comx:euVehicleCategory>"
    "</comx:regulatedCharacteristics>"
    "</com:vehicleCharacteristicsExtended></com:_vehicleCharacteristicsExtension>"
    "</tro:vehicleCharacteristics>"
    "</tro:conditions>"
)

EXEMPT_VEHICLES = (
    '<tro:condition xsi:type="tro:ConditionSet">'
    "<tro:negate>true</tro:negate>"
    '<tro:conditions xsi:type="tro:VehicleCondition">'
    "<tro:vehicleCharacteristics>"
    "<com:fuelType>hydrogen</com:fuelType>"
    "<com:_vehicleCharacteristicsExtension><com:vehicleCharacteristicsExtended>"
    "<comx:regulatedCharacteristics xmlns:comx=\"http://example.org/comx\">"
    "<comx:euSpecialPurposeVehicle>ambulance</comx:euSpecialPurposeVehicle>"
    "</comx:regulatedCharacteristics>"
    "<comx:ownerCharacteristic xmlns:comx=\"http://example.org/comx\">"
    "<comx:ownerType>government</comx:ownerType>"
    "</comx:ownerCharacteristic>"
    "<comx:ageCharacteristic xmlns:comx=\"http://example.org/comx\">"
    "<comx:comparisonOperator>greaterThan</comx:comparisonOperator>"
    "<comx:vehicleAge>40</comx:vehicleAge>"
    "</comx:ageCharacteristic>"
    "</com:vehicleCharacteristicsExtended></com:_vehicleCharacteristicsExtension>"
    "</tro:vehicleCharacteristics>"
    "</tro:conditions>"
    "</tro:condition>"
)


def first_regulation(conditions: str):
    root = parse_document(document(regulation(conditions=conditions)))
    return find_first(root, "urbanVehicleAccessRegulation")


class TestRegulationLabelSynthesizer:
    """Tests for RegulationLabelSynthesizer"""

    def test_fixed_labels(self):
        """Test fixed mode ignores the regulation content"""
        synthesizer = RegulationLabelSynthesizer("fixed")

        restrictions, exemptions = synthesizer.labels_for(first_regulation(RESTRICTED_VEHICLES))

        assert restrictions == {"Dieselvoertuigen", "Oude voertuigen"}
        assert exemptions == {"Elektrische voertuigen", "Waterstof voertuigen", "Oldtimers"}

    def test_detailed_restrictions(self):
        synthesizer = RegulationLabelSynthesizer("detailed")

        restrictions, exemptions = synthesizer.labels_for(first_regulation(RESTRICTED_VEHICLES))

        assert restrictions == {
            "EU Voertuig Categorie: n2",
            "Euro Emissie Norm: euro5",
            "Brandstof Type: diesel",
        }
        # Nothing negated, so the fixed exemptions remain
        assert exemptions == set(DEFAULT_EXEMPTIONS)

    def test_detailed_exemptions(self):
        synthesizer = RegulationLabelSynthesizer("detailed")

        restrictions, exemptions = synthesizer.labels_for(
            first_regulation(RESTRICTED_VEHICLES + EXEMPT_VEHICLES)
        )

        assert exemptions == {
            "Speciale Voertuigen: ambulance",
            "Eigenaar Type: government",
            "Voertuig Leeftijd: greaterThan 40 jaar",
            "Brandstof Type: hydrogen",
        }
        assert "Brandstof Type: hydrogen" not in restrictions

    def test_detailed_without_vehicle_data(self):
        """Test an undecodable regulation falls back to the fixed labels"""
        synthesizer = RegulationLabelSynthesizer("detailed")

        restrictions, exemptions = synthesizer.labels_for(first_regulation(""))

        assert restrictions == set(DEFAULT_RESTRICTIONS)
        assert exemptions == set(DEFAULT_EXEMPTIONS)

    def test_duplicates_removed(self):
        synthesizer = RegulationLabelSynthesizer("detailed")

        restrictions, _ = synthesizer.labels_for(first_regulation(RESTRICTED_VEHICLES * 2))

        assert len(restrictions) == 3

    def test_negate_false_is_a_restriction(self):
        synthesizer = RegulationLabelSynthesizer("detailed")
        conditions = EXEMPT_VEHICLES.replace("<tro:negate>true</tro:negate>", "<tro:negate>false</tro:negate>")

        restrictions, exemptions = synthesizer.labels_for(first_regulation(conditions))

        assert "Brandstof Type: hydrogen" in restrictions
        assert exemptions == set(DEFAULT_EXEMPTIONS)

    def test_negate_one_is_an_exemption(self):
        """Test the xsd:boolean literal 1 negates like true"""
        synthesizer = RegulationLabelSynthesizer("detailed")
        conditions = EXEMPT_VEHICLES.replace("<tro:negate>true</tro:negate>", "<tro:negate>1</tro:negate>")

        restrictions, exemptions = synthesizer.labels_for(first_regulation(conditions))

        assert "Brandstof Type: hydrogen" in exemptions
        assert "Brandstof Type: hydrogen" not in restrictions

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            RegulationLabelSynthesizer("everything")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
