"""Transform the UVAR XML feed into emission zone records"""
from .coordinate_parser import parse_coordinates
from .emission_zone_transformer import (
    EmissionZone,
    EmissionZoneTransformer,
    compute_bounds,
    filter_zones,
    zone_stats,
)
from .geometry_collector import GeometryCollector
from .regulation_attributes import RegulationAttributes, extract_attributes
from .restriction_labels import RegulationLabelSynthesizer
from .zone_classifier import ZoneStatus, ZoneType, classify_zone_type, determine_status, extract_city

__all__ = [
    "EmissionZone",
    "EmissionZoneTransformer",
    "GeometryCollector",
    "RegulationAttributes",
    "RegulationLabelSynthesizer",
    "ZoneStatus",
    "ZoneType",
    "classify_zone_type",
    "compute_bounds",
    "determine_status",
    "extract_attributes",
    "extract_city",
    "filter_zones",
    "parse_coordinates",
    "zone_stats",
]
