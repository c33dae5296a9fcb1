"""Validate generated emission zone data for quality and completeness"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Set

from shapely.geometry import Polygon

from ..config import NL_BOUNDS
from ..transformers.zone_classifier import ZoneStatus, ZoneType

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of data validation"""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    def add_error(self, message: str):
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str):
        self.warnings.append(message)


class DataValidator:
    """
    Validates emission zone app data for quality, completeness, and consistency.
    """

    VALID_TYPES: Set[str] = {t.value for t in ZoneType}
    VALID_STATUSES: Set[str] = {s.value for s in ZoneStatus}

    # The national feed lists a dozen or more cities
    MIN_ZONES = 10

    def validate_app_data(self, data: Dict[str, Any]) -> ValidationResult:
        """
        Validate the complete app data bundle.
        """
        result = ValidationResult(is_valid=True)

        # Check required fields
        if "version" not in data:
            result.add_error("Missing 'version' field")
        if "zones" not in data:
            result.add_error("Missing 'zones' field")

        if not result.is_valid:
            return result

        zones_result = self._validate_zones(data.get("zones", []))
        result.errors.extend(zones_result.errors)
        result.warnings.extend(zones_result.warnings)
        if not zones_result.is_valid:
            result.is_valid = False

        result.stats = {
            "zones_count": len(data.get("zones", [])),
            "rings_count": sum(len(z.get("coordinates", [])) for z in data.get("zones", [])),
            "validation_time": datetime.now(timezone.utc).isoformat(),
        }

        logger.info(
            f"Validation complete: valid={result.is_valid}, "
            f"errors={len(result.errors)}, warnings={len(result.warnings)}"
        )

        return result

    def _validate_zones(self, zones: List[Dict[str, Any]]) -> ValidationResult:
        """Validate emission zones data"""
        result = ValidationResult(is_valid=True)

        if len(zones) < self.MIN_ZONES:
            result.add_warning(
                f"Low zone count: {len(zones)} (expected >= {self.MIN_ZONES})"
            )

        seen_ids: Set[str] = set()

        for i, zone in enumerate(zones):
            zone_id = zone.get("id")
            if not zone_id:
                result.add_error(f"Zone {i}: missing 'id' field")
                continue

            if zone_id in seen_ids:
                result.add_warning(f"Duplicate zone id: {zone_id}")
            seen_ids.add(zone_id)

            if zone.get("type") not in self.VALID_TYPES:
                result.add_error(f"Zone {zone_id}: unknown type {zone.get('type')!r}")
            if zone.get("status") not in self.VALID_STATUSES:
                result.add_error(f"Zone {zone_id}: unknown status {zone.get('status')!r}")

            if not zone.get("restrictions"):
                result.add_warning(f"Zone {zone_id}: no restrictions")

            rings = zone.get("coordinates", [])
            if not rings or not any(rings):
                result.add_error(f"Zone {zone_id}: missing polygon geometry")
                continue

            for ring_index, ring in enumerate(rings):
                if not ring:
                    result.add_error(f"Zone {zone_id}: ring {ring_index} is empty")
                    continue
                if any(len(coord) != 2 for coord in ring):
                    result.add_error(f"Zone {zone_id}: invalid coordinate format")
                    continue
                outside = sum(1 for lat, lon in ring if not self._is_in_nl_bounds(lat, lon))
                if outside:
                    result.add_warning(
                        f"Zone {zone_id}: {outside} coordinates outside NL bounds in ring {ring_index}"
                    )
                if not self._is_valid_ring(ring):
                    result.add_warning(f"Zone {zone_id}: ring {ring_index} is not a valid polygon")

        return result

    def _is_in_nl_bounds(self, lat: float, lon: float) -> bool:
        """Check if coordinate is within the Netherlands bounds"""
        return (
            NL_BOUNDS["min_lat"] <= lat <= NL_BOUNDS["max_lat"] and
            NL_BOUNDS["min_lon"] <= lon <= NL_BOUNDS["max_lon"]
        )

    def _is_valid_ring(self, ring: List[List[float]]) -> bool:
        """A ring is valid when it forms a simple, non-degenerate polygon"""
        points = [(lon, lat) for lat, lon in ring]
        if len(set(points)) < 3:
            return False
        try:
            return Polygon(points).is_valid
        except ValueError:
            return False
