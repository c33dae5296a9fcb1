"""Transform a UVAR XML document into app-ready emission zones"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

from lxml import etree
from shapely.geometry import MultiPoint, MultiPolygon, Polygon, mapping

from ..config import DEFAULT_MAP_CENTER, LABEL_MODE, NAME_LANGUAGE, NL_BOUNDS, SPLIT_MULTIPOLYGONS
from .geometry_collector import GeometryCollector, Ring
from .regulation_attributes import RegulationAttributes, extract_attributes
from .restriction_labels import RegulationLabelSynthesizer
from .xml_helpers import find_first, parse_document
from .zone_classifier import ZoneStatus, ZoneType, classify_zone_type, determine_status, extract_city

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmissionZone:
    """Represents one emission zone as shown on the map"""
    id: str
    name: str
    type: ZoneType
    city: str
    authority: str
    status: ZoneStatus
    coordinates: Tuple[Ring, ...]  # One or more rings, each ring is a tuple of (lat, lon)
    valid_from: Optional[str] = None
    valid_to: Optional[str] = None
    url: Optional[str] = None
    restrictions: FrozenSet[str] = frozenset()
    exemptions: FrozenSet[str] = frozenset()

    @property
    def is_multi_polygon(self) -> bool:
        return len(self.coordinates) > 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "city": self.city,
            "authority": self.authority,
            "status": self.status.value,
            "validFrom": self.valid_from,
            "validTo": self.valid_to,
            "coordinates": [[[lat, lon] for lat, lon in ring] for ring in self.coordinates],
            "url": self.url,
            "restrictions": sorted(self.restrictions),
            "exemptions": sorted(self.exemptions),
        }


@dataclass
class _ZoneGeometry:
    """Rings and metadata gathered for one zone name during a single run"""
    attributes: RegulationAttributes
    restrictions: FrozenSet[str]
    exemptions: FrozenSet[str]
    rings: List[Ring] = field(default_factory=list)


class EmissionZoneTransformer:
    """
    Transforms an urban vehicle access regulation document into EmissionZone records.

    Each call works on its own local state, so one instance can be reused
    across documents and threads.
    """

    def __init__(
        self,
        language: str = NAME_LANGUAGE,
        label_mode: str = LABEL_MODE,
        split_multipolygons: bool = SPLIT_MULTIPOLYGONS,
        bounds: Dict[str, float] = NL_BOUNDS
    ):
        self.language = language
        self.split_multipolygons = split_multipolygons
        self.collector = GeometryCollector(bounds)
        self.labels = RegulationLabelSynthesizer(label_mode)

    def transform_document(self, document, now: Optional[datetime] = None) -> List[EmissionZone]:
        """
        Parse XML text or bytes and transform every regulation in it.

        Raises DocumentParseError if the document is not well-formed.
        """
        root = parse_document(document)
        return self.transform_tree(root, now=now)

    def transform_tree(self, root: etree._Element, now: Optional[datetime] = None) -> List[EmissionZone]:
        now = now or datetime.now(timezone.utc)

        regulations = root.xpath("descendant-or-self::*[local-name()='urbanVehicleAccessRegulation']")
        logger.info(f"Found {len(regulations)} regulations")

        # Zone name -> accumulated rings, in order of first appearance
        zones_by_name: Dict[str, _ZoneGeometry] = {}

        for index, regulation in enumerate(regulations):
            attributes = extract_attributes(regulation, index, self.language)
            logger.debug(f"Processing zone: {attributes.name}")

            traffic_regulation = find_first(regulation, "trafficRegulation")
            if traffic_regulation is None:
                logger.warning(f"No traffic regulation found for {attributes.name}")
                continue

            entry = zones_by_name.get(attributes.name)
            if entry is None:
                restrictions, exemptions = self.labels.labels_for(regulation)
                entry = _ZoneGeometry(attributes, restrictions, exemptions)
                zones_by_name[attributes.name] = entry

            rings = self.collector.collect_rings(traffic_regulation, label=attributes.name)
            entry.rings.extend(rings)
            logger.debug(f"Collected {len(rings)} polygons for {attributes.name}")

        zones: List[EmissionZone] = []
        dropped = 0
        for name, entry in zones_by_name.items():
            if not entry.rings:
                logger.warning(f"Dropping {name}: no valid geometry")
                dropped += 1
                continue
            zones.extend(self._build_zones(entry, now))

        logger.info(f"Transformed {len(zones)} emission zones ({dropped} without geometry dropped)")
        return zones

    def _build_zones(self, entry: _ZoneGeometry, now: datetime) -> List[EmissionZone]:
        attrs = entry.attributes
        zone_type = classify_zone_type(attrs.name)
        status = determine_status(attrs.valid_from, attrs.valid_to, now)
        city = attrs.authority or extract_city(attrs.name)

        if self.split_multipolygons and len(entry.rings) > 1:
            parts = [
                (f"{attrs.regulation_id}_{i}", f"{attrs.name} ({i})", (ring,))
                for i, ring in enumerate(entry.rings, start=1)
            ]
        else:
            parts = [(attrs.regulation_id, attrs.name, tuple(entry.rings))]

        return [
            EmissionZone(
                id=zone_id,
                name=name,
                type=zone_type,
                city=city,
                authority=attrs.authority,
                status=status,
                coordinates=rings,
                valid_from=attrs.valid_from,
                valid_to=attrs.valid_to,
                url=attrs.url,
                restrictions=entry.restrictions,
                exemptions=entry.exemptions,
            )
            for zone_id, name, rings in parts
        ]

    def generate_app_data(
        self,
        zones: List[EmissionZone],
        generated: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Generate the bundle consumed by the map front end.
        """
        generated = generated or datetime.now(timezone.utc)
        bounds = compute_bounds(zones)

        if bounds:
            (min_lat, min_lon), (max_lat, max_lon) = bounds
            center = [(min_lat + max_lat) / 2, (min_lon + max_lon) / 2]
        else:
            center = list(DEFAULT_MAP_CENTER)

        return {
            "version": generated.strftime("%Y%m%d"),
            "generated": generated.isoformat(),
            "zones": [zone.to_dict() for zone in zones],
            "stats": zone_stats(zones),
            "bounds": bounds,
            "center": center,
        }

    def to_geojson(self, zones: List[EmissionZone]) -> Dict[str, Any]:
        """Export zones as a GeoJSON FeatureCollection with [lon, lat] coordinates"""
        features = []

        for zone in zones:
            polygons = []
            for ring in zone.coordinates:
                if len(set(ring)) < 3:
                    logger.debug(f"{zone.name}: ring with {len(ring)} points left out of GeoJSON")
                    continue
                polygons.append(Polygon([(lon, lat) for lat, lon in ring]))

            properties = zone.to_dict()
            del properties["coordinates"]

            features.append({
                "type": "Feature",
                "id": zone.id,
                "geometry": mapping(MultiPolygon(polygons)) if polygons else None,
                "properties": properties,
            })

        return {"type": "FeatureCollection", "features": features}


def compute_bounds(zones: Iterable[EmissionZone]) -> Optional[List[List[float]]]:
    """[[min_lat, min_lon], [max_lat, max_lon]] over all zone coordinates"""
    points = [(lon, lat) for zone in zones for ring in zone.coordinates for lat, lon in ring]
    if not points:
        return None

    min_lon, min_lat, max_lon, max_lat = MultiPoint(points).bounds
    return [[min_lat, min_lon], [max_lat, max_lon]]


def zone_stats(zones: List[EmissionZone]) -> Dict[str, int]:
    return {
        "total": len(zones),
        "zeroEmission": sum(1 for z in zones if z.type == ZoneType.ZERO_EMISSION),
        "lowEmission": sum(1 for z in zones if z.type == ZoneType.LOW_EMISSION),
        "active": sum(1 for z in zones if z.status == ZoneStatus.ACTIVE),
        "upcoming": sum(1 for z in zones if z.status == ZoneStatus.UPCOMING),
        "inactive": sum(1 for z in zones if z.status == ZoneStatus.INACTIVE),
    }


def filter_zones(
    zones: Iterable[EmissionZone],
    search: str = "",
    zone_type: Optional[ZoneType] = None,
    status: Optional[ZoneStatus] = None
) -> List[EmissionZone]:
    """Filter zones by a case-insensitive name/city search, type and status"""
    term = search.lower()
    return [
        zone for zone in zones
        if (term in zone.name.lower() or term in zone.city.lower())
        and (zone_type is None or zone.type == zone_type)
        and (status is None or zone.status == status)
    ]
