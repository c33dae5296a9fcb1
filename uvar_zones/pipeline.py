"""Main pipeline orchestrator for the emission zone data"""
import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import (
    EMISSION_ZONES_FILE,
    EMISSION_ZONES_URL,
    LABEL_MODE,
    LOG_LEVEL,
    SPLIT_MULTIPOLYGONS,
)
from .exceptions import FetchError
from .fetchers import EmissionZonesFetcher
from .transformers import EmissionZone, EmissionZoneTransformer
from .validators import DataValidator

logger = logging.getLogger(__name__)


class EmissionZonePipeline:
    """
    Pipeline that loads, transforms and validates the emission zone feed
    for the map front end.
    """

    def __init__(
        self,
        source_file: Optional[Path] = EMISSION_ZONES_FILE,
        source_url: Optional[str] = EMISSION_ZONES_URL,
        transformer: Optional[EmissionZoneTransformer] = None,
        fetcher: Optional[EmissionZonesFetcher] = None
    ):
        self.source_file = Path(source_file) if source_file else None
        self.source_url = source_url
        self.transformer = transformer or EmissionZoneTransformer()
        self.validator = DataValidator()
        self.fetcher = fetcher
        self.zones: List[EmissionZone] = []
        self.app_data: Optional[Dict[str, Any]] = None
        self.run_stats = {
            "start_time": None,
            "end_time": None,
            "source": None,
            "document_size": 0,
            "validation_result": None,
        }

    async def run(self) -> bool:
        """
        Run the complete pipeline.

        Returns:
            True if pipeline completed successfully, False otherwise
        """
        self.run_stats["start_time"] = datetime.now(timezone.utc)
        logger.info("=" * 60)
        logger.info("Starting Emission Zone Pipeline")
        logger.info("=" * 60)

        try:
            logger.info("[Step 1/3] Loading source document...")
            document = await self._load_document()
            self.run_stats["document_size"] = len(document)

            logger.info("[Step 2/3] Transforming data...")
            self.zones = self.transformer.transform_document(document)
            app_data = self.transformer.generate_app_data(self.zones)

            logger.info("[Step 3/3] Validating data...")
            validation = self.validator.validate_app_data(app_data)
            self.run_stats["validation_result"] = validation

            if not validation.is_valid:
                logger.error("Validation failed!")
                for error in validation.errors:
                    logger.error(f"  - {error}")
                return False

            if validation.warnings:
                logger.warning("Validation warnings:")
                for warning in validation.warnings:
                    logger.warning(f"  - {warning}")

            self.app_data = app_data
            self.run_stats["end_time"] = datetime.now(timezone.utc)
            duration = (self.run_stats["end_time"] - self.run_stats["start_time"]).total_seconds()

            stats = app_data["stats"]
            logger.info("=" * 60)
            logger.info("Pipeline completed successfully!")
            logger.info(f"Duration: {duration:.1f} seconds")
            logger.info(f"Source: {self.run_stats['source']} ({self.run_stats['document_size']:,} characters)")
            logger.info(
                f"Zones: {stats['total']} (ZE {stats['zeroEmission']}, LEZ {stats['lowEmission']}; "
                f"active {stats['active']}, upcoming {stats['upcoming']}, inactive {stats['inactive']})"
            )
            for zone in self.zones:
                logger.info(f"  {zone.name:30s} {zone.type.value:3s} {len(zone.coordinates)} polygons")
            logger.info("=" * 60)

            return True

        except Exception as e:
            logger.exception(f"Pipeline failed with error: {e}")
            return False

    async def _load_document(self) -> str:
        """Read the local XML file if present, otherwise fetch it"""
        if self.source_file and self.source_file.exists():
            logger.info(f"Loading emission zones from {self.source_file}...")
            self.run_stats["source"] = str(self.source_file)
            return self.source_file.read_text(encoding="utf-8")

        if not self.source_url and self.fetcher is None:
            raise FetchError(
                f"No source available: {self.source_file} does not exist and no URL is configured"
            )

        fetcher = self.fetcher or EmissionZonesFetcher(self.source_url)
        self.run_stats["source"] = fetcher.url
        async with fetcher:
            return await fetcher.fetch()


async def run_pipeline(**kwargs) -> bool:
    """Entry point for running the pipeline"""
    pipeline = EmissionZonePipeline(**kwargs)
    return await pipeline.run()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Convert the UVAR emission zone XML feed into map data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Use the local file configured in EMISSION_ZONES_FILE
  python -m uvar_zones.pipeline

  # Fetch from a URL and print GeoJSON
  python -m uvar_zones.pipeline --url https://example.org/uvar.xml --geojson
"""
    )
    parser.add_argument('--file', '-f', type=Path, default=EMISSION_ZONES_FILE, help='Local XML file')
    parser.add_argument('--url', '-u', default=EMISSION_ZONES_URL, help='Feed URL, used when the file is missing')
    parser.add_argument('--geojson', action='store_true', help='Print GeoJSON instead of app data')
    parser.add_argument(
        '--detailed-labels',
        action='store_true',
        default=LABEL_MODE == "detailed",
        help='Decode restrictions/exemptions from vehicle characteristics'
    )
    parser.add_argument(
        '--split',
        action='store_true',
        default=SPLIT_MULTIPOLYGONS,
        help='Emit one zone per polygon instead of multi-polygon zones'
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    transformer = EmissionZoneTransformer(
        label_mode="detailed" if args.detailed_labels else "fixed",
        split_multipolygons=args.split,
    )
    pipeline = EmissionZonePipeline(source_file=args.file, source_url=args.url, transformer=transformer)

    if not asyncio.run(pipeline.run()):
        return 1

    output = transformer.to_geojson(pipeline.zones) if args.geojson else pipeline.app_data
    json.dump(output, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
