"""Fetcher for the UVAR emission zone XML feed"""
import logging
from typing import Optional

from ..config import EMISSION_ZONES_URL
from ..exceptions import FetchError
from .base_fetcher import BaseFetcher

logger = logging.getLogger(__name__)


class EmissionZonesFetcher(BaseFetcher):
    """
    Fetches the urban vehicle access regulation document.

    The document contains, per regulation:
    - Localized zone and authority names
    - Validity window
    - Location conditions with GML polygon boundaries

    The body is returned as text; parsing happens in the transformer.
    """

    def __init__(self, url: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.url = url or EMISSION_ZONES_URL

    def get_source_name(self) -> str:
        return "UVAR Emission Zones (XML)"

    async def fetch(self) -> str:
        """Fetch the complete XML document"""
        if not self.url:
            raise FetchError("No emission zones URL configured")

        logger.info(f"Starting fetch from {self.get_source_name()}: {self.url}")

        text = await self.fetch_with_retry(
            self.url, headers={"Accept": "application/xml, text/xml"}
        )

        if not text or not text.strip():
            raise FetchError(f"Empty response from {self.url}", url=self.url)

        logger.info(f"Completed fetch: {len(text):,} characters")
        return text
