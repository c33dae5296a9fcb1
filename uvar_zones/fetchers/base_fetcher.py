"""Base fetcher class with common functionality"""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import aiohttp

from ..config import MAX_RETRIES, RETRY_DELAY, REQUEST_TIMEOUT
from ..exceptions import FetchError

logger = logging.getLogger(__name__)


class BaseFetcher(ABC):
    """Abstract base class for all data fetchers"""

    def __init__(
        self,
        max_retries: int = MAX_RETRIES,
        retry_delay: float = RETRY_DELAY,
        timeout: float = REQUEST_TIMEOUT
    ):
        self.session: Optional[aiohttp.ClientSession] = None
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeout = timeout

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()

    async def fetch_with_retry(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> str:
        """Fetch URL as text with retry logic and exponential backoff"""
        if self.session is None:
            raise RuntimeError("Fetcher must be used as an async context manager")

        last_error: Optional[Exception] = None

        for attempt in range(self.max_retries):
            try:
                async with self.session.get(url, params=params, headers=headers) as response:
                    response.raise_for_status()
                    return await response.text(encoding="utf-8")
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_error = e
                if attempt + 1 >= self.max_retries:
                    break
                wait_time = self.retry_delay * (2 ** attempt)
                logger.warning(
                    f"Request failed (attempt {attempt + 1}/{self.max_retries}): {e}. "
                    f"Retrying in {wait_time}s..."
                )
                await asyncio.sleep(wait_time)

        logger.error(f"Giving up on {url} after {self.max_retries} attempts: {last_error}")
        raise FetchError(
            f"Failed to fetch {url} after {self.max_retries} attempts: {last_error}",
            url=url,
        ) from last_error

    @abstractmethod
    async def fetch(self) -> str:
        """Fetch the raw document from the source. Must be implemented by subclasses."""
        pass

    @abstractmethod
    def get_source_name(self) -> str:
        """Return the name of this data source"""
        pass
