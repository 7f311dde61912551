"""Page fetching over a shared aiohttp session"""

import asyncio
import logging

import aiohttp

from msl_core.errors import TransportError
from msl_core.scraper.extractor import Extractor
from msl_core.scraper.urls import ensure_absolute_url
from msl_core.types import PageResult

logger = logging.getLogger(__name__)


class Fetcher:
    """Fetch pages and summarise them (title, links, media)."""

    def __init__(self, session: aiohttp.ClientSession, extractor: Extractor = None):
        self.session = session
        self.extractor = extractor or Extractor()

    async def fetch(self, url: str) -> PageResult:
        ensure_absolute_url(url)
        logger.debug(f"GET {url}")

        try:
            async with self.session.get(url) as response:
                response.raise_for_status()
                html = await response.text()
        except aiohttp.ClientResponseError as e:
            raise TransportError(url, f"HTTP {e.status} {e.message}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(url, str(e) or type(e).__name__) from e
        except UnicodeDecodeError as e:
            raise TransportError(url, f"could not decode response: {e}") from e

        return PageResult(
            url=url,
            html=html,
            title=self.extractor.title(html),
            links=self.extractor.links(html, url),
            media=self.extractor.all_media(html, url),
        )
