"""Owner of the HTTP session shared by fetches and downloads"""

import logging
from typing import Optional

import aiohttp

from msl_core.config import Config, config as default_config
from msl_core.scraper.downloader import Downloader
from msl_core.scraper.extractor import Extractor
from msl_core.scraper.fetcher import Fetcher

logger = logging.getLogger(__name__)


class Scraper:
    """
    Live collaborators for one script run.

    Use as an async context manager so the session is closed:

        async with Scraper() as scraper:
            page = await scraper.fetcher.fetch("https://example.com")
            await scraper.downloader.save(page.media[0], "./media")
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or default_config
        self.extractor = Extractor()
        self.session: Optional[aiohttp.ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self.downloader: Optional[Downloader] = None

    async def __aenter__(self) -> "Scraper":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def open(self):
        if self.session is not None:
            return
        self.session = aiohttp.ClientSession(
            headers={"User-Agent": self.config.user_agent},
            timeout=aiohttp.ClientTimeout(total=self.config.request_timeout),
        )
        self.fetcher = Fetcher(self.session, self.extractor)
        self.downloader = Downloader(self.session)
        logger.debug("HTTP session opened")

    async def close(self):
        if self.session is not None:
            await self.session.close()
            self.session = None
            logger.debug("HTTP session closed")
