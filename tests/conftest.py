"""
Shared fakes for MSL executor tests.

The fetcher serves canned HTML by URL, the downloader records what it was
asked to save; the real BeautifulSoup extractor is used throughout.
"""

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from msl_core.errors import TransportError
from msl_core.executor import DestinationResolver, MSLExecutor
from msl_core.scraper import Extractor, generate_filename
from msl_core.types import MediaItem, PageResult


class FakeFetcher:
    def __init__(self, pages: Dict[str, str], extractor: Optional[Extractor] = None):
        self.pages = pages
        self.extractor = extractor or Extractor()
        self.calls: List[str] = []

    async def fetch(self, url: str) -> PageResult:
        self.calls.append(url)
        if url not in self.pages:
            raise TransportError(url, "HTTP 404 Not Found")
        html = self.pages[url]
        return PageResult(url=url, html=html, title=self.extractor.title(html))


class FakeDownloader:
    def __init__(self, fail_on: Optional[str] = None):
        self.fail_on = fail_on
        self.saved: List[tuple] = []
        self.attempts: List[str] = []

    async def save(self, item: MediaItem, destination_dir: str) -> Path:
        self.attempts.append(item.url)
        if self.fail_on and self.fail_on in item.url:
            raise TransportError(item.url, "HTTP 500 Internal Server Error")
        self.saved.append((item, destination_dir))
        return Path(destination_dir) / generate_filename(item.url, item.kind)


class Harness:
    def __init__(self, pages: Dict[str, str], download_dir: str = "downloads", fail_on: Optional[str] = None):
        self.extractor = Extractor()
        self.fetcher = FakeFetcher(pages, self.extractor)
        self.downloader = FakeDownloader(fail_on=fail_on)
        self.sleeps: List[float] = []
        self.executor = MSLExecutor(
            self.fetcher,
            self.extractor,
            self.downloader,
            destinations=DestinationResolver(download_dir),
            sleep=self._sleep,
        )

    async def _sleep(self, seconds: float):
        self.sleeps.append(seconds)


@pytest.fixture
def harness():
    """Factory: harness(pages, download_dir=..., fail_on=...)"""
    return Harness
