"""Download media items to the local filesystem"""

import asyncio
import logging
import os
from pathlib import Path

import aiohttp

from msl_core.errors import IoError, TransportError
from msl_core.scraper.urls import last_path_segment
from msl_core.types import MediaItem, MediaType

logger = logging.getLogger(__name__)


def generate_filename(url: str, kind: MediaType) -> str:
    """
    Local file name for a media URL.

    Uses the last path segment of the URL; when it has no extension the
    default extension for the media kind is appended (photo -> photo.jpg).
    """
    filename = last_path_segment(url) or "unknown"
    if not os.path.splitext(filename)[1]:
        return f"{filename}.{kind.default_extension}"
    return filename


class Downloader:
    """Save media items using the shared aiohttp session."""

    def __init__(self, session: aiohttp.ClientSession):
        self.session = session

    async def save(self, item: MediaItem, destination_dir: str) -> Path:
        directory = Path(destination_dir)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise IoError(str(directory), f"failed to create directory: {e}") from e

        file_path = directory / generate_filename(item.url, item.kind)
        logger.info(f"Downloading: {item.url} -> {file_path}")

        try:
            async with self.session.get(item.url) as response:
                response.raise_for_status()
                data = await response.read()
        except aiohttp.ClientResponseError as e:
            raise TransportError(item.url, f"HTTP {e.status} {e.message}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(item.url, str(e) or type(e).__name__) from e

        try:
            file_path.write_bytes(data)
        except OSError as e:
            raise IoError(str(file_path), f"failed to write file: {e}") from e

        logger.info(f"Downloaded: {file_path} ({len(data)} bytes)")
        return file_path
