from msl_core.scraper.extractor import Extractor
from msl_core.scraper.fetcher import Fetcher
from msl_core.scraper.downloader import Downloader, generate_filename
from msl_core.scraper.scraper import Scraper
from msl_core.scraper.urls import resolve_url, ensure_absolute_url

__all__ = [
    'Extractor',
    'Fetcher',
    'Downloader',
    'generate_filename',
    'Scraper',
    'resolve_url',
    'ensure_absolute_url',
]
