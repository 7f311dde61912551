"""
MSL - MediaScrapeLang

A small line-oriented language for browser-less scraping workflows:

    open "https://example.com"
    click ".user-card a"
      set user = text
      media
        image
          where src ~ "cdn.example.com"
          extensions jpg, png
        save to "./media/{user}"

Usage:
    from msl_core import MSLParser, MSLExecutor, Scraper

    script = MSLParser().parse(text)
    async with Scraper() as scraper:
        report = await MSLExecutor.from_scraper(scraper).execute(script)
"""

from msl_core.config import Config, config
from msl_core.errors import (
    MSLError,
    ParseError,
    InvalidSelector,
    InvalidUrl,
    NoPageLoaded,
    TransportError,
    IoError,
)
from msl_core.parser import MSLParser, parse_script
from msl_core.executor import MSLExecutor, ExecutionReport, SessionState, run_script
from msl_core.scraper import Scraper, Fetcher, Extractor, Downloader
from msl_core.examples import EXAMPLE_SCRIPTS

__all__ = [
    'Config',
    'config',
    'MSLError',
    'ParseError',
    'InvalidSelector',
    'InvalidUrl',
    'NoPageLoaded',
    'TransportError',
    'IoError',
    'MSLParser',
    'parse_script',
    'MSLExecutor',
    'ExecutionReport',
    'SessionState',
    'run_script',
    'Scraper',
    'Fetcher',
    'Extractor',
    'Downloader',
    'EXAMPLE_SCRIPTS',
]

__version__ = '0.1.0'
