"""MSL Executor - Executes parsed MSL scripts"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, Dict, List, Optional, Union

from msl_core.config import Config, config as default_config
from msl_core.executor.media_filter import DestinationResolver, filter_media
from msl_core.executor.session import Page, SessionState
from msl_core.parser.msl_parser import MSLParser
from msl_core.scraper import Scraper
from msl_core.scraper.urls import resolve_url
from msl_core.types import (
    Attribute,
    Click,
    Command,
    Element,
    Media,
    Open,
    Save,
    Script,
    Set,
    Split,
    Text,
    ValueExpr,
    Wait,
)

logger = logging.getLogger(__name__)


@dataclass
class ExecutionReport:
    """Observable outcome of a script run"""
    commands_executed: int = 0
    pages: List[str] = field(default_factory=list)
    downloads: List[Path] = field(default_factory=list)
    saves: List[str] = field(default_factory=list)
    variables: Dict[str, str] = field(default_factory=dict)


def evaluate_value(value: ValueExpr, selection: Optional[List[Element]]) -> str:
    """
    Evaluate a value expression against the first selected element.

    Without a selection every expression evaluates to the empty string.
    """
    if not selection:
        return ""
    element = selection[0]

    if isinstance(value, Text):
        return element.text

    if isinstance(value, Attribute):
        return element.attributes.get(value.name, "")

    if isinstance(value, Split):
        pieces = [element.text]
        for delimiter in (value.source_delimiter, value.delimiter):
            # Empty delimiter leaves the text whole
            if delimiter:
                pieces = [part for piece in pieces for part in piece.split(delimiter)]
        try:
            return pieces[value.index]
        except IndexError:
            return ""

    raise TypeError(f"Unknown value expression: {value!r}")


class MSLExecutor:
    """
    Interpreter for MSL scripts.

    Collaborators are injected: a fetcher (``fetch(url) -> PageResult``),
    an extractor (``attribute``/``select``/``all_media``) and a downloader
    (``save(item, destination_dir)``). Every failure is fatal to the run.
    """

    COMMAND_HANDLERS = {
        Open: '_execute_open',
        Click: '_execute_click',
        Set: '_execute_set',
        Media: '_execute_media',
        Save: '_execute_save',
        Wait: '_execute_wait',
    }

    def __init__(
        self,
        fetcher,
        extractor,
        downloader,
        destinations: Optional[DestinationResolver] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.fetcher = fetcher
        self.extractor = extractor
        self.downloader = downloader
        self.destinations = destinations or DestinationResolver(default_config.download_dir)
        self.sleep = sleep
        self.parser = MSLParser()
        self.state = SessionState()
        self.report = ExecutionReport()

    @classmethod
    def from_scraper(cls, scraper, config: Optional[Config] = None) -> "MSLExecutor":
        """Executor wired to the live collaborators of an open Scraper"""
        config = config or scraper.config
        return cls(
            scraper.fetcher,
            scraper.extractor,
            scraper.downloader,
            destinations=DestinationResolver(config.download_dir),
        )

    async def execute(self, script: Union[Script, str]) -> ExecutionReport:
        """Execute a script (or script text) against a fresh session"""
        if isinstance(script, str):
            script = self.parser.parse(script)

        self.state = SessionState()
        self.report = ExecutionReport()

        for command in script.commands:
            await self._execute_command(command)

        self.report.variables = dict(self.state.variables)
        return self.report

    async def _execute_command(self, command: Command):
        handler = self.COMMAND_HANDLERS.get(type(command))
        if handler is None:
            raise TypeError(f"Unknown command: {command!r}")
        await getattr(self, handler)(command)
        self.report.commands_executed += 1

    async def _load_page(self, url: str):
        result = await self.fetcher.fetch(url)
        self.state.current_page = Page(url=url, html=result.html, title=result.title)
        self.report.pages.append(url)
        logger.info(f"Loaded page: {result.title or 'No title'}")

    async def _execute_open(self, command: Open):
        logger.info(f"Opening: {command.url}")
        await self._load_page(command.url)

    async def _execute_click(self, command: Click):
        page = self.state.require_page("click")

        links = self.extractor.attribute(page.html, command.selector, "href")
        if not links:
            logger.info(f"No links found for selector: {command.selector}")
            return

        # Only the first match is followed; selection[0] is that element
        link = resolve_url(page.url, links[0])
        selection = [
            element for element in self.extractor.select(page.html, command.selector)
            if "href" in element.attributes
        ]
        logger.info(f"Following link: {link}")
        await self._load_page(link)

        previous = self.state.selection
        self.state.selection = selection
        try:
            for child in command.body:
                await self._execute_command(child)
        finally:
            self.state.selection = previous

    async def _execute_set(self, command: Set):
        self.state.require_page("set")
        if not self.state.selection:
            logger.debug(f"No selection for '{command.name}'; value is empty")

        value = evaluate_value(command.value, self.state.selection)
        self.state.variables[command.name] = value
        logger.info(f"Set variable: {command.name} = {value}")

    async def _execute_media(self, command: Media):
        page = self.state.require_page("media")

        all_media = self.extractor.all_media(page.html, page.url)
        logger.debug(f"Page has {len(all_media)} media items")

        for block in command.blocks:
            matched = filter_media(all_media, block.filters)
            logger.info(f"Found {len(matched)} {block.kind.value} items")

            destination = self.destinations.resolve(block, self.state.variables)
            for item in matched:
                path = await self.downloader.save(item, destination)
                self.report.downloads.append(path)

    async def _execute_save(self, command: Save):
        # Recorded only; page content is not persisted
        logger.info(f"Saving to: {command.path}")
        self.report.saves.append(command.path)

    async def _execute_wait(self, command: Wait):
        logger.info(f"Waiting for {command.seconds} seconds...")
        await self.sleep(command.seconds)
        logger.info("Wait completed.")


async def run_script(script: Union[Script, str], config: Optional[Config] = None) -> ExecutionReport:
    """Execute a script (or script text) with live HTTP collaborators"""
    if isinstance(script, str):
        # Syntax errors surface before any session is opened
        script = MSLParser().parse(script)
    async with Scraper(config) as scraper:
        executor = MSLExecutor.from_scraper(scraper, config)
        return await executor.execute(script)
