"""
HTML extraction with BeautifulSoup.

Pure functions of (html, selector): no network, no state. Malformed
selectors surface as InvalidSelector.
"""

import logging
from typing import Dict, List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag
from soupsieve import SelectorSyntaxError

from msl_core.errors import InvalidSelector, InvalidUrl
from msl_core.scraper.urls import resolve_url
from msl_core.types import Element, MediaItem, MediaType

logger = logging.getLogger(__name__)


# Selector groups scanned for each media kind, in document order per group
MEDIA_SELECTORS = {
    MediaType.IMAGE: "img[src]",
    MediaType.VIDEO: "video[src], video source[src]",
    MediaType.AUDIO: "audio[src], audio source[src]",
}


def _attributes(tag: Tag) -> Dict[str, str]:
    # Multi-valued attributes (class, rel) come back as lists
    return {
        key: " ".join(value) if isinstance(value, list) else str(value)
        for key, value in tag.attrs.items()
    }


class Extractor:
    """CSS selection over page markup"""

    def __init__(self, features: str = "html.parser"):
        self.features = features

    def _soup(self, html: str) -> BeautifulSoup:
        return BeautifulSoup(html or "", self.features)

    def _select(self, soup: BeautifulSoup, selector: str) -> List[Tag]:
        try:
            return soup.select(selector)
        except SelectorSyntaxError as e:
            raise InvalidSelector(selector, str(e).splitlines()[0]) from e

    def select(self, html: str, selector: str) -> List[Element]:
        """Snapshot every element matched by selector."""
        return [
            Element(text=tag.get_text(" ", strip=True), attributes=_attributes(tag))
            for tag in self._select(self._soup(html), selector)
        ]

    def text(self, html: str, selector: str) -> List[str]:
        """Text of every matched element, skipping empty ones."""
        texts = []
        for tag in self._select(self._soup(html), selector):
            content = tag.get_text(" ", strip=True)
            if content:
                texts.append(content)
        return texts

    def attribute(self, html: str, selector: str, name: str) -> List[str]:
        """Value of attribute name on every matched element that has it."""
        values = []
        for tag in self._select(self._soup(html), selector):
            if tag.has_attr(name):
                values.append(_attributes(tag)[name])
        return values

    def title(self, html: str) -> Optional[str]:
        tag = self._soup(html).find("title")
        if tag is None:
            return None
        return tag.get_text(" ", strip=True)

    def links(self, html: str, base_url: str) -> List[str]:
        """Absolute URLs of all anchors on the page."""
        links = []
        for tag in self._soup(html).select("a[href]"):
            try:
                links.append(resolve_url(base_url, tag["href"]))
            except InvalidUrl:
                logger.debug(f"Skipping unresolvable link: {tag['href']}")
        return links

    def all_media(self, html: str, base_url: str) -> List[MediaItem]:
        """Every image, video and audio source on the page, resolved against base_url."""
        soup = self._soup(html)
        media_items = []

        for kind, selector in MEDIA_SELECTORS.items():
            for tag in soup.select(selector):
                try:
                    url = resolve_url(base_url, tag["src"])
                except InvalidUrl:
                    logger.debug(f"Skipping unresolvable {kind.value} source: {tag['src']}")
                    continue
                media_items.append(MediaItem(url=url, kind=kind, attributes=_attributes(tag)))

        return media_items
