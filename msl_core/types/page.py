"""Data exchanged with the fetch / extract / download collaborators"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from msl_core.types.media_type import MediaType


@dataclass
class MediaItem:
    """A media reference found on a page"""
    url: str
    kind: MediaType
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass
class Element:
    """Snapshot of an element matched by a selector"""
    text: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass
class PageResult:
    """Result of fetching a page"""
    url: str
    html: str
    title: Optional[str] = None
    links: List[str] = field(default_factory=list)
    media: List[MediaItem] = field(default_factory=list)
