"""Mutable state of one script run"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from msl_core.errors import NoPageLoaded
from msl_core.types import Element


@dataclass
class Page:
    url: str
    html: str
    title: Optional[str] = None


@dataclass
class SessionState:
    """
    Current page, variable bindings and the active selection.

    ``selection`` holds the elements matched by the selector of the
    innermost ``click`` whose body is executing; ``set`` values are
    evaluated against it.
    """
    current_page: Optional[Page] = None
    variables: Dict[str, str] = field(default_factory=dict)
    selection: Optional[List[Element]] = None

    def require_page(self, command: str) -> Page:
        if self.current_page is None:
            raise NoPageLoaded(command)
        return self.current_page
