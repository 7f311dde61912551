"""
MSL error taxonomy and user-friendly error formatting.

Every failure raised while parsing or running a script derives from
MSLError. Collaborator exceptions (aiohttp, soupsieve, OSError) are
translated at the boundary so callers only ever see this hierarchy.
"""

import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class MSLError(Exception):
    """Base class for all MSL errors"""
    pass


class ParseError(MSLError):
    """Script text could not be consumed by the grammar"""

    def __init__(self, message: str, remaining: str = "", line: Optional[int] = None):
        self.message = message
        self.remaining = remaining
        self.line = line
        location = f" (line {line})" if line is not None else ""
        super().__init__(f"Parse error{location}: {message}")


class InvalidSelector(MSLError):
    """Malformed CSS selector"""

    def __init__(self, selector: str, reason: str = ""):
        self.selector = selector
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Invalid selector '{selector}'{detail}")


class InvalidUrl(MSLError):
    """URL could not be resolved to an absolute http(s) URL"""

    def __init__(self, url: str, base: Optional[str] = None):
        self.url = url
        self.base = base
        against = f" against {base}" if base else ""
        super().__init__(f"Invalid URL '{url}'{against}")


class NoPageLoaded(MSLError):
    """A page-dependent command ran before any successful open"""

    def __init__(self, command: str = ""):
        self.command = command
        prefix = f"'{command}': " if command else ""
        super().__init__(f"{prefix}No page loaded. Use 'open' first.")


class TransportError(MSLError):
    """Fetch or download failure at the HTTP boundary"""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Transport error for {url}: {reason}")


class IoError(MSLError):
    """Local filesystem failure"""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"I/O error for {path}: {reason}")


# Error mappings: error class -> user-friendly info
ERROR_MAPPINGS = {
    ParseError: {
        "message": "The script could not be parsed",
        "suggestion": "Check the reported line; nested commands under 'click' are indented by two spaces",
        "category": "parse",
        "severity": "error",
    },
    InvalidSelector: {
        "message": "A CSS selector in the script is malformed",
        "suggestion": "Fix the selector syntax (e.g. 'div.card a', 'a[href]')",
        "category": "selector",
        "severity": "error",
    },
    InvalidUrl: {
        "message": "A URL could not be resolved",
        "suggestion": "Use absolute http:// or https:// URLs in 'open'",
        "category": "url",
        "severity": "error",
    },
    NoPageLoaded: {
        "message": "A command needs a page but none is loaded",
        "suggestion": "Add an 'open \"<url>\"' command before click, set or media",
        "category": "state",
        "severity": "error",
    },
    TransportError: {
        "message": "A page or media file could not be fetched",
        "suggestion": "Check that the URL is reachable and try again",
        "category": "network",
        "severity": "error",
    },
    IoError: {
        "message": "Writing to the local filesystem failed",
        "suggestion": "Check the download directory path and its permissions",
        "category": "filesystem",
        "severity": "error",
    },
}


def _lookup(error: Exception) -> Optional[Dict]:
    for error_type in type(error).__mro__:
        if error_type in ERROR_MAPPINGS:
            return ERROR_MAPPINGS[error_type]
    return None


def get_error_category(error: Exception) -> str:
    """Return the category name of an error ("unknown" for foreign errors)."""
    mapping = _lookup(error)
    return mapping["category"] if mapping else "unknown"


def format_user_friendly_error(error: Exception, technical_details: Optional[str] = None) -> Dict:
    """
    Convert an error into a user-facing description.

    Returns:
        Dictionary with:
        {
            "message": str,          # User-friendly message
            "suggestion": str,       # Actionable suggestion
            "technical": str,        # Technical details
            "severity": str          # "error"
        }
    """
    mapping = _lookup(error)
    if mapping is None:
        return {
            "message": "An unexpected error occurred while running the script",
            "suggestion": "Re-run with --verbose and check the log output",
            "technical": technical_details or str(error),
            "severity": "error",
        }

    result = {key: value for key, value in mapping.items() if key != "category"}
    result["technical"] = technical_details or str(error)
    logger.debug(f"Mapped error to user-friendly: {result['message']}")
    return result
