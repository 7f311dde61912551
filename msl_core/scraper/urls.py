"""URL helpers shared by the fetcher, extractor and executor"""

from typing import Optional
from urllib.parse import urljoin, urlparse

from msl_core.errors import InvalidUrl

SUPPORTED_SCHEMES = ("http", "https")


def is_absolute_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in SUPPORTED_SCHEMES and bool(parsed.netloc)


def ensure_absolute_url(url: str) -> str:
    """Return url unchanged, or raise InvalidUrl if it is not absolute http(s)."""
    if not is_absolute_url(url):
        raise InvalidUrl(url)
    return url


def resolve_url(base: Optional[str], href: str) -> str:
    """
    Join href against base the way a browser follows a link.

    Raises InvalidUrl when the result is not an absolute http(s) URL
    (e.g. mailto:, javascript:, or a relative href without a base).
    """
    try:
        joined = urljoin(base or "", href.strip())
    except ValueError as e:
        raise InvalidUrl(href, base) from e
    if not is_absolute_url(joined):
        raise InvalidUrl(href, base)
    return joined


def last_path_segment(url: str) -> str:
    return urlparse(url).path.rsplit('/', 1)[-1]
