"""Media block filtering and download destination resolution"""

import re
from typing import Dict, List, Mapping

from msl_core.types import Extensions, MediaBlock, MediaFilter, MediaItem, Where

# Fields that address the media URL itself; anything else is an element attribute
URL_FIELDS = ("src", "url")

PLACEHOLDER_PATTERN = re.compile(r'\{(\w+)\}')
SEPARATOR_PATTERN = re.compile(r'[/\\]')
LEADING_DOTS_PATTERN = re.compile(r'^\.+')


def _field_value(item: MediaItem, field: str) -> str:
    if field in URL_FIELDS:
        return item.url
    return item.attributes.get(field, "")


def matches_filter(item: MediaItem, media_filter: MediaFilter) -> bool:
    if isinstance(media_filter, Where):
        actual = _field_value(item, media_filter.field)
        if media_filter.operator == "~":
            return media_filter.value in actual
        if media_filter.operator == "=":
            return actual == media_filter.value
        if media_filter.operator == "!=":
            return actual != media_filter.value
        raise ValueError(f"Unknown where operator: {media_filter.operator}")

    if isinstance(media_filter, Extensions):
        # Case-sensitive literal suffix test
        return any(item.url.endswith(ext) for ext in media_filter.extensions)

    raise TypeError(f"Unknown media filter: {media_filter!r}")


def filter_media(items: List[MediaItem], filters: List[MediaFilter]) -> List[MediaItem]:
    """Items satisfying every filter (all items when there are no filters)."""
    return [item for item in items if all(matches_filter(item, f) for f in filters)]


def interpolate(template: str, variables: Mapping[str, str]) -> str:
    """Replace {name} placeholders with variable values, leaving unknown names intact."""
    return PLACEHOLDER_PATTERN.sub(
        lambda match: variables.get(match.group(1), match.group(0)),
        template,
    )


def safe_path_component(value: str) -> str:
    """
    Make a scraped value usable as a single path component.

    Separators become ``_`` and so do leading dots, so ``../../etc`` turns
    into ``___.._etc`` and cannot climb out of the destination directory.
    """
    value = SEPARATOR_PATTERN.sub("_", value)
    return LEADING_DOTS_PATTERN.sub(lambda match: "_" * len(match.group(0)), value)


class DestinationResolver:
    """
    Decides where a media block's downloads are written.

    A block's own ``save to`` path wins; otherwise the configured default
    directory is used. Both may reference variables as ``{name}``; the
    substituted values are sanitized with safe_path_component.
    """

    def __init__(self, default_dir: str):
        self.default_dir = default_dir

    def resolve(self, block: MediaBlock, variables: Dict[str, str]) -> str:
        safe = {name: safe_path_component(value) for name, value in variables.items()}
        return interpolate(block.save_path or self.default_dir, safe)
