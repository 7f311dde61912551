"""MSL media type enumeration"""

from enum import Enum


class MediaType(Enum):
    """Media kinds addressable from a media block"""
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"

    @property
    def default_extension(self) -> str:
        """Extension appended to downloaded files whose name has none"""
        return _DEFAULT_EXTENSIONS[self]


_DEFAULT_EXTENSIONS = {
    MediaType.IMAGE: "jpg",
    MediaType.VIDEO: "mp4",
    MediaType.AUDIO: "mp3",
}
