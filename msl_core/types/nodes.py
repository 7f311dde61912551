"""MSL syntax tree dataclasses"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from msl_core.types.media_type import MediaType


def _plain(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


class Node:
    """Base for every node in an MSL syntax tree"""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON/YAML friendly dictionary tagged with the node type."""
        data = {"type": type(self).__name__.lower()}
        for f in fields(self):
            data[f.name] = _plain(getattr(self, f.name))
        return data

    def describe(self) -> str:
        return type(self).__name__


# Value expressions

@dataclass
class Text(Node):
    """Text content of the selected element"""

    def describe(self) -> str:
        return "text"


@dataclass
class Attribute(Node):
    """Named attribute of the selected element"""
    name: str

    def describe(self) -> str:
        return f'attr("{self.name}")'


@dataclass
class Split(Node):
    """Piece of the selected element's text, split by one or two delimiters"""
    delimiter: str
    index: int = -1
    source_delimiter: Optional[str] = None

    def describe(self) -> str:
        head = f'split("{self.source_delimiter}").' if self.source_delimiter is not None else ""
        return f'{head}split("{self.delimiter}")[{self.index}]'


ValueExpr = Union[Text, Attribute, Split]


# Media filters

@dataclass
class Where(Node):
    """Substring (~), equality (=) or inequality (!=) test on a media field"""
    field: str
    operator: str
    value: str


@dataclass
class Extensions(Node):
    """Literal suffix test against the media URL"""
    extensions: List[str] = field(default_factory=list)


MediaFilter = Union[Where, Extensions]


@dataclass
class MediaBlock(Node):
    kind: MediaType
    filters: List[MediaFilter] = field(default_factory=list)
    save_path: Optional[str] = None


# Commands

@dataclass
class Open(Node):
    url: str

    def describe(self) -> str:
        return f"Open {self.url}"


@dataclass
class Click(Node):
    selector: str
    body: List["Command"] = field(default_factory=list)

    def describe(self) -> str:
        return f"Click {self.selector} ({len(self.body)} nested commands)"


@dataclass
class Set(Node):
    name: str
    value: ValueExpr

    def describe(self) -> str:
        return f"Set {self.name} = {self.value.describe()}"


@dataclass
class Media(Node):
    blocks: List[MediaBlock] = field(default_factory=list)

    def describe(self) -> str:
        kinds = ", ".join(block.kind.value for block in self.blocks)
        return f"Media ({len(self.blocks)} blocks{': ' + kinds if kinds else ''})"


@dataclass
class Save(Node):
    path: str

    def describe(self) -> str:
        return f"Save to {self.path}"


@dataclass
class Wait(Node):
    seconds: int = 1

    def describe(self) -> str:
        return f"Wait {self.seconds} seconds"


Command = Union[Open, Click, Set, Media, Save, Wait]


@dataclass
class Script(Node):
    """Ordered top-level commands of a parsed script"""
    commands: List[Command] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self):
        return iter(self.commands)

    def depth(self) -> int:
        """Deepest click nesting level (0 for a flat script)."""
        def _depth(commands: List[Command]) -> int:
            nested = [1 + _depth(c.body) for c in commands if isinstance(c, Click)]
            return max(nested, default=0)
        return _depth(self.commands)
