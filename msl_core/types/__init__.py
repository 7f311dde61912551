from msl_core.types.media_type import MediaType
from msl_core.types.nodes import (
    Node,
    Script,
    Command,
    Open,
    Click,
    Set,
    Media,
    Save,
    Wait,
    ValueExpr,
    Text,
    Attribute,
    Split,
    MediaBlock,
    MediaFilter,
    Where,
    Extensions,
)
from msl_core.types.page import MediaItem, Element, PageResult

__all__ = [
    'MediaType',
    'Node',
    'Script',
    'Command',
    'Open',
    'Click',
    'Set',
    'Media',
    'Save',
    'Wait',
    'ValueExpr',
    'Text',
    'Attribute',
    'Split',
    'MediaBlock',
    'MediaFilter',
    'Where',
    'Extensions',
    'MediaItem',
    'Element',
    'PageResult',
]
