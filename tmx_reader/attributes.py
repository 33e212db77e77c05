"""
Attribute decoders for TMX documents.

=============================================================================
OVERVIEW
=============================================================================

Most TMX attributes are plain strings or integers, but a few use a packed
textual encoding that has to be turned into a typed value:

    orientation="isometric"          -> Orientation.ISOMETRIC
    renderorder="left-up"            -> RenderOrder.LEFT_UP
    backgroundcolor="#80112233"      -> Color(r=0x11, g=0x22, b=0x33, a=0x80)
    terrain="0,,1,1"                 -> TerrainList(corners=(0, -1, 1, 1))

Every decoder here is a pure function of one string. Decoding an element
is an explicit step per field: the structure classes call
decode_attribute(elem, name, decoder) for each attribute they care about,
so the element and attribute name end up in the error message when a
value is rejected.

=============================================================================
OPEN ENUMERATIONS
=============================================================================

Orientation and RenderOrder are str-backed enums, but decoding never
rejects a value: newer Tiled versions may write values this module does
not know about. Unknown values come back as the plain string, so a field
holds either a known member or the raw text:

    decode_orientation("isometric")  -> Orientation.ISOMETRIC
    decode_orientation("hexagonal2") -> "hexagonal2"
    decode_orientation("")           -> Orientation.ORTHOGONAL

Members compare equal to their string value, so both forms can be tested
with ==.

=============================================================================
"""

import binascii
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Tuple, TypeVar, Union

from .errors import AttributeFormatError, AttributeValueError, TmxAttributeError


T = TypeVar('T')

_INTEGER = re.compile(r'[+-]?[0-9]+')
_CORNER = re.compile(r'[0-9]+')


# =============================================================================
# ORIENTATION / RENDER ORDER
# =============================================================================

class Orientation(str, Enum):
    """Map projection."""
    ORTHOGONAL = "orthogonal"
    ISOMETRIC = "isometric"
    STAGGERED = "staggered"
    HEXAGONAL = "hexagonal"

    def __str__(self) -> str:
        return self.value


class RenderOrder(str, Enum):
    """Corner the renderer starts from, then the direction it walks."""
    RIGHT_DOWN = "right-down"
    RIGHT_UP = "right-up"
    LEFT_DOWN = "left-down"
    LEFT_UP = "left-up"

    def __str__(self) -> str:
        return self.value


def _open_enum(enum_cls, value: str, default):
    if not value:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        # Unknown value: keep the text as-is
        return value


def decode_orientation(value: str) -> Union[Orientation, str]:
    """Decode the map orientation. Empty means orthogonal; never raises."""
    return _open_enum(Orientation, value, Orientation.ORTHOGONAL)


def decode_render_order(value: str) -> Union[RenderOrder, str]:
    """Decode the map render order. Empty means right-down; never raises."""
    return _open_enum(RenderOrder, value, RenderOrder.RIGHT_DOWN)


# =============================================================================
# COLOR
# =============================================================================

@dataclass
class Color:
    """
    RGBA color, one byte per channel.

    The zero value (all channels 0) is fully transparent black; it is what
    an absent or empty color attribute decodes to.
    """
    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Return (r, g, b, a)."""
        return (self.r, self.g, self.b, self.a)


def decode_color(value: str) -> Color:
    """
    Decode a hex color attribute such as "#RRGGBB" or "#AARRGGBB".

    ==========================================================================
    ALGORITHM
    ==========================================================================

    The first character (the "#") is dropped and the rest is hex-decoded
    into bytes b[0..n-1]. Channels are then filled from the END of the
    byte sequence backwards:

        b = b[n-1]   if n > 0
        g = b[n-2]   if n > 1
        r = b[n-3]   if n > 2
        a = b[n-4]   if n > 3

    So "#112233" gives r=0x11, g=0x22, b=0x33 and alpha stays 0, while a
    short value like "#33" only sets blue.

    Parameters:
    -----------
    value : str
        Raw attribute text. Empty means "no color" and returns Color().

    Raises:
    -------
    AttributeValueError : odd number of digits or a non-hex character
    """
    color = Color()
    if not value:
        return color

    try:
        data = binascii.unhexlify(value[1:])
    except ValueError as exc:  # binascii.Error, or non-ASCII text
        raise AttributeValueError(f"invalid hex color {value!r}: {exc}", value) from exc

    n = len(data)
    if n > 0:
        color.b = data[n - 1]
    if n > 1:
        color.g = data[n - 2]
    if n > 2:
        color.r = data[n - 3]
    if n > 3:
        color.a = data[n - 4]
    return color


# =============================================================================
# TERRAIN LIST
# =============================================================================

NO_TERRAIN = -1

CORNER_TOP_LEFT = 0
CORNER_TOP_RIGHT = 1
CORNER_BOTTOM_LEFT = 2
CORNER_BOTTOM_RIGHT = 3


@dataclass
class TerrainList:
    """
    Terrain index of each corner of a tile.

    Corners are stored in the order top-left, top-right, bottom-left,
    bottom-right. Each entry is an index into the tileset's terrain types,
    or NO_TERRAIN.

    valid is False when the tile had no terrain attribute at all, which is
    different from a terrain attribute whose four corners are all empty.
    """
    valid: bool = False
    corners: Tuple[int, int, int, int] = (NO_TERRAIN, NO_TERRAIN, NO_TERRAIN, NO_TERRAIN)

    @property
    def top_left(self) -> int:
        return self.corners[CORNER_TOP_LEFT]

    @property
    def top_right(self) -> int:
        return self.corners[CORNER_TOP_RIGHT]

    @property
    def bottom_left(self) -> int:
        return self.corners[CORNER_BOTTOM_LEFT]

    @property
    def bottom_right(self) -> int:
        return self.corners[CORNER_BOTTOM_RIGHT]


def decode_terrain_list(value: str) -> TerrainList:
    """
    Decode a tile's terrain attribute, e.g. "0,0,,1".

    Exactly four comma-separated fields are required. An empty field
    means NO_TERRAIN, anything else must be a non-negative base-10 integer.

    Raises:
    -------
    AttributeFormatError : the field count is not 4
    AttributeValueError : a field is not a non-negative integer
    """
    parts = value.split(',')
    if len(parts) != 4:
        raise AttributeFormatError(
            f"invalid terrain list, must contain four comma-separated parts: {value!r}",
            value)

    corners = []
    for part in parts:
        if not part:
            corners.append(NO_TERRAIN)
            continue
        try:
            corner = int(part, 10)
        except ValueError as exc:
            raise AttributeValueError(
                f"invalid terrain corner {part!r} in {value!r}: {exc}", value) from exc
        # int() also takes signs, underscores and padding
        if not _CORNER.fullmatch(part):
            raise AttributeValueError(
                f"invalid terrain corner {part!r} in {value!r}: "
                f"expected a non-negative index", value)
        corners.append(corner)

    return TerrainList(valid=True, corners=tuple(corners))


# =============================================================================
# INTEGERS
# =============================================================================

def decode_int(value: str) -> int:
    """Decode a base-10 integer attribute. Empty means 0."""
    text = value.strip()
    if not text:
        return 0
    if not _INTEGER.fullmatch(text):
        raise AttributeValueError(f"invalid integer {value!r}", value)
    return int(text, 10)


def decode_dimension(value: str) -> int:
    """Like decode_int, but sizes in tiles or pixels cannot be negative."""
    number = decode_int(value)
    if number < 0:
        raise AttributeValueError(f"size must be non-negative, got {number}", value)
    return number


# =============================================================================
# PER-FIELD DECODE STEP
# =============================================================================

def decode_attribute(elem: ET.Element, name: str,
                     decoder: Callable[[str], T]) -> T:
    """
    Decode one attribute of an XML element.

    Parameters:
    -----------
    elem : ET.Element
        Element carrying the attribute
    name : str
        Attribute name (case-sensitive, as written by Tiled)
    decoder : callable
        One of the decode_* functions. An absent attribute is handed to it
        as the empty string, so each decoder owns its default.

    Raises:
    -------
    TmxAttributeError : re-raised from the decoder, with elem.tag and name
        recorded on it
    """
    try:
        return decoder(elem.get(name, ''))
    except TmxAttributeError as exc:
        raise exc.locate(elem.tag, name)
