"""
TMX Reader - decoder for Tiled Map XML files

Usage:
    from tmx_reader import load
    tmx = load("level1.tmx")
"""

from .attributes import (
    NO_TERRAIN,
    CORNER_TOP_LEFT, CORNER_TOP_RIGHT, CORNER_BOTTOM_LEFT, CORNER_BOTTOM_RIGHT,
    Color, Orientation, RenderOrder, TerrainList,
    decode_color, decode_orientation, decode_render_order, decode_terrain_list,
)
from .errors import (
    TmxError, TmxSyntaxError, TmxStructureError,
    TmxAttributeError, AttributeFormatError, AttributeValueError,
)
from .reader import load, read
from .structure import (
    Image, Layer, LayerData, Map, Terrain, TerrainTypes, Tile, TileSet,
)

__version__ = "1.0.0"
__all__ = [
    "read",
    "load",
    "Map",
    "TileSet",
    "Image",
    "TerrainTypes",
    "Terrain",
    "Tile",
    "TerrainList",
    "Layer",
    "LayerData",
    "Color",
    "Orientation",
    "RenderOrder",
    "NO_TERRAIN",
    "CORNER_TOP_LEFT",
    "CORNER_TOP_RIGHT",
    "CORNER_BOTTOM_LEFT",
    "CORNER_BOTTOM_RIGHT",
    "decode_color",
    "decode_orientation",
    "decode_render_order",
    "decode_terrain_list",
    "TmxError",
    "TmxSyntaxError",
    "TmxStructureError",
    "TmxAttributeError",
    "AttributeFormatError",
    "AttributeValueError",
]
