"""
Schema model for TMX documents (Tiled Map Format).

=============================================================================
ENTITY TREE
=============================================================================

A decoded document is a strict tree rooted at Map:

    Map
    ├── TileSet*
    │   ├── Image
    │   ├── TerrainTypes
    │   │   └── Terrain*
    │   └── Tile*
    │       └── TerrainList (terrain attribute)
    └── Layer*
        └── LayerData

matching the XML it comes from:

    <map version="1.0" orientation="orthogonal" renderorder="right-down"
         width="2" height="2" tilewidth="32" tileheight="32">
        <tileset firstgid="1" name="ground" tilewidth="32" tileheight="32"
                 tilecount="4" columns="2">
            <image source="ground.png" width="64" height="64"/>
            <terraintypes>
                <terrain name="Grass" tile="0"/>
            </terraintypes>
            <tile id="0" terrain="0,0,0,0"/>
        </tileset>
        <layer name="Ground" width="2" height="2">
            <data encoding="csv">1,1,1,1</data>
        </layer>
    </map>

Each class has a from_xml() classmethod that decodes its own attributes
field by field and builds its children. Unknown attributes and elements
are ignored.

=============================================================================
GLOBAL TILE IDs (GIDs)
=============================================================================

Tiles are referenced by Global IDs across all tilesets:

    Tileset A (firstgid=1):   tiles 1-100
    Tileset B (firstgid=101): tiles 101-200

    GID 0 = empty tile
    GID 150 = local tile 49 of tileset B

Local tile ID within tileset = GID - tileset.firstgid

=============================================================================
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Union

from .attributes import (
    NO_TERRAIN,
    Color,
    Orientation,
    RenderOrder,
    TerrainList,
    decode_attribute,
    decode_color,
    decode_dimension,
    decode_int,
    decode_orientation,
    decode_render_order,
    decode_terrain_list,
)


# =============================================================================
# IMAGE CLASS
# =============================================================================

@dataclass
class Image:
    """
    Image file holding a tileset's graphics.

    source is a path relative to the TMX file; width and height are the
    image size in pixels as recorded by Tiled (0 when not given).
    """
    source: str = ""
    width: int = 0
    height: int = 0

    @classmethod
    def from_xml(cls, elem: ET.Element) -> 'Image':
        """Parse image from XML element."""
        return cls(
            source=elem.get('source', ''),
            width=decode_attribute(elem, 'width', decode_int),
            height=decode_attribute(elem, 'height', decode_int),
        )


# =============================================================================
# TERRAIN CLASSES
# =============================================================================

@dataclass
class Terrain:
    """A named terrain type, shown in Tiled by the given local tile."""
    name: str = ""
    tile: int = 0

    @classmethod
    def from_xml(cls, elem: ET.Element) -> 'Terrain':
        return cls(
            name=elem.get('name', ''),
            tile=decode_attribute(elem, 'tile', decode_int),
        )


@dataclass
class TerrainTypes:
    """
    Terrain types of a tileset.

    Identity is positional: the n-th Terrain is terrain index n, which is
    what the corners of a TerrainList refer to.
    """
    terrains: List[Terrain] = field(default_factory=list)

    @classmethod
    def from_xml(cls, elem: ET.Element) -> 'TerrainTypes':
        return cls(terrains=[Terrain.from_xml(t) for t in elem.findall('terrain')])

    def get_terrain(self, index: int) -> Optional[Terrain]:
        """
        Resolve a terrain corner index.

        Returns None for NO_TERRAIN and for indices with no matching
        terrain (the reader does not check corner indices).
        """
        if index == NO_TERRAIN or not 0 <= index < len(self.terrains):
            return None
        return self.terrains[index]

    def __len__(self) -> int:
        return len(self.terrains)

    def __iter__(self) -> Iterator[Terrain]:
        return iter(self.terrains)


# =============================================================================
# TILE CLASS
# =============================================================================

@dataclass
class Tile:
    """
    Per-tile data of a tileset.

    Only tiles that carry extra data appear in the document, so a tileset
    with 256 tiles may list just a handful of Tile entries.

    ==========================================================================
    TILE IDs
    ==========================================================================

    The 'id' is LOCAL to the tileset (0-based index).
    To get the Global ID (GID): gid = tileset.firstgid + tile.id

    ==========================================================================
    """
    id: int = 0                                              # Local tile ID
    terrain: TerrainList = field(default_factory=TerrainList)

    @classmethod
    def from_xml(cls, elem: ET.Element) -> 'Tile':
        """Parse tile from XML element."""
        tile = cls(id=decode_attribute(elem, 'id', decode_int))

        # Absent terrain leaves the list invalid; present-but-empty is an error
        if 'terrain' in elem.attrib:
            tile.terrain = decode_attribute(elem, 'terrain', decode_terrain_list)

        return tile


# =============================================================================
# TILESET CLASS
# =============================================================================

@dataclass
class TileSet:
    """
    Tileset - a palette of tile graphics.

    ==========================================================================
    EMBEDDED vs EXTERNAL TILESETS
    ==========================================================================

    EMBEDDED: Tileset data is inside the TMX file
        <tileset firstgid="1" name="terrain" tilewidth="32" ...>
            <image source="terrain.png"/>
        </tileset>

    EXTERNAL (TSX): Tileset data is in a separate .tsx file
        <tileset firstgid="1" source="terrain.tsx"/>

    External tilesets are NOT resolved: source is kept and every other
    field keeps its zero value.

    ==========================================================================
    SPACING AND MARGIN
    ==========================================================================

    margin = pixels around the EDGE of the entire image
    spacing = pixels BETWEEN tiles

    ==========================================================================
    """
    firstgid: int = 0                                # First Global ID
    source: Optional[str] = None                     # TSX file path (if external)
    name: str = ""
    tilewidth: int = 0
    tileheight: int = 0
    spacing: int = 0
    margin: int = 0
    tilecount: int = 0
    columns: int = 0
    image: Image = field(default_factory=Image)
    terraintypes: TerrainTypes = field(default_factory=TerrainTypes)
    tiles: List[Tile] = field(default_factory=list)  # In document order

    @classmethod
    def from_xml(cls, elem: ET.Element) -> 'TileSet':
        """Parse tileset from XML element."""
        tileset = cls(
            firstgid=decode_attribute(elem, 'firstgid', decode_int),
            source=elem.get('source'),
            name=elem.get('name', ''),
            tilewidth=decode_attribute(elem, 'tilewidth', decode_dimension),
            tileheight=decode_attribute(elem, 'tileheight', decode_dimension),
            spacing=decode_attribute(elem, 'spacing', decode_int),
            margin=decode_attribute(elem, 'margin', decode_int),
            tilecount=decode_attribute(elem, 'tilecount', decode_int),
            columns=decode_attribute(elem, 'columns', decode_int),
        )

        img_elem = elem.find('image')
        if img_elem is not None:
            tileset.image = Image.from_xml(img_elem)

        terrains_elem = elem.find('terraintypes')
        if terrains_elem is not None:
            tileset.terraintypes = TerrainTypes.from_xml(terrains_elem)

        for tile_elem in elem.findall('tile'):
            tileset.tiles.append(Tile.from_xml(tile_elem))

        return tileset

    def get_tile(self, local_id: int) -> Optional[Tile]:
        """Return the Tile entry for a local tile ID, if the document has one."""
        for tile in self.tiles:
            if tile.id == local_id:
                return tile
        return None


# =============================================================================
# LAYER CLASSES
# =============================================================================

@dataclass
class LayerData:
    """
    Raw tile data of a layer.

    The grid is NOT decoded: encoding ("csv", "base64", or None for the
    old one-<tile>-per-cell XML form), compression ("zlib", "gzip",
    "zstd" or None) and the character data are kept exactly as they
    appear in the document, for a separate grid decoder to consume.

    text is the element's own character data: the text before the first
    child plus the text after each child, leading and trailing whitespace
    included.
    """
    encoding: Optional[str] = None
    compression: Optional[str] = None
    text: str = ""

    @classmethod
    def from_xml(cls, elem: ET.Element) -> 'LayerData':
        chunks = [elem.text or '']
        chunks.extend(child.tail or '' for child in elem)
        return cls(
            encoding=elem.get('encoding'),
            compression=elem.get('compression'),
            text=''.join(chunks),
        )


@dataclass
class Layer:
    """Tile layer: a named width x height grid (in tiles) and its data."""
    name: str = ""
    width: int = 0
    height: int = 0
    data: LayerData = field(default_factory=LayerData)

    @classmethod
    def from_xml(cls, elem: ET.Element) -> 'Layer':
        """Parse tile layer from XML element."""
        layer = cls(
            name=elem.get('name', ''),
            width=decode_attribute(elem, 'width', decode_dimension),
            height=decode_attribute(elem, 'height', decode_dimension),
        )

        data_elem = elem.find('data')
        if data_elem is not None:
            layer.data = LayerData.from_xml(data_elem)

        return layer


# =============================================================================
# MAP CLASS (Root)
# =============================================================================

@dataclass
class Map:
    """
    Complete Tiled map - the root of a decoded TMX document.

    ==========================================================================
    MAP ORIENTATIONS
    ==========================================================================

    ORTHOGONAL (default): square grid, rows and columns.
    ISOMETRIC: diamond-shaped tiles.
    STAGGERED: isometric tiles in offset rows/columns.
    HEXAGONAL: hexagon tiles; hexsidelength, staggeraxis ("x"/"y") and
               staggerindex ("odd"/"even") describe the layout and are
               also used by STAGGERED maps.

    Values Tiled adds in the future are kept as plain strings.

    ==========================================================================
    RENDER ORDER
    ==========================================================================

    - right-down: Left-to-right, top-to-bottom (default)
    - right-up: Left-to-right, bottom-to-top
    - left-down: Right-to-left, top-to-bottom
    - left-up: Right-to-left, bottom-to-top

    ==========================================================================
    USAGE
    ==========================================================================

        tmx = Map.load("level1.tmx")
        print(f"Map size: {tmx.width}x{tmx.height}")

        ground = tmx.get_layer_by_name("Ground")
        print(ground.data.encoding, ground.data.compression)

    ==========================================================================
    """
    version: str = ""
    tiledversion: str = ""
    orientation: Union[Orientation, str] = Orientation.ORTHOGONAL
    renderorder: Union[RenderOrder, str] = RenderOrder.RIGHT_DOWN
    width: int = 0                                   # Map width in tiles
    height: int = 0                                  # Map height in tiles
    tilewidth: int = 0                               # Tile width in pixels
    tileheight: int = 0                              # Tile height in pixels
    hexsidelength: int = 0
    staggeraxis: str = ""
    staggerindex: str = ""
    backgroundcolor: Color = field(default_factory=Color)
    nextobjectid: int = 0
    tilesets: List[TileSet] = field(default_factory=list)
    layers: List[Layer] = field(default_factory=list)

    @classmethod
    def from_xml(cls, elem: ET.Element) -> 'Map':
        """
        Decode the attributes of a <map> element.

        Only the map's own attributes are read here; tilesets and layers
        are appended by the reader as it meets them.
        """
        return cls(
            version=elem.get('version', ''),
            tiledversion=elem.get('tiledversion', ''),
            orientation=decode_attribute(elem, 'orientation', decode_orientation),
            renderorder=decode_attribute(elem, 'renderorder', decode_render_order),
            width=decode_attribute(elem, 'width', decode_dimension),
            height=decode_attribute(elem, 'height', decode_dimension),
            tilewidth=decode_attribute(elem, 'tilewidth', decode_dimension),
            tileheight=decode_attribute(elem, 'tileheight', decode_dimension),
            hexsidelength=decode_attribute(elem, 'hexsidelength', decode_int),
            staggeraxis=elem.get('staggeraxis', ''),
            staggerindex=elem.get('staggerindex', ''),
            backgroundcolor=decode_attribute(elem, 'backgroundcolor', decode_color),
            nextobjectid=decode_attribute(elem, 'nextobjectid', decode_int),
        )

    @classmethod
    def load(cls, filepath: Union[str, Path]) -> 'Map':
        """
        Load a TMX file from disk.

        Raises:
        -------
        FileNotFoundError : If the TMX file doesn't exist
        TmxError : If the document cannot be decoded
        """
        from .reader import load
        return load(filepath)

    def get_tileset_for_gid(self, gid: int) -> Optional[TileSet]:
        """
        Find which tileset contains a given GID.

        A GID belongs to the tileset with the largest firstgid <= gid.
        Tilesets are scanned from the last one, which is the usual order
        Tiled writes them in (ascending firstgid). Returns None for GID 0.
        """
        if gid <= 0:
            return None
        for tileset in reversed(self.tilesets):
            if gid >= tileset.firstgid:
                return tileset
        return None

    def get_layer_by_name(self, name: str) -> Optional[Layer]:
        """Return the first layer called name, or None."""
        for layer in self.layers:
            if layer.name == name:
                return layer
        return None
