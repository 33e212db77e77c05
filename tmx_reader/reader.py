"""
Document reader: turns a TMX byte stream into a Map.

=============================================================================
SINGLE PASS
=============================================================================

The document is walked once with ElementTree.iterparse():

    <map ...>            start  -> Map.from_xml() decodes the map attributes
        <tileset>...     end    -> TileSet.from_xml(), appended, released
        <layer>...       end    -> Layer.from_xml(), appended, released
        <objectgroup>... end    -> ignored, released
    </map>

Each top-level child is mapped as soon as its end tag is seen and then
dropped from the tree, so memory use is bounded by the largest tileset
or layer rather than by the whole document.

Any error aborts the decode; no partially built Map is returned.

=============================================================================
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .errors import TmxStructureError, TmxSyntaxError
from .structure import Layer, Map, TileSet

logger = logging.getLogger(__name__)


def read(stream: BinaryIO) -> Map:
    """
    Decode a TMX document from a readable binary stream.

    Parameters:
    -----------
    stream : file-like
        Anything with a read() method returning bytes, e.g. an open file
        or io.BytesIO. The stream is read to the end (or to the first
        error) and is not closed.

    Returns:
    --------
    Map : The decoded map

    Raises:
    -------
    TmxSyntaxError : The input is not well-formed XML
    TmxStructureError : The root element is not <map>
    TmxAttributeError : An attribute value could not be decoded
    """
    tmx_map: Optional[Map] = None
    root: Optional[ET.Element] = None
    depth = 0

    try:
        for event, elem in ET.iterparse(stream, events=('start', 'end')):
            if event == 'start':
                depth += 1
                if depth == 1:
                    if elem.tag != 'map':
                        raise TmxStructureError(
                            f"expected element type <map> but have <{elem.tag}>")
                    root = elem
                    tmx_map = Map.from_xml(elem)
                    logger.debug("Decoding %dx%d %s map", tmx_map.width,
                                 tmx_map.height, tmx_map.orientation)
                continue

            depth -= 1
            if depth != 1:
                continue

            # -----------------------------------------------------------------
            # TOP-LEVEL CHILD OF <map> IS COMPLETE
            # -----------------------------------------------------------------
            if elem.tag == 'tileset':
                tileset = TileSet.from_xml(elem)
                logger.debug("Tileset %r (firstgid=%d, %d tiles listed)",
                             tileset.name or tileset.source, tileset.firstgid,
                             len(tileset.tiles))
                tmx_map.tilesets.append(tileset)
            elif elem.tag == 'layer':
                layer = Layer.from_xml(elem)
                logger.debug("Layer %r (%dx%d, encoding=%s, compression=%s)",
                             layer.name, layer.width, layer.height,
                             layer.data.encoding, layer.data.compression)
                tmx_map.layers.append(layer)
            else:
                logger.debug("Skipping unsupported element <%s>", elem.tag)

            root.remove(elem)

    except ET.ParseError as exc:
        raise TmxSyntaxError(f"malformed TMX document: {exc}",
                             getattr(exc, 'position', None)) from exc

    return tmx_map


def load(filepath: Union[str, Path]) -> Map:
    """
    Load a TMX file from disk.

    External tilesets referenced by the map are not opened; their
    TileSet.source holds the path as written in the file.

    Raises:
    -------
    FileNotFoundError : If the TMX file doesn't exist
    TmxError : If the document cannot be decoded
    """
    filepath = Path(filepath)
    logger.debug("Loading %s", filepath)
    with filepath.open('rb') as stream:
        return read(stream)
