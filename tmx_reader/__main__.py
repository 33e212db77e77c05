#!/usr/bin/env python3

"""
TMX Reader - print a summary of a Tiled map

Usage:
    python -m tmx_reader [-v] <map.tmx>

Options:
    -v  - Log decoding steps to stderr
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from .errors import TmxError
from .reader import load
from .structure import Map


def describe(tmx: Map) -> List[str]:
    """Build the summary lines printed for a map."""
    lines = [
        f"Map: {tmx.width}x{tmx.height} tiles of {tmx.tilewidth}x{tmx.tileheight} px",
        f"  version={tmx.version or '?'} orientation={tmx.orientation} "
        f"renderorder={tmx.renderorder}",
    ]
    if tmx.backgroundcolor.as_tuple() != (0, 0, 0, 0):
        r, g, b, a = tmx.backgroundcolor.as_tuple()
        lines.append(f"  background rgba=({r}, {g}, {b}, {a})")

    lines.append(f"Tilesets: {len(tmx.tilesets)}")
    for tileset in tmx.tilesets:
        if tileset.source:
            lines.append(f"  [{tileset.firstgid}] external: {tileset.source}")
            continue
        lines.append(f"  [{tileset.firstgid}] {tileset.name}: {tileset.tilecount} tiles, "
                     f"image={tileset.image.source or '-'}, "
                     f"terrains={len(tileset.terraintypes)}")

    lines.append(f"Layers: {len(tmx.layers)}")
    for layer in tmx.layers:
        encoding = layer.data.encoding or 'xml'
        if layer.data.compression:
            encoding += f"+{layer.data.compression}"
        lines.append(f"  {layer.name}: {layer.width}x{layer.height} ({encoding})")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)

    if '-v' in args:
        args.remove('-v')
        logging.basicConfig(level=logging.DEBUG,
                            format="%(levelname)s %(name)s: %(message)s")

    if len(args) != 1:
        print(__doc__)
        return 1

    source_path = args[0]

    if not Path(source_path).exists():
        print(f"Error: File '{source_path}' not found")
        return 1

    try:
        tmx = load(source_path)
    except TmxError as e:
        print(f"Error: {e}")
        return 1

    for line in describe(tmx):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
