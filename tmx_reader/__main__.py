#!/usr/bin/env python3

"""
TMX Reader - list the image layers of a Tiled map

Usage:
    python -m tmx_reader <map.tmx>

Prints one line per image layer (groups are flattened):
    <name>: <image source> repeat=<x>,<y> properties=<count>
"""

import sys
from pathlib import Path

from .errors import TmxError
from .map import TiledMap


def describe(layer) -> str:
    data = layer.data
    source = data.image.source if data.image else "(no image)"
    return (f"{layer.name}: {source} "
            f"repeat={int(data.repeat_x)},{int(data.repeat_y)} "
            f"properties={len(layer.properties)}")


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) < 1:
        print(__doc__)
        return 1

    source_path = argv[0]

    if not Path(source_path).exists():
        print(f"Error: File '{source_path}' not found")
        return 1

    try:
        map_data = TiledMap.load(source_path)
    except TmxError as e:
        print(f"Error: {e}")
        return 1

    for layer in map_data.image_layers():
        print(describe(layer))
    return 0


if __name__ == "__main__":
    sys.exit(main())
