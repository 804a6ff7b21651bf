"""
TMX map documents - the entry point for loading files.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .errors import StructuralError
from .events import START, XmlEventStream
from .layers import ImageLayerData, Layer, layer_handlers
from .properties import Properties, parse_properties
from .util import get_attrs, parse_tag


@dataclass
class TiledMap:
    """
    Tiled map, as far as this package reads it.

    Only the map header, map properties, image layers and groups are
    decoded. Tilesets, tile layers and object groups are skipped.

    ==========================================================================
    USAGE
    ==========================================================================

    Loading:
        map_data = TiledMap.load("level1.tmx")
        print(f"Map size: {map_data.width}x{map_data.height}")

    Image layers (groups flattened):
        for layer in map_data.image_layers():
            print(layer.name, layer.data.image.source)

    ==========================================================================
    """
    version: str = "1.0"                             # TMX format version
    orientation: str = "orthogonal"                  # Map orientation
    width: int = 0                                   # Map width in tiles
    height: int = 0                                  # Map height in tiles
    tile_width: int = 0                              # Tile width in pixels
    tile_height: int = 0                             # Tile height in pixels
    properties: Properties = field(default_factory=dict)
    layers: List[Layer] = field(default_factory=list)

    @classmethod
    def load(cls, filepath: Union[str, Path]) -> 'TiledMap':
        """
        Load a TMX file from disk.

        Parameters:
        -----------
        filepath : str or Path
            Path to the .tmx file

        Returns:
        --------
        TiledMap : Parsed map object

        Raises:
        -------
        FileNotFoundError : If TMX file doesn't exist
        TmxError : If the document is malformed
        """
        filepath = Path(filepath)
        with XmlEventStream.from_file(filepath) as stream:
            return cls.parse(stream, filepath)

    @classmethod
    def from_string(cls, text: Union[str, bytes],
                    filepath: Union[str, Path]) -> 'TiledMap':
        """
        Parse an in-memory TMX document.

        filepath is where the document would live on disk; image sources
        are resolved against its directory.
        """
        return cls.parse(XmlEventStream.from_string(text), Path(filepath))

    @classmethod
    def parse(cls, stream: XmlEventStream, filepath: Path) -> 'TiledMap':
        """Parse a whole document from a fresh stream."""
        root = stream.next_event()
        if root.kind != START or root.name != "map":
            raise StructuralError(f"Expected <map> root element, found <{root.name}>")

        version, orientation, width, height, tile_width, tile_height = get_attrs(
            root.attrs, [
                ("version", str),
                ("orientation", str),
                ("width", int),
                ("height", int),
                ("tilewidth", int),
                ("tileheight", int),
            ])

        map_obj = cls(
            version=version or "1.0",
            orientation=orientation or "orthogonal",
            width=width or 0,
            height=height or 0,
            tile_width=tile_width or 0,
            tile_height=tile_height or 0,
        )

        def on_properties(stream, attrs):
            map_obj.properties = parse_properties(stream)

        handlers = {"properties": on_properties}
        handlers.update(layer_handlers(map_obj.layers, filepath))
        parse_tag(stream, "map", handlers)

        return map_obj

    def image_layers(self) -> List[Layer]:
        """All image layers, including those inside groups, in document order."""
        return [
            layer
            for top in self.layers
            for layer in top.walk()
            if isinstance(layer.data, ImageLayerData)
        ]

    def get_layer_by_name(self, name: str) -> Optional[Layer]:
        """Find a layer by name (searches recursively through groups)."""
        for top in self.layers:
            for layer in top.walk():
                if layer.name == name:
                    return layer
        return None
