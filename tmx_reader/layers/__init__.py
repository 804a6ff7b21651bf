"""
Layers and the fields every layer kind shares.

=============================================================================
LAYER STRUCTURE
=============================================================================

All layer elements carry the same common attributes:

    id, name, class     - identification
    visible, opacity    - rendering
    tintcolor           - color multiplied into the layer
    offsetx, offsety    - pixel offset
    parallaxx/y         - parallax scrolling factor

Layer holds those and delegates everything else to a kind-specific
record in Layer.data:

    <imagelayer>  -> ImageLayerData
    <group>       -> GroupLayerData (child layers, recursively)

Tile layers and object groups are outside what this package decodes and
are skipped by the dispatch loop.

=============================================================================
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from ..events import Attributes, XmlEventStream
from ..properties import Properties, parse_properties
from ..util import get_attrs, parse_color, parse_flag, parse_tag
from .image import ImageLayerData

LAYER_TAGS = ("imagelayer", "group")


@dataclass(frozen=True)
class GroupLayerData:
    """Folder of layers. Groups can be nested."""
    layers: Tuple['Layer', ...] = ()

    @classmethod
    def parse(cls, stream: XmlEventStream, attrs: Attributes,
              map_path: Union[str, Path]) -> Tuple['GroupLayerData', Properties]:
        layers: List[Layer] = []
        properties: Properties = {}

        def on_properties(stream, attrs):
            nonlocal properties
            properties = parse_properties(stream)

        handlers = {"properties": on_properties}
        handlers.update(layer_handlers(layers, map_path))
        parse_tag(stream, "group", handlers)

        return cls(layers=tuple(layers)), properties


LayerData = Union[ImageLayerData, GroupLayerData]

_KINDS = {
    "imagelayer": ImageLayerData,
    "group": GroupLayerData,
}


@dataclass(frozen=True)
class Layer:
    """
    A layer of any supported kind.

    Check the kind with isinstance(layer.data, ImageLayerData).
    """
    data: LayerData                                  # Kind-specific record
    id: int = 0                                      # Unique layer ID
    name: str = ""                                   # Layer name
    user_type: str = ""                              # Class (formerly "type")
    visible: bool = True                             # Is layer rendered?
    opacity: float = 1.0                             # Transparency
    offset_x: float = 0                              # X pixel offset
    offset_y: float = 0                              # Y pixel offset
    parallax_x: float = 1.0                          # Parallax X factor
    parallax_y: float = 1.0                          # Parallax Y factor
    tint_color: Optional[str] = None                 # Color tint (#AARRGGBB)
    properties: Properties = field(default_factory=dict)

    @classmethod
    def parse(cls, stream: XmlEventStream, tag: str, attrs: Attributes,
              map_path: Union[str, Path]) -> 'Layer':
        """
        Parse a layer element of kind tag whose start tag was just read.

        Parameters:
        -----------
        tag : str
            "imagelayer" or "group"
        map_path : str or Path
            Path of the document, passed down to the kind decoder
        """
        (layer_id, name, user_class, user_type, visible, opacity,
         offset_x, offset_y, parallax_x, parallax_y, tint_color) = get_attrs(attrs, [
            ("id", int),
            ("name", str),
            ("class", str),
            ("type", str),
            # '1' is default for visible (absent means visible)
            ("visible", parse_flag),
            ("opacity", float),
            ("offsetx", float),
            ("offsety", float),
            ("parallaxx", float),
            ("parallaxy", float),
            ("tintcolor", parse_color),
        ])

        data, properties = _KINDS[tag].parse(stream, attrs, map_path)

        return cls(
            data=data,
            id=layer_id or 0,
            name=name or "",
            # "type" was renamed to "class" in Tiled 1.9
            user_type=user_class if user_class is not None else (user_type or ""),
            visible=visible if visible is not None else True,
            opacity=opacity if opacity is not None else 1.0,
            offset_x=offset_x or 0,
            offset_y=offset_y or 0,
            parallax_x=parallax_x if parallax_x is not None else 1.0,
            parallax_y=parallax_y if parallax_y is not None else 1.0,
            tint_color=tint_color,
            properties=properties,
        )

    def walk(self) -> Iterator['Layer']:
        """Yield this layer, then every layer nested inside it."""
        yield self
        if isinstance(self.data, GroupLayerData):
            for child in self.data.layers:
                yield from child.walk()


def layer_handlers(layers: List[Layer], map_path: Union[str, Path]):
    """
    Dispatch entries for every supported layer tag.

    Each decoded Layer is appended to layers, in document order.
    """
    def handler(tag):
        def on_layer(stream, attrs):
            layers.append(Layer.parse(stream, tag, attrs, map_path))
        return on_layer

    return {tag: handler(tag) for tag in LAYER_TAGS}


__all__ = ["Layer", "LayerData", "ImageLayerData", "GroupLayerData",
           "LAYER_TAGS", "layer_handlers"]
