"""
TMX Reader - streaming decoder for Tiled map image layers

Requisitos:
    pip install pillow
"""

from .errors import (
    TmxError, PathIsNotFileError, AttributeCoercionError,
    MalformedAttributesError, StructuralError
)
from .events import XmlEvent, XmlEventStream
from .image import Image
from .layers import Layer, ImageLayerData, GroupLayerData
from .map import TiledMap
from .properties import ClassValue, parse_properties
from .util import get_attrs, parse_tag, skip_tag

__version__ = "0.1.0"
__all__ = [
    "TmxError",
    "PathIsNotFileError",
    "AttributeCoercionError",
    "MalformedAttributesError",
    "StructuralError",
    "XmlEvent",
    "XmlEventStream",
    "Image",
    "Layer",
    "ImageLayerData",
    "GroupLayerData",
    "TiledMap",
    "ClassValue",
    "parse_properties",
    "get_attrs",
    "parse_tag",
    "skip_tag",
]
