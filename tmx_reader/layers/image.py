"""Image layers: a single picture placed on the map, optionally tiled."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from ..errors import PathIsNotFileError
from ..events import Attributes, XmlEventStream
from ..image import Image
from ..properties import Properties, parse_properties
from ..util import get_attrs, parse_flag, parse_tag

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageLayerData:
    """
    The image-specific part of an <imagelayer>.

    Common layer fields (name, opacity, offsets...) live in the Layer
    that wraps this record.

        <imagelayer id="3" name="Sky" repeatx="1">
            <image source="sky.png" width="640" height="480"/>
        </imagelayer>
    """
    image: Optional[Image] = None        # None if the layer has no picture
    repeat_x: bool = False               # Tile horizontally
    repeat_y: bool = False               # Tile vertically

    @classmethod
    def parse(cls, stream: XmlEventStream, attrs: Attributes,
              map_path: Union[str, Path]) -> Tuple['ImageLayerData', Properties]:
        """
        Parse an <imagelayer> whose start tag was just read.

        Parameters:
        -----------
        stream : XmlEventStream
            Left right after </imagelayer>
        attrs : list of (name, value)
            Attributes of the <imagelayer> start tag
        map_path : str or Path
            Path of the document being parsed; image sources are
            resolved against its directory

        Returns:
        --------
        (ImageLayerData, dict) : The record and the layer's properties

        Raises:
        -------
        PathIsNotFileError : If map_path has no parent directory
        AttributeCoercionError : If repeatx/repeaty is not an integer
        StructuralError : If the document ends inside the layer
        """
        map_path = Path(map_path)
        base_dir = map_path.parent
        if base_dir == map_path:
            raise PathIsNotFileError(map_path)

        repeat_x, repeat_y = get_attrs(attrs, [
            ("repeatx", parse_flag),
            ("repeaty", parse_flag),
        ])

        image = None
        properties = None

        # -----------------------------------------------------------------
        # CHILD ELEMENTS
        # -----------------------------------------------------------------
        # A repeated child replaces the earlier one

        def on_image(stream, attrs):
            nonlocal image
            if image is not None:
                logger.warning("<imagelayer> in %s has more than one <image>, "
                               "keeping the last one", map_path)
            image = Image.parse(stream, attrs, base_dir)

        def on_properties(stream, attrs):
            nonlocal properties
            if properties is not None:
                logger.warning("<imagelayer> in %s has more than one <properties>, "
                               "keeping the last one", map_path)
            properties = parse_properties(stream)

        parse_tag(stream, "imagelayer", {
            "image": on_image,
            "properties": on_properties,
        })

        data = cls(image=image,
                   repeat_x=bool(repeat_x),
                   repeat_y=bool(repeat_y))
        return data, properties if properties is not None else {}
