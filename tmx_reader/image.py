"""
Image references (<image> elements).

=============================================================================
PATHS
=============================================================================

The 'source' attribute is relative to the document that contains it:

    /maps/level1.tmx:
        <imagelayer>
            <image source="../art/sky.png"/>
        </imagelayer>

The decoder rebases it once, while parsing, onto the document's directory
(/maps/../art/sky.png) so the returned Image can be opened from anywhere
without remembering where it came from.

=============================================================================
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image as PILImage
from PIL import ImageChops

from .events import Attributes, XmlEventStream
from .util import get_attrs, parse_color, parse_tag, require


@dataclass(frozen=True)
class Image:
    """
    Image file referenced by the map.

    ==========================================================================
    ATTRIBUTES
    ==========================================================================

    source: Path to the image file, already joined with the base directory
    width:  Image width in pixels as declared by the document (optional)
    height: Image height in pixels as declared by the document (optional)
    trans:  Transparent color as "#rrggbb" (e.g. "#ff00ff" for magenta)
            Pixels of this color become transparent in load()

    ==========================================================================
    """
    source: Path                         # Resolved path to image file
    width: Optional[int] = None          # Declared width (pixels)
    height: Optional[int] = None         # Declared height (pixels)
    trans: Optional[str] = None          # Transparent color (#rrggbb)

    @classmethod
    def parse(cls, stream: XmlEventStream, attrs: Attributes,
              base_dir: Path) -> 'Image':
        """
        Parse an <image> element whose start tag was just read.

        Parameters:
        -----------
        stream : XmlEventStream
            Left right after </image>
        attrs : list of (name, value)
            Attributes of the <image> start tag
        base_dir : Path
            Directory of the document, relative sources resolve against it
        """
        source, width, height, trans = get_attrs(attrs, [
            ("source", str),
            ("width", int),
            ("height", int),
            ("trans", parse_trans),
        ])
        source = require(source, "source", "image")

        # Embedded <data> images are not supported, skip them
        parse_tag(stream, "image", {})

        return cls(source=Path(base_dir) / source, width=width,
                   height=height, trans=trans)

    @property
    def size(self) -> Tuple[int, int]:
        """
        (width, height) in pixels.

        Uses the declared size when the document has one, otherwise
        reads the file header.
        """
        if self.width is not None and self.height is not None:
            return self.width, self.height
        with PILImage.open(str(self.source)) as img:
            return img.size

    def load(self) -> PILImage.Image:
        """
        Load the image from disk as RGBA.

        When a transparent color is set, matching pixels get alpha 0.

        Raises:
        -------
        FileNotFoundError : If the image file doesn't exist
        PIL.UnidentifiedImageError : If the file is not an image
        """
        image = PILImage.open(str(self.source)).convert('RGBA')

        if self.trans:
            key = [int(self.trans[i:i + 2], 16) for i in (1, 3, 5)]
            r, g, b, a = image.split()
            # 255 where the channel equals the key, 0 elsewhere
            masks = [
                band.point(lambda v, k=k: 255 if v == k else 0)
                for band, k in zip((r, g, b), key)
            ]
            match = ImageChops.multiply(ImageChops.multiply(masks[0], masks[1]), masks[2])
            image.putalpha(ImageChops.subtract(a, match))

        return image


def parse_trans(raw: str) -> str:
    """Transparent color of an image: "#rrggbb", alpha is not allowed."""
    color = parse_color(raw)
    if len(color) != 7:
        raise ValueError(f"not an rgb color: {raw!r}")
    return color
