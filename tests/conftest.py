"""
Pytest fixtures for tmx_reader tests
"""

import pytest
from PIL import Image as PILImage

from tmx_reader.events import XmlEventStream


@pytest.fixture
def open_element():
    """
    Returns a function that streams an XML snippet and consumes its root
    start tag, the way an enclosing decoder would before handing over.
    :return: (stream, root attributes)
    """
    def _open(text):
        stream = XmlEventStream.from_string(text)
        root = stream.next_event()
        return stream, root.attrs
    return _open


@pytest.fixture
def sample_png(tmp_path):
    """
    Writes a 4x2 RGB image: left half magenta, right half white.
    :return: Path of the PNG
    """
    path = tmp_path / "sample.png"
    img = PILImage.new("RGB", (4, 2), (255, 255, 255))
    for y in range(2):
        for x in range(2):
            img.putpixel((x, y), (255, 0, 255))
    img.save(path)
    return path
