"""Tests for decoding <imagelayer> elements."""

import logging
from pathlib import Path

import pytest

from tmx_reader.errors import (
    AttributeCoercionError, MalformedAttributesError, PathIsNotFileError, StructuralError
)
from tmx_reader.events import XmlEventStream
from tmx_reader.image import Image
from tmx_reader.layers import ImageLayerData

MAP_PATH = Path("/maps/level1.tmx")


class TestImageLayerData:
    """Tests for ImageLayerData.parse()."""

    def test_full_layer(self, open_element):
        stream, attrs = open_element(
            '<imagelayer repeatx="1" repeaty="0">'
            '<image source="tile.png" width="32" height="32"/>'
            '<properties><property name="z" value="1"/></properties>'
            '</imagelayer>')

        data, properties = ImageLayerData.parse(stream, attrs, MAP_PATH)

        assert data.repeat_x is True
        assert data.repeat_y is False
        assert data.image == Image(source=Path("/maps/tile.png"), width=32, height=32)
        assert properties == {"z": "1"}

    @pytest.mark.parametrize("raw,expected", [
        ("1", True), ("0", False), ("2", False), ("-1", False),
    ])
    def test_repeat_flag_values(self, open_element, raw, expected):
        stream, attrs = open_element(f'<imagelayer repeatx="{raw}"/>')
        data, _ = ImageLayerData.parse(stream, attrs, MAP_PATH)
        assert data.repeat_x is expected

    def test_flags_default_to_false(self, open_element):
        stream, attrs = open_element('<imagelayer name="bg"/>')
        data, properties = ImageLayerData.parse(stream, attrs, MAP_PATH)
        assert data == ImageLayerData(image=None, repeat_x=False, repeat_y=False)
        assert properties == {}

    def test_non_integer_flag_fails(self, open_element):
        stream, attrs = open_element('<imagelayer repeatx="abc"><image source="a.png"/></imagelayer>')
        with pytest.raises(AttributeCoercionError) as info:
            ImageLayerData.parse(stream, attrs, MAP_PATH)
        assert info.value.name == "repeatx"
        assert info.value.value == "abc"

    @pytest.mark.parametrize("raw", ["0_1", "١", " 1", "99999999999"])
    def test_loose_integer_flag_fails(self, open_element, raw):
        stream, attrs = open_element(f'<imagelayer repeatx="{raw}"/>')
        with pytest.raises(AttributeCoercionError) as info:
            ImageLayerData.parse(stream, attrs, MAP_PATH)
        assert info.value.value == raw

    def test_image_errors_pass_through(self, open_element):
        stream, attrs = open_element('<imagelayer><image width="1"/></imagelayer>')
        with pytest.raises(MalformedAttributesError) as info:
            ImageLayerData.parse(stream, attrs, MAP_PATH)
        assert info.value.element == "image"
        assert info.value.name == "source"

    def test_property_errors_pass_through(self, open_element):
        stream, attrs = open_element(
            '<imagelayer><properties>'
            '<property name="n" type="int" value="many"/>'
            '</properties></imagelayer>')
        with pytest.raises(AttributeCoercionError) as info:
            ImageLayerData.parse(stream, attrs, MAP_PATH)
        assert info.value.value == "many"

    def test_first_duplicate_attribute_wins(self):
        # XML forbids duplicate attributes, so feed the events directly
        stream = XmlEventStream.from_string('<imagelayer/>')
        stream.next_event()
        attrs = [("repeatx", "1"), ("repeatx", "0"), ("repeaty", "0"), ("repeaty", "1")]
        data, _ = ImageLayerData.parse(stream, attrs, MAP_PATH)
        assert data.repeat_x is True
        assert data.repeat_y is False

    def test_no_image_child(self, open_element):
        stream, attrs = open_element(
            '<imagelayer repeaty="1"><properties/></imagelayer>')
        data, _ = ImageLayerData.parse(stream, attrs, MAP_PATH)
        assert data.image is None
        assert data.repeat_y is True

    def test_last_properties_child_wins(self, open_element, caplog):
        stream, attrs = open_element(
            '<imagelayer>'
            '<properties><property name="a" value="first"/></properties>'
            '<properties><property name="b" value="second"/></properties>'
            '</imagelayer>')
        with caplog.at_level(logging.WARNING, logger="tmx_reader.layers.image"):
            _, properties = ImageLayerData.parse(stream, attrs, MAP_PATH)
        assert properties == {"b": "second"}
        assert "more than one <properties>" in caplog.text

    def test_last_image_child_wins(self, open_element, caplog):
        stream, attrs = open_element(
            '<imagelayer><image source="one.png"/><image source="two.png"/></imagelayer>')
        with caplog.at_level(logging.WARNING, logger="tmx_reader.layers.image"):
            data, _ = ImageLayerData.parse(stream, attrs, MAP_PATH)
        assert data.image.source == Path("/maps/two.png")
        assert "more than one <image>" in caplog.text

    def test_unknown_child_is_skipped(self, open_element):
        stream, attrs = open_element(
            '<imagelayer repeatx="1">'
            '<foo><image source="wrong.png"/><properties><property name="x" value="y"/></properties></foo>'
            '<image source="right.png"/>'
            '</imagelayer>')
        data, properties = ImageLayerData.parse(stream, attrs, MAP_PATH)
        assert data.image.source == Path("/maps/right.png")
        assert data.repeat_x is True
        assert properties == {}

    def test_root_path_is_not_a_file(self):
        stream = XmlEventStream([])
        with pytest.raises(PathIsNotFileError):
            # Would raise StructuralError if any event were read
            ImageLayerData.parse(stream, [], Path("/"))

    def test_relative_map_path(self, open_element):
        stream, attrs = open_element('<imagelayer><image source="bg.png"/></imagelayer>')
        data, _ = ImageLayerData.parse(stream, attrs, "level1.tmx")
        assert data.image.source == Path("bg.png")

    def test_truncated_document(self, open_element):
        stream, attrs = open_element('<imagelayer><image source="a.png"/>')
        with pytest.raises(StructuralError):
            ImageLayerData.parse(stream, attrs, MAP_PATH)

    def test_stream_left_after_end_tag(self, open_element):
        stream, attrs = open_element(
            '<map><imagelayer/><next/></map>')
        stream.next_event()  # <imagelayer>
        ImageLayerData.parse(stream, [], MAP_PATH)
        assert stream.next_event().name == "next"

    def test_record_is_immutable(self, open_element):
        stream, attrs = open_element('<imagelayer/>')
        data, _ = ImageLayerData.parse(stream, attrs, MAP_PATH)
        with pytest.raises(AttributeError):
            data.repeat_x = True
