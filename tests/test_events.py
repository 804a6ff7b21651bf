"""Tests for the XML event stream."""

import pytest

from tmx_reader.errors import StructuralError
from tmx_reader.events import END, START, XmlEvent, XmlEventStream


def test_events_in_document_order():
    stream = XmlEventStream.from_string('<a x="1"><b>text</b></a>')
    assert list(stream) == [
        XmlEvent(START, "a", [("x", "1")]),
        XmlEvent(START, "b", []),
        XmlEvent(END, "b", text="text"),
        XmlEvent(END, "a"),
    ]


def test_event_list_passes_through():
    events = [XmlEvent(START, "a"), XmlEvent(END, "a")]
    assert list(XmlEventStream(events)) == events


def test_next_event_at_end():
    stream = XmlEventStream([])
    with pytest.raises(StructuralError):
        stream.next_event()


def test_malformed_xml():
    stream = XmlEventStream.from_string('<a><b></a>')
    with pytest.raises(StructuralError) as info:
        list(stream)
    assert info.value.__cause__ is not None


def test_from_file(tmp_path):
    path = tmp_path / "doc.xml"
    path.write_text('<a><b/></a>', encoding="utf-8")
    with XmlEventStream.from_file(path) as stream:
        assert [event.name for event in stream] == ["a", "b", "b", "a"]


def test_default_attrs_are_immutable():
    event = XmlEvent(START, "a")
    assert event.attrs == ()
    with pytest.raises(AttributeError):
        event.attrs.append(("x", "1"))
