"""
Streaming XML event source.

=============================================================================
WHY STREAMING?
=============================================================================

Building the whole ElementTree and calling find()/findall() is simple, but
it hides document order and makes every element type re-implement "find my
children". The decoders in this package instead pull events one at a time:

    start  imagelayer  [("repeatx", "1")]
    start  image       [("source", "bg.png")]
    end    image
    start  properties  []
    start  property    [("name", "z"), ("value", "1")]
    end    property
    end    properties
    end    imagelayer

Each decoder consumes exactly the events of its own subtree and hands the
stream back to its caller, positioned right after its end tag.

=============================================================================
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, Iterator, NamedTuple, Optional, Sequence, Tuple, Union

from .errors import StructuralError


START = "start"
END = "end"

Attributes = Sequence[Tuple[str, str]]


class XmlEvent(NamedTuple):
    """One start or end tag pulled from the document."""
    kind: str                       # START or END
    name: str                       # Element name
    attrs: Attributes = ()          # (name, value) pairs, start tags only
    text: Optional[str] = None      # Leading text, end tags only

    @classmethod
    def from_element(cls, kind: str, elem: ET.Element) -> 'XmlEvent':
        if kind == START:
            return cls(START, elem.tag, list(elem.attrib.items()))
        return cls(END, elem.tag, text=elem.text)


class XmlEventStream:
    """
    Sequential source of XmlEvents.

    Wraps either an iterator of XmlEvent or the (event, element) pairs
    produced by ElementTree's iterparse/XMLPullParser. Only one reader
    may pull from a stream at a time: a handler that receives the stream
    owns it until it returns.

    Usage:
        with XmlEventStream.from_file("level1.tmx") as stream:
            event = stream.next_event()
    """

    def __init__(self, events: Iterable[Union[XmlEvent, Tuple[str, ET.Element]]]):
        self._events = iter(events)

    @classmethod
    def from_string(cls, text: Union[str, bytes]) -> 'XmlEventStream':
        """Stream over an in-memory document."""
        return cls(_pull_events(text))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'XmlEventStream':
        """
        Stream over a document on disk.

        The file is opened right away, so a missing file raises
        FileNotFoundError here rather than on the first read.
        """
        return cls(ET.iterparse(str(path), events=(START, END)))

    def __iter__(self) -> Iterator[XmlEvent]:
        return self

    def __next__(self) -> XmlEvent:
        try:
            item = next(self._events)
        except ET.ParseError as e:
            raise StructuralError(f"Malformed document: {e}") from e
        if isinstance(item, XmlEvent):
            return item
        kind, elem = item
        return XmlEvent.from_element(kind, elem)

    def next_event(self) -> XmlEvent:
        """
        Pull the next event.

        Raises:
        -------
        StructuralError : If the document ends (or breaks) before the
                          caller has seen the end tag it is waiting for
        """
        try:
            return next(self)
        except StopIteration:
            raise StructuralError("Unexpected end of document") from None

    def close(self):
        close = getattr(self._events, "close", None)
        if close is not None:
            close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def _pull_events(text):
    parser = ET.XMLPullParser(events=(START, END))
    parser.feed(text)
    yield from parser.read_events()
    # close() raises ParseError when elements are left open
    parser.close()
    yield from parser.read_events()
