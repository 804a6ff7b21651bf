"""
Attribute coercion and tag dispatch shared by every element decoder.

=============================================================================
THE PROTOCOL
=============================================================================

Every TMX element is decoded in the same two steps:

1. ATTRIBUTES: get_attrs() picks the attributes the element understands
   out of its start tag and converts them to Python types.

       repeat_x, opacity = get_attrs(attrs, [
           ("repeatx", parse_flag),
           ("opacity", float),
       ])

2. CHILDREN: parse_tag() pulls events until the element's end tag and
   routes each child start tag to a handler by name.

       parse_tag(stream, "imagelayer", {
           "image": on_image,
           "properties": on_properties,
       })

Handlers are called as handler(stream, attrs) and must consume their own
subtree, end tag included, before returning. Children nobody asked for
are skipped whole.

=============================================================================
"""

import logging
import re
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple

from .errors import AttributeCoercionError, MalformedAttributesError, StructuralError
from .events import END, START, Attributes, XmlEvent, XmlEventStream

logger = logging.getLogger(__name__)

Coercion = Callable[[str], Any]
Handler = Callable[[XmlEventStream, Attributes], None]


# =============================================================================
# ATTRIBUTE COERCION
# =============================================================================

def get_attrs(attrs: Iterable[Tuple[str, str]],
              coercions: Sequence[Tuple[str, Coercion]]) -> Tuple[Optional[Any], ...]:
    """
    Extract and convert the declared attributes of a start tag.

    Parameters:
    -----------
    attrs : iterable of (name, value)
        Attributes in document order
    coercions : sequence of (name, func)
        Declared attribute names and the function converting the raw
        string. func signals a bad value by raising ValueError/TypeError.

    Returns:
    --------
    tuple : One value per declared name, in declaration order.
            None where the attribute was absent.

    Raises:
    -------
    AttributeCoercionError : If a declared attribute cannot be converted

    The first successfully converted value of a name wins; later
    attributes with the same name are not looked at.
    """
    slots = {name: index for index, (name, _) in enumerate(coercions)}
    values = [None] * len(coercions)

    for name, raw in attrs:
        index = slots.get(name)
        if index is None or values[index] is not None:
            continue
        try:
            values[index] = coercions[index][1](raw)
        except (ValueError, TypeError) as e:
            raise AttributeCoercionError(name, raw) from e

    return tuple(values)


def require(value, name: str, element: str):
    """Return value, or raise if a required attribute was absent."""
    if value is None:
        raise MalformedAttributesError(element, name)
    return value


def parse_flag(raw: str) -> bool:
    """
    TMX integer flag: "1" is True, any other integer is False.

        parse_flag("1")  -> True
        parse_flag("0")  -> False
        parse_flag("2")  -> False
        parse_flag("x")  -> ValueError
    """
    return parse_int(raw) == 1


INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1


def parse_int(raw: str) -> int:
    """
    Strict 32-bit integer: optional sign and ASCII digits only.

    int() alone would also take " 1", "0_1" and non-ASCII digits.
    """
    if not re.fullmatch(r"[+-]?[0-9]+", raw):
        raise ValueError(f"not an integer: {raw!r}")
    value = int(raw)
    if not INT32_MIN <= value <= INT32_MAX:
        raise ValueError(f"integer out of range: {raw!r}")
    return value


def parse_bool(raw: str) -> bool:
    """Boolean property value, stored as "true"/"false"."""
    lowered = raw.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def parse_color(raw: str) -> str:
    """
    Normalize a TMX color to lower-case "#rrggbb" or "#aarrggbb".

    Tiled writes colors with a leading '#', but older files (and the
    'trans' attribute of images) omit it:
        "FF00FF"    -> "#ff00ff"
        "#80ff0000" -> "#80ff0000"
    """
    digits = raw.strip().lstrip("#")
    if len(digits) not in (6, 8):
        raise ValueError(f"not a color: {raw!r}")
    int(digits, 16)
    return "#" + digits.lower()


# =============================================================================
# TAG DISPATCH
# =============================================================================

def parse_tag(stream: XmlEventStream, close_tag: str,
              handlers: Dict[str, Handler]):
    """
    Consume events up to and including the end tag of close_tag.

    Parameters:
    -----------
    stream : XmlEventStream
        Positioned right after the start tag of the enclosing element
    close_tag : str
        Name of the enclosing element
    handlers : dict
        Child element name -> handler(stream, attrs)

    Raises:
    -------
    StructuralError : If the document ends before the end tag, or an
                      unexpected end tag closes it
    (anything a handler raises propagates unchanged)
    """
    while True:
        event = stream.next_event()
        if event.kind == START:
            handler = handlers.get(event.name)
            if handler is not None:
                handler(stream, event.attrs)
            else:
                logger.debug("Skipping <%s> inside <%s>", event.name, close_tag)
                skip_tag(stream, event.name)
        elif event.name == close_tag:
            return
        else:
            raise StructuralError(
                f"Expected </{close_tag}>, found </{event.name}>")


def skip_tag(stream: XmlEventStream, name: str) -> XmlEvent:
    """
    Consume the rest of an element whose start tag was just read.

    Nested elements (even ones with the same name) are counted so the
    stream ends up right after the matching end tag.

    Returns:
    --------
    XmlEvent : The matching end event (its text is the element's text)
    """
    depth = 1
    while True:
        event = stream.next_event()
        if event.kind == START:
            depth += 1
        elif event.kind == END:
            depth -= 1
            if depth == 0:
                if event.name != name:
                    raise StructuralError(
                        f"Expected </{name}>, found </{event.name}>")
                return event
