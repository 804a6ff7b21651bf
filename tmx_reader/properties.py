"""
Custom properties attached to TMX elements.

Tiled lets authors attach typed key/value pairs to maps, layers, tiles and
objects:

    <properties>
        <property name="solid" type="bool" value="true"/>
        <property name="health" type="int" value="100"/>
        <property name="description" value="A wooden door"/>
        <property name="dialogue">Line one
    Line two</property>
        <property name="loot" type="class" propertytype="Chest">
            <properties>
                <property name="gold" type="int" value="5"/>
            </properties>
        </property>
    </properties>

parse_properties() turns such a block into a plain dict:

    {"solid": True, "health": 100, "description": "A wooden door",
     "dialogue": "Line one\\nLine two",
     "loot": ClassValue("Chest", {"gold": 5})}
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict

from .errors import AttributeCoercionError
from .events import Attributes, XmlEventStream
from .util import get_attrs, parse_bool, parse_color, parse_tag, require, skip_tag

logger = logging.getLogger(__name__)

Properties = Dict[str, Any]


@dataclass(frozen=True)
class ClassValue:
    """Value of a property of type "class": a named bag of nested properties."""
    property_type: str                                     # Custom type name
    properties: Properties = field(default_factory=dict)   # Member values


# -----------------------------------------------------------------
# TYPE CONVERSION
# -----------------------------------------------------------------
# "file" stays relative to the document, the caller decides what to
# resolve it against. "object" is the id of another object (0 = none).

VALUE_TYPES: Dict[str, Callable[[str], Any]] = {
    "string": str,
    "int": int,
    "float": float,
    "bool": parse_bool,
    "color": parse_color,
    "file": str,
    "object": int,
}


def parse_properties(stream: XmlEventStream) -> Properties:
    """
    Parse the children of a <properties> element.

    The stream must be positioned right after <properties>; it is left
    right after </properties>.
    """
    properties: Properties = {}

    def on_property(stream, attrs):
        name, value = _parse_property(stream, attrs)
        properties[name] = value

    parse_tag(stream, "properties", {"property": on_property})
    return properties


def _parse_property(stream: XmlEventStream, attrs: Attributes):
    name, prop_type, raw, property_type = get_attrs(attrs, [
        ("name", str),
        ("type", str),
        ("value", str),
        ("propertytype", str),
    ])
    name = require(name, "name", "property")
    prop_type = prop_type or "string"

    if prop_type == "class":
        members: Properties = {}

        def on_members(stream, attrs):
            members.update(parse_properties(stream))

        parse_tag(stream, "property", {"properties": on_members})
        return name, ClassValue(property_type or "", members)

    end = skip_tag(stream, "property")
    if raw is None:
        # Multi-line strings are stored as element text instead
        raw = end.text or ""

    if prop_type == "color" and not raw:
        # Unset color
        return name, None

    convert = VALUE_TYPES.get(prop_type)
    if convert is None:
        logger.warning("Property %r has unknown type %r, keeping it as a string",
                       name, prop_type)
        return name, raw
    try:
        return name, convert(raw)
    except ValueError as e:
        raise AttributeCoercionError("value", raw) from e
