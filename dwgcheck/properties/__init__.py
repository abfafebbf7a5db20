"""Property editors for rule configurations."""

from dwgcheck.properties.base import ObjectProperty, PickItem, PropertyValue
from dwgcheck.properties.field import FieldProperty
from dwgcheck.properties.tolerance import ToleranceProperty, parse_leading_float

__all__ = [
    "FieldProperty",
    "ObjectProperty",
    "PickItem",
    "PropertyValue",
    "ToleranceProperty",
    "parse_leading_float",
]
