"""Drawing document model — capability interface and in-memory implementation."""

from dwgcheck.models.base import DocumentModel
from dwgcheck.models.drawing import Attachment, Drawing, GeometryElement, Layer, Layout, TypedValue
from dwgcheck.models.filters import FilterSyntaxError, compile_filter
from dwgcheck.models.loader import DrawingLoadError, drawing_from_dict, load_drawing

__all__ = [
    "Attachment",
    "DocumentModel",
    "Drawing",
    "DrawingLoadError",
    "FilterSyntaxError",
    "GeometryElement",
    "Layer",
    "Layout",
    "TypedValue",
    "compile_filter",
    "drawing_from_dict",
    "load_drawing",
]
