"""In-memory drawing model — layers, geometry tree, attachments.

A plain-Python implementation of :class:`~dwgcheck.models.base.DocumentModel`
used for snapshots loaded from JSON and for tests.  Hosts embedding the rules
supply their own model.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator

from pydantic import BaseModel

from dwgcheck.config import DEFAULT_LAYER_KEY, MODEL3D_TYPE
from dwgcheck.models.base import DocumentModel, GeometryVisitor
from dwgcheck.models.filters import compile_filter

logger = logging.getLogger(__name__)


class TypedValue(BaseModel):
    """A typed layer property: raw value plus optional display name."""

    value: Any = None
    name: str | None = None


class Layer:
    """A named grouping of drawing geometry carrying typed properties.

    Layers compare by identity, so two layers with the same name in
    different drawings are distinct keys.
    """

    def __init__(
        self,
        name: str,
        model_name: str = "",
        parent: Layer | None = None,
        properties: dict[str, TypedValue | Any] | None = None,
    ) -> None:
        self.name = name
        self.model_name = model_name
        self.parent = parent
        self._properties: dict[str, TypedValue] = {}
        for key, value in (properties or {}).items():
            self.set_property(key, value)

    def set_property(self, key: str, value: TypedValue | Any, name: str | None = None) -> None:
        if not isinstance(value, TypedValue):
            value = TypedValue(value=value, name=name)
        self._properties[key] = value

    def typed_value(self, key: str) -> TypedValue | None:
        return self._properties.get(key)

    def typed_properties(self) -> dict[str, TypedValue]:
        return dict(self._properties)

    def __repr__(self) -> str:
        return f"Layer({self.name!r}, model_name={self.model_name!r})"


class GeometryElement:
    """A node in a drawing's geometry tree."""

    def __init__(
        self,
        type: str,
        layer: Layer | None = None,
        volume: float = 0.0,
        children: list[GeometryElement] | None = None,
    ) -> None:
        self.type = type
        self.layer = layer
        self.volume = volume
        self.children = children or []

    @classmethod
    def model3d(cls, layer: Layer | None, volume: float) -> GeometryElement:
        """Shortcut for a 3D solid element."""
        return cls(MODEL3D_TYPE, layer=layer, volume=volume)

    def __repr__(self) -> str:
        layer = self.layer.name if self.layer is not None else None
        return f"GeometryElement({self.type!r}, layer={layer!r}, volume={self.volume})"


class Layout:
    """An ordered geometry tree."""

    def __init__(self, elements: list[GeometryElement] | None = None) -> None:
        self.elements = elements or []

    def add(self, element: GeometryElement) -> GeometryElement:
        self.elements.append(element)
        return element

    def walk(self, visitor: GeometryVisitor) -> bool:
        """Depth-first pre-order walk.  Returns True if *visitor* stopped it."""
        stack: list[Iterator[GeometryElement]] = [iter(self.elements)]
        while stack:
            element = next(stack[-1], None)
            if element is None:
                stack.pop()
                continue
            if visitor(element):
                return True
            if element.children:
                stack.append(iter(element.children))
        return False


class Attachment:
    """A sub-drawing embedded by reference.  *model* is None when unresolved."""

    def __init__(self, name: str, model: Drawing | None = None) -> None:
        self.name = name
        self.model = model


class Drawing(DocumentModel):
    """Root document: a layer registry, a model layout and attachments."""

    def __init__(
        self,
        name: str = "",
        model: Layout | None = None,
        attachments: list[Attachment] | None = None,
    ) -> None:
        self.name = name
        self.model = model if model is not None else Layout()
        self.attachments = attachments or []
        self.layers: dict[str, Layer] = {}
        self.add_layer(DEFAULT_LAYER_KEY)

    # -- construction -------------------------------------------------------

    def add_layer(
        self,
        name: str,
        parent: Layer | str | None = None,
        properties: dict[str, TypedValue | Any] | None = None,
    ) -> Layer:
        """Create a layer owned by this drawing and register it by name."""
        if isinstance(parent, str):
            parent = self.layers[parent]
        layer = Layer(name, model_name=self.name, parent=parent, properties=properties)
        self.layers[name] = layer
        return layer

    def attach(self, name: str, model: Drawing | None) -> Attachment:
        attachment = Attachment(name, model)
        self.attachments.append(attachment)
        return attachment

    # -- DocumentModel ------------------------------------------------------

    @property
    def default_layer(self) -> Layer | None:
        return self.layers.get(DEFAULT_LAYER_KEY)

    def resolve_layers(
        self, expression: str, include_attachments: bool = False
    ) -> list[Layer]:
        predicate = compile_filter(expression)
        found: dict[Layer, None] = {}
        for layer in self.layers.values():
            if predicate(layer):
                found[layer] = None
        if include_attachments:
            for model in self.attachment_models():
                for layer in model.resolve_layers(expression):
                    found[layer] = None
        logger.debug("Filter %r matched %d layers in %s", expression, len(found), self.name)
        return list(found)

    def typed_property(self, layer: Layer, key: str) -> TypedValue | None:
        return layer.typed_value(key)

    def typed_properties(self, layer: Layer) -> dict[str, TypedValue]:
        return layer.typed_properties()

    def walk_model(self, visitor: GeometryVisitor) -> bool:
        if self.model is None:
            return False
        return self.model.walk(visitor)

    def attachment_models(self) -> Iterable[Drawing]:
        for attachment in self.attachments:
            if attachment.model is not None:
                yield attachment.model
