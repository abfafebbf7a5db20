"""Abstract DocumentModel interface — what the rules read from a host drawing."""

from __future__ import annotations

import abc
from typing import Any, Callable, Iterable

# Visitor signature for geometry walks: return True to stop the traversal.
GeometryVisitor = Callable[[Any], bool]


class DocumentModel(abc.ABC):
    """Read-only capability interface over a host drawing.

    Layer objects returned by a model expose ``name``, ``model_name`` and
    ``parent``.  Geometry elements passed to visitors expose ``type``,
    ``layer`` and (for 3D models) ``volume``.
    """

    @property
    @abc.abstractmethod
    def default_layer(self) -> Any | None:
        """The drawing's default layer (``layer0``), if present."""

    @abc.abstractmethod
    def resolve_layers(
        self, expression: str, include_attachments: bool = False
    ) -> list[Any]:
        """Return the layers matching a filter *expression*, in order.

        The grammar is owned by the model.  The result has no duplicates.
        """

    @abc.abstractmethod
    def typed_property(self, layer: Any, key: str) -> Any | None:
        """Return the typed property *key* of *layer*, or None."""

    @abc.abstractmethod
    def typed_properties(self, layer: Any) -> dict[str, Any]:
        """Return all typed properties of *layer* keyed by name."""

    @abc.abstractmethod
    def walk_model(self, visitor: GeometryVisitor) -> bool:
        """Walk the primary model layout.  Returns True if *visitor* stopped it."""

    @abc.abstractmethod
    def attachment_models(self) -> Iterable[DocumentModel]:
        """Yield the models of attached sub-drawings that have one."""
