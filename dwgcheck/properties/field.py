"""FieldProperty — picks the typed property a rule validates."""

from __future__ import annotations

import logging
from typing import Any, Callable

from dwgcheck.config import INTERNAL_PREFIX
from dwgcheck.models.base import DocumentModel
from dwgcheck.properties.base import ObjectProperty, PickItem

logger = logging.getLogger(__name__)

# Shows a pick-list and returns the chosen item, or None when dismissed.
Picker = Callable[[list[PickItem], str], "PickItem | None"]


class FieldProperty(ObjectProperty):
    """Edits the ``field`` attribute of rule configurations.

    With a *drawing*, :meth:`pick_items` offers the non-internal typed
    properties found on the layers the first configuration's filter selects.
    """

    def __init__(self, objects: list[Any], drawing: DocumentModel | None = None, **kwargs) -> None:
        super().__init__(objects, "field", **kwargs)
        self.drawing = drawing

    @property
    def id(self) -> str:
        return "volume3d-field"

    @property
    def can_pick(self) -> bool:
        return self.drawing is not None

    def pick_items(self) -> list[PickItem]:
        if self.drawing is None or not self.objects:
            return []
        layers = self.drawing.resolve_layers(self.objects[0].filter, include_attachments=True)
        labels: dict[str, str] = {}
        for layer in layers:
            for key, typed in self.drawing.typed_properties(layer).items():
                if key.startswith(INTERNAL_PREFIX):
                    continue
                labels[key] = typed.name or key
        return [PickItem(key=k, label=v, description=k) for k, v in labels.items()]

    def choose(self, picker: Picker) -> PickItem | None:
        """Let the user pick a field; a dismissed picker changes nothing."""
        item = picker(self.pick_items(), self.translator.tr("Select a field"))
        if item is None:
            return None
        self._assign(item.key)
        return item

    def commit(self, text: str | None) -> None:
        if text is None:
            return
        self._assign(text)
