"""Abstract ObjectProperty — an editable property over a set of objects."""

from __future__ import annotations

import abc
import logging
from typing import Any

from pydantic import BaseModel

from dwgcheck.i18n import Translator

logger = logging.getLogger(__name__)


class PropertyValue(BaseModel):
    """What the property grid displays for a property."""

    label: str
    suffix: str | None = None


class PickItem(BaseModel):
    """An entry in a property's pick-list."""

    key: str
    label: str
    description: str = ""


class ObjectProperty(abc.ABC):
    """An editable attribute shared by one or more objects.

    The edited objects and the attribute name are passed in explicitly.
    :meth:`validate` returns an error message or None; :meth:`commit`
    applies an edit to every object.
    """

    suffix: str | None = None

    def __init__(
        self,
        objects: list[Any],
        field: str,
        label: str | None = None,
        description: str | None = None,
        group: str | None = None,
        translator: Translator | None = None,
    ) -> None:
        self.objects = list(objects)
        self.field = field
        self.label = label or field
        self.description = description
        self.group = group
        self.translator = translator or Translator()

    @property
    @abc.abstractmethod
    def id(self) -> str:
        """Stable property identifier."""

    def value(self) -> PropertyValue:
        """Shared value of all objects, or a placeholder when they differ."""
        values = [getattr(obj, self.field) for obj in self.objects]
        if not values:
            return PropertyValue(label="", suffix=self.suffix)
        first = values[0]
        if any(v != first for v in values[1:]):
            return PropertyValue(label=self.translator.tr("**Different**"), suffix=self.suffix)
        return PropertyValue(label=_display(first), suffix=self.suffix)

    def validate(self, text: str) -> str | None:
        return None

    @abc.abstractmethod
    def commit(self, text: str | None) -> None:
        """Apply *text* to every object.  None means the edit was cancelled."""

    def _assign(self, value: Any) -> int:
        """Set the field on each object; failures are logged and skipped.

        Returns the number of objects updated.
        """
        updated = 0
        for obj in self.objects:
            try:
                setattr(obj, self.field, value)
                updated += 1
            except Exception:
                logger.error("Could not set %s on %r", self.field, obj, exc_info=True)
        return updated


def _display(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)
