"""Layer selection — resolve the layers a volume rule applies to."""

from __future__ import annotations

import logging
from typing import Any

from dwgcheck.models.base import DocumentModel

logger = logging.getLogger(__name__)


def select_layers(drawing: DocumentModel, filter_expression: str, field_name: str) -> list[Any]:
    """Return the layers of *drawing* and its attachments matching *filter_expression*.

    The result is ordered and duplicate-free.  An empty list is a valid
    outcome.  *field_name* does not narrow the selection: layers missing the
    field must still be reported.
    """
    layers = drawing.resolve_layers(filter_expression, include_attachments=True)
    logger.debug(
        "Selected %d layers for field %r with filter %r",
        len(layers), field_name, filter_expression,
    )
    return layers
