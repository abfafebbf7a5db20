"""Volume aggregation — sum 3D solid volumes per layer.

Walks the drawing's model layout and the model layout of every attachment
that has a drawing.  Attachments are visited one level deep: the walk of an
attached drawing does not descend into its own attachments.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from dwgcheck.config import MODEL3D_TYPE
from dwgcheck.models.base import DocumentModel

logger = logging.getLogger(__name__)


def aggregate_volumes(drawing: DocumentModel, layers: Iterable[Any]) -> dict[Any, float]:
    """Map each layer in *layers* to the total volume of its 3D solids.

    Layers without any 3D solid are absent from the result.
    """
    members = set(layers)
    volumes: dict[Any, float] = {}

    def visit(element: Any) -> bool:
        if element.type == MODEL3D_TYPE and element.layer is not None:
            if element.layer in members:
                volumes[element.layer] = volumes.get(element.layer, 0.0) + element.volume
        return False

    drawing.walk_model(visit)
    for model in drawing.attachment_models():
        model.walk_model(visit)

    logger.debug("Aggregated volumes for %d of %d layers", len(volumes), len(members))
    return volumes
