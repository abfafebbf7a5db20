"""Volume3dRule — declared layer volume vs. volume of the layer's 3D solids."""

from __future__ import annotations

import logging
from typing import Any

from dwgcheck.models.base import DocumentModel
from dwgcheck.validation.aggregator import aggregate_volumes
from dwgcheck.validation.classifier import classify
from dwgcheck.validation.context import RuleContext
from dwgcheck.validation.diagnostics import DiagnosticsSink
from dwgcheck.validation.rules.base import DiagnosticRule, ProgressCallback, RuleConfig
from dwgcheck.validation.selector import select_layers

logger = logging.getLogger(__name__)


class Volume3dRule(DiagnosticRule):
    """Flags layers whose declared volume differs from their solids' volume."""

    def __init__(
        self, context: RuleContext | None = None, defaults: RuleConfig | None = None
    ) -> None:
        self.context = context or RuleContext()
        self.defaults = defaults if defaults is not None else RuleConfig()

    @property
    def name(self) -> str:
        return "volume3d"

    @property
    def description(self) -> str:
        return self.context.tr(
            "Compares the declared layer volume with the volume of its 3D solids"
        )

    def create_rule(self) -> RuleConfig:
        """A fresh copy of the defaults, safe to edit before execution."""
        return self.defaults.model_copy()

    def execute(
        self,
        model: Any,
        config: RuleConfig,
        diagnostics: DiagnosticsSink,
        progress: ProgressCallback | None = None,
    ) -> None:
        if model is None:
            logger.debug("No active drawing, skipping %s", self.name)
            return
        drawing: DocumentModel = model

        _report(progress, "select", 0.0)
        layers = select_layers(drawing, config.filter, config.field)

        _report(progress, "aggregate", 1 / 3)
        volumes = aggregate_volumes(drawing, layers)

        _report(progress, "classify", 2 / 3)
        messages = classify(
            self.context, drawing, layers, volumes, config.field, config.tolerance
        )

        for key, items in messages.items():
            diagnostics.set(key, items)
        _report(progress, "done", 1.0)

        logger.info(
            "%s: %d layers checked, %d diagnostics in %d documents",
            self.name, len(layers), sum(len(v) for v in messages.values()), len(messages),
        )


def _report(progress: ProgressCallback | None, stage: str, fraction: float) -> None:
    if progress is not None:
        progress(stage, fraction)
