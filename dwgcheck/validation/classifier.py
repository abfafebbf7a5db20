"""Diagnostic classification — compare declared and aggregated volumes.

Each selected layer ends in one of these outcomes, checked in order:

1. the declared property is missing or not a number -> error;
2. no 3D solid contributed a volume -> error;
3. the deviation exceeds the tolerance -> error;
4. otherwise the layer passes and gets no diagnostic.

An empty selection produces a single warning on the default layer.

The deviation is measured against the *aggregated* volume.  An aggregate of
zero follows float division semantics: a nonzero declared value deviates by
infinity, and zero against zero is NaN, which never exceeds a tolerance.
"""

from __future__ import annotations

import logging
import math
import numbers
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from dwgcheck.models.base import DocumentModel
from dwgcheck.validation.context import RuleContext, activate_diagnostic
from dwgcheck.validation.diagnostics import Diagnostic, DiagnosticSeverity

logger = logging.getLogger(__name__)


def is_numeric(value: Any) -> bool:
    """True for real numbers, including Decimal; bools are not numbers here."""
    return isinstance(value, (numbers.Real, Decimal)) and not isinstance(value, bool)


def deviation_percent(aggregate: float, declared: float) -> float:
    """Return ``|(aggregate - declared) / aggregate| * 100``."""
    diff = float(aggregate) - float(declared)
    if aggregate == 0:
        return math.nan if diff == 0 else math.inf
    return abs(diff / aggregate) * 100


def format_percent(value: float) -> str:
    """Render a percentage as an integer, rounding halves away from zero."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if abs(value) >= 1e21:
        return repr(float(value))
    return format(Decimal(value).to_integral_value(rounding=ROUND_HALF_UP), "f")


def layer_source(layer: Any) -> str:
    """Source locator ``<parent name>/<layer name>``."""
    parent = getattr(layer, "parent", None)
    parent_name = parent.name if parent is not None else ""
    return f"{parent_name}/{layer.name}"


def classify(
    context: RuleContext,
    drawing: DocumentModel,
    layers: list[Any],
    aggregates: dict[Any, float],
    field_name: str,
    tolerance: float,
) -> dict[str, list[Diagnostic]]:
    """Build the diagnostics for *layers*, grouped by model name.

    Every document owning a selected layer gets a key, even when all of its
    layers pass, so delivering the result clears stale diagnostics.
    """
    messages: dict[str, list[Diagnostic]] = {}

    if not layers:
        layer0 = drawing.default_layer
        model_name = layer0.model_name if layer0 is not None else ""
        messages[model_name] = [Diagnostic(
            message=context.tr("No matching objects found"),
            severity=DiagnosticSeverity.WARNING,
            tooltip=context.tr("Could not find objects matching the filter"),
            layer=layer0,
            context=context,
        )]
        return messages

    for layer in layers:
        collection = messages.setdefault(layer.model_name, [])
        diagnostic = _classify_layer(context, drawing, layer, aggregates, field_name, tolerance)
        if diagnostic is not None:
            collection.append(diagnostic)

    logger.debug(
        "Classified %d layers: %d diagnostics",
        len(layers), sum(len(items) for items in messages.values()),
    )
    return messages


def _classify_layer(
    context: RuleContext,
    drawing: DocumentModel,
    layer: Any,
    aggregates: dict[Any, float],
    field_name: str,
    tolerance: float,
) -> Diagnostic | None:
    source = layer_source(layer)
    prop = drawing.typed_property(layer, field_name)

    if prop is None or not is_numeric(prop.value):
        return Diagnostic(
            message=context.tr('Property "{0}" not found', field_name),
            severity=DiagnosticSeverity.ERROR,
            source=source,
            layer=layer,
            context=context,
            activation=activate_diagnostic,
        )

    volume = aggregates.get(layer)
    if volume is None:
        return Diagnostic(
            message=context.tr("Could not compute volume"),
            severity=DiagnosticSeverity.ERROR,
            source=source,
            tooltip=context.tr("Could not compute the solid volume. No 3D solids found."),
            layer=layer,
            context=context,
            activation=activate_diagnostic,
        )

    deviation = deviation_percent(volume, prop.value)
    if deviation > tolerance:
        return Diagnostic(
            message=context.tr("Invalid volume value. Deviation {0}%", format_percent(deviation)),
            severity=DiagnosticSeverity.ERROR,
            source=source,
            tooltip=context.tr("Solid volume does not match the declared value"),
            layer=layer,
            context=context,
            activation=activate_diagnostic,
        )
    return None
