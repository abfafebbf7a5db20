"""Layer volume validation.

Selects layers by filter, sums the volume of their 3D solids across the
drawing and its attachments, and reports layers whose declared volume
disagrees.
"""

from dwgcheck.validation.aggregator import aggregate_volumes
from dwgcheck.validation.classifier import classify
from dwgcheck.validation.context import HostServices, RuleContext, activate_diagnostic
from dwgcheck.validation.diagnostics import (
    Diagnostic,
    DiagnosticCollection,
    DiagnosticSeverity,
    DiagnosticsSink,
)
from dwgcheck.validation.engine import RuleEngine
from dwgcheck.validation.report import DiagnosticReport
from dwgcheck.validation.rules import DiagnosticRule, RuleConfig, Volume3dRule
from dwgcheck.validation.selector import select_layers

__all__ = [
    "Diagnostic",
    "DiagnosticCollection",
    "DiagnosticReport",
    "DiagnosticRule",
    "DiagnosticSeverity",
    "DiagnosticsSink",
    "HostServices",
    "RuleConfig",
    "RuleContext",
    "RuleEngine",
    "Volume3dRule",
    "activate_diagnostic",
    "aggregate_volumes",
    "classify",
    "select_layers",
]
