"""Diagnostic rules."""

from dwgcheck.validation.rules.base import DiagnosticRule, RuleConfig
from dwgcheck.validation.rules.volume import Volume3dRule

__all__ = [
    "DiagnosticRule",
    "RuleConfig",
    "Volume3dRule",
]
