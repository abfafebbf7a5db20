"""dwgcheck — drawing diagnostics comparing declared layer volumes with 3D solids."""

__version__ = "1.0.0"

from dwgcheck.i18n import Translator
from dwgcheck.models import DocumentModel, Drawing, GeometryElement, Layer, Layout, TypedValue, load_drawing
from dwgcheck.properties import FieldProperty, ToleranceProperty
from dwgcheck.settings import ConfigManager
from dwgcheck.validation import (
    Diagnostic,
    DiagnosticCollection,
    DiagnosticReport,
    DiagnosticSeverity,
    RuleConfig,
    RuleContext,
    RuleEngine,
    Volume3dRule,
)

__all__ = [
    "__version__",
    # Document model
    "DocumentModel",
    "Drawing",
    "GeometryElement",
    "Layer",
    "Layout",
    "TypedValue",
    "load_drawing",
    # Validation
    "Diagnostic",
    "DiagnosticCollection",
    "DiagnosticReport",
    "DiagnosticSeverity",
    "RuleConfig",
    "RuleContext",
    "RuleEngine",
    "Volume3dRule",
    # Editors, settings, i18n
    "ConfigManager",
    "FieldProperty",
    "ToleranceProperty",
    "Translator",
]
