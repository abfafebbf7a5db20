"""Diagnostic records and the sinks they are delivered to."""

from __future__ import annotations

import abc
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from dwgcheck.validation.context import RuleContext


class DiagnosticSeverity(str, Enum):
    """Severity of a diagnostic, most severe first."""

    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"
    HINT = "hint"


class Diagnostic:
    """A single finding attached to a layer."""

    def __init__(
        self,
        message: str,
        severity: DiagnosticSeverity,
        layer: Any,
        context: RuleContext | None = None,
        tooltip: str | None = None,
        source: str | None = None,
        activation: Callable[[Diagnostic], None] | None = None,
    ) -> None:
        self.message = message
        self.severity = severity
        self.layer = layer
        self.context = context
        self.tooltip = tooltip
        self.source = source
        self.activation = activation

    def activate(self) -> None:
        """Run the remediation action, if the diagnostic has one."""
        if self.activation is not None:
            self.activation(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "severity": self.severity.value,
            "tooltip": self.tooltip,
            "source": self.source,
            "layer": getattr(self.layer, "name", None),
            "actionable": self.activation is not None,
        }

    def __repr__(self) -> str:
        return f"Diagnostic({self.severity.value}: {self.message!r}, source={self.source!r})"


class DiagnosticsSink(abc.ABC):
    """Receives diagnostics grouped by document key."""

    @abc.abstractmethod
    def set(self, key: str, diagnostics: list[Diagnostic]) -> None:
        """Replace all diagnostics stored for *key*."""


class DiagnosticCollection(DiagnosticsSink):
    """In-memory sink with replace-per-key semantics."""

    def __init__(self) -> None:
        self._entries: dict[str, list[Diagnostic]] = {}

    def set(self, key: str, diagnostics: list[Diagnostic]) -> None:
        self._entries[key] = list(diagnostics)

    def get(self, key: str) -> list[Diagnostic]:
        return list(self._entries.get(key, []))

    def keys(self) -> list[str]:
        return list(self._entries)

    def all(self) -> list[Diagnostic]:
        """All diagnostics across documents, in key order."""
        return [d for items in self._entries.values() for d in items]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return sum(len(items) for items in self._entries.values())

    def __contains__(self, key: object) -> bool:
        return key in self._entries
