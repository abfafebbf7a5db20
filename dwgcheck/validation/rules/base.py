"""Abstract DiagnosticRule interface and the rule configuration model."""

from __future__ import annotations

import abc
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field

from dwgcheck.config import DEFAULT_FIELD, DEFAULT_FILTER, DEFAULT_TOLERANCE
from dwgcheck.validation.diagnostics import DiagnosticsSink

# Progress signal: (stage name, fraction done in [0, 1]).
ProgressCallback = Callable[[str, float], None]


class RuleConfig(BaseModel):
    """Per-execution input of a volume rule.

    Assignments are validated, so editing ``tolerance`` to a negative value
    raises ``pydantic.ValidationError``.
    """

    model_config = ConfigDict(validate_assignment=True)

    filter: str = DEFAULT_FILTER
    """Layer filter expression, e.g. ``$type_3 = SmdxVolume3d``."""

    field: str = DEFAULT_FIELD
    """Typed property holding the declared volume."""

    tolerance: float = Field(default=DEFAULT_TOLERANCE, ge=0)
    """Allowed deviation, in percent of the computed volume."""


class DiagnosticRule(abc.ABC):
    """Base class for all drawing diagnostic rules."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Short rule identifier."""

    @property
    @abc.abstractmethod
    def description(self) -> str:
        """Human-readable description."""

    @abc.abstractmethod
    def create_rule(self) -> RuleConfig:
        """Return a fresh configuration with default values."""

    @abc.abstractmethod
    def execute(
        self,
        model: Any,
        config: RuleConfig,
        diagnostics: DiagnosticsSink,
        progress: ProgressCallback | None = None,
    ) -> None:
        """Evaluate the rule against *model* and deliver results to *diagnostics*.

        Parameters
        ----------
        model:
            The active document model, or None when no drawing is open.
        config:
            Rule configuration for this execution.
        diagnostics:
            Sink receiving one ``set(key, list)`` call per document.
        progress:
            Optional progress signal.  Never used for cancellation.
        """
