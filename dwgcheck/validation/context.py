"""Rule execution context — translator, host services, current view."""

from __future__ import annotations

import abc
import logging
from typing import Any

from dwgcheck.config import LAYER_ACTIVATE_COMMAND, LAYER_SELECT_BROADCAST
from dwgcheck.i18n import Translator
from dwgcheck.validation.diagnostics import Diagnostic

logger = logging.getLogger(__name__)


class HostServices(abc.ABC):
    """Operations the host application exposes to rules."""

    @abc.abstractmethod
    def execute_command(self, command: str, args: dict[str, Any]) -> Any:
        """Run a named host command."""

    @abc.abstractmethod
    def broadcast(self, event: str, payload: dict[str, Any]) -> None:
        """Send a notification to every listener of *event*."""


class RuleContext:
    """Everything a rule needs from its environment, passed explicitly."""

    def __init__(
        self,
        translator: Translator | None = None,
        host: HostServices | None = None,
        view: Any = None,
    ) -> None:
        self.translator = translator or Translator()
        self.host = host
        self.view = view

    def tr(self, message: str, *args: Any) -> str:
        return self.translator.tr(message, *args)


def activate_diagnostic(diagnostic: Diagnostic) -> None:
    """Select the diagnostic's layer in the layer manager and in the view."""
    ctx = diagnostic.context
    if ctx is None or ctx.host is None:
        logger.warning("Cannot activate %r: no host attached", diagnostic)
        return
    layer = diagnostic.layer
    ctx.host.execute_command(LAYER_ACTIVATE_COMMAND, {"layer": layer})
    ctx.host.broadcast(LAYER_SELECT_BROADCAST, {"layers": [layer], "cadview": ctx.view})
