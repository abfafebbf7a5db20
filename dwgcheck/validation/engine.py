"""RuleEngine — registry and runner for drawing diagnostic rules.

Usage::

    from dwgcheck.validation import RuleEngine

    engine = RuleEngine()
    diagnostics = engine.run(drawing)
"""

from __future__ import annotations

import logging
from typing import Any

from dwgcheck.validation.context import RuleContext
from dwgcheck.validation.diagnostics import DiagnosticCollection, DiagnosticsSink
from dwgcheck.validation.rules.base import DiagnosticRule, ProgressCallback, RuleConfig
from dwgcheck.validation.rules.volume import Volume3dRule

logger = logging.getLogger(__name__)


class RuleEngine:
    """Central rule registry.

    Loads the built-in rules on init.  Additional rules can be registered
    via :meth:`add_rule`.  *defaults* (typically
    :meth:`ConfigManager.rule_defaults`) seeds the built-in rule's
    configuration.
    """

    def __init__(
        self, context: RuleContext | None = None, defaults: RuleConfig | None = None
    ) -> None:
        self.context = context or RuleContext()
        self.defaults = defaults
        self.rules: dict[str, DiagnosticRule] = {}
        self._load_default_rules()

    def _load_default_rules(self) -> None:
        self.add_rule(Volume3dRule(self.context, self.defaults))

    def add_rule(self, rule: DiagnosticRule) -> None:
        """Register a rule, replacing any rule with the same name."""
        self.rules[rule.name] = rule

    def get_rule(self, name: str) -> DiagnosticRule | None:
        return self.rules.get(name)

    def create_config(self, name: str) -> RuleConfig:
        """Return the default configuration of rule *name*."""
        rule = self.rules.get(name)
        if rule is None:
            raise KeyError(f"Unknown rule: {name}")
        return rule.create_rule()

    def run(
        self,
        model: Any,
        configs: dict[str, RuleConfig] | None = None,
        diagnostics: DiagnosticsSink | None = None,
        progress: ProgressCallback | None = None,
    ) -> DiagnosticsSink:
        """Run every registered rule against *model*.

        Parameters
        ----------
        model:
            Document model to check.
        configs:
            Per-rule configuration keyed by rule name.  Rules without an
            entry run with their defaults.
        diagnostics:
            Sink to deliver results to.  A new
            :class:`DiagnosticCollection` is created when omitted.

        Returns
        -------
        DiagnosticsSink
            The sink that received the diagnostics.
        """
        sink = diagnostics if diagnostics is not None else DiagnosticCollection()
        configs = configs or {}

        for rule in self.rules.values():
            config = configs.get(rule.name) or rule.create_rule()
            try:
                rule.execute(model, config, sink, progress)
            except Exception:
                logger.exception("Rule %s failed", rule.name)

        return sink
