"""DiagnosticReport — Markdown and JSON rendering of a rule run."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from dwgcheck.validation.diagnostics import Diagnostic, DiagnosticCollection, DiagnosticSeverity


class DiagnosticReport:
    """Diagnostics of one run, grouped by document."""

    def __init__(
        self,
        documents: dict[str, list[Diagnostic]] | None = None,
        checked_at: datetime | str | None = None,
    ) -> None:
        self.documents = documents or {}
        if checked_at is None:
            self.checked_at = datetime.now(timezone.utc)
        elif isinstance(checked_at, str):
            self.checked_at = datetime.fromisoformat(checked_at)
        else:
            self.checked_at = checked_at

    @classmethod
    def from_collection(cls, collection: DiagnosticCollection) -> DiagnosticReport:
        return cls({key: collection.get(key) for key in collection.keys()})

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [d for items in self.documents.values() for d in items]

    @property
    def status(self) -> str:
        """'failed' on any error, 'warnings' on any warning, else 'passed'."""
        severities = {d.severity for d in self.diagnostics}
        if DiagnosticSeverity.ERROR in severities:
            return "failed"
        if DiagnosticSeverity.WARNING in severities:
            return "warnings"
        return "passed"

    def count(self, severity: DiagnosticSeverity) -> int:
        return sum(1 for d in self.diagnostics if d.severity == severity)

    def to_markdown(self) -> str:
        lines: list[str] = []

        lines.append("# Volume Check Report")
        lines.append("")
        lines.append(f"**Status:** {self.status.upper()}")
        lines.append(f"**Checked:** {self.checked_at.strftime('%Y-%m-%d %H:%M UTC')}")
        lines.append("")
        errors = self.count(DiagnosticSeverity.ERROR)
        warnings = self.count(DiagnosticSeverity.WARNING)
        lines.append(f"**Summary:** {errors} errors, {warnings} warnings")
        lines.append("")

        for key, items in self.documents.items():
            if not items:
                continue
            lines.append(f"## {key or '(unnamed document)'}")
            lines.append("")
            lines.append("| Severity | Source | Message | Detail |")
            lines.append("|----------|--------|---------|--------|")
            for d in items:
                msg = d.message.replace("|", "\\|")
                tip = (d.tooltip or "").replace("|", "\\|")
                lines.append(f"| {d.severity.value.upper()} | {d.source or ''} | {msg} | {tip} |")
            lines.append("")

        if not self.diagnostics:
            lines.append("No issues found. All layer volumes match.")
            lines.append("")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "checked_at": self.checked_at.isoformat(),
            "documents": {
                key: [d.to_dict() for d in items] for key, items in self.documents.items()
            },
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, default=str, ensure_ascii=False)
