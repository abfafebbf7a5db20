"""ToleranceProperty — percentage editor with range validation."""

from __future__ import annotations

import logging
import math
import re

from dwgcheck.config import TOLERANCE_MAX, TOLERANCE_MIN
from dwgcheck.properties.base import ObjectProperty

logger = logging.getLogger(__name__)

# Leading decimal number, the way a lenient float parser reads "42%" or "1.5 pct"
_LEADING_NUMBER_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_leading_float(text: str) -> float | None:
    """Parse the number at the start of *text*; None if there is none."""
    m = _LEADING_NUMBER_RE.match(text)
    if m is None:
        return None
    return float(m.group(0))


class ToleranceProperty(ObjectProperty):
    """Edits a numeric percentage attribute (``tolerance`` by default)."""

    suffix = "%"

    def __init__(self, objects, field: str = "tolerance", **kwargs) -> None:
        super().__init__(objects, field, **kwargs)

    @property
    def id(self) -> str:
        return f"tolerance-{self.field}"

    def validate(self, text: str) -> str | None:
        tr = self.translator.tr
        if text == "":
            return tr("Field must not be empty")
        number = parse_leading_float(text)
        if number is None or not math.isfinite(number):
            return tr("Value must be a number")
        if number < TOLERANCE_MIN or number > TOLERANCE_MAX:
            return tr("Value must be between 0 and 100")
        return None

    def commit(self, text: str | None) -> None:
        if text is None:
            return
        number = parse_leading_float(text)
        if number is None:
            logger.warning("Ignoring non-numeric %s value %r", self.field, text)
            return
        self._assign(number)
