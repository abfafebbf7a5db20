"""Layer filter expressions for the in-memory drawing model.

Grammar::

    expression := clause (("and" | "or") clause)*
    clause     := key ("=" | "!=") value

``and`` binds tighter than ``or``.  Keys resolve against the layer's typed
properties (``$type_3``, ``volume``, ...) or the ``name`` pseudo-key.
Values may be quoted.  An empty expression matches every layer.
"""

from __future__ import annotations

import re
from typing import Any, Callable

_OR_RE = re.compile(r"\s+or\s+", re.IGNORECASE)
_AND_RE = re.compile(r"\s+and\s+", re.IGNORECASE)
_CLAUSE_RE = re.compile(r"^\s*(?P<key>[^\s=!]+)\s*(?P<op>!=|=)\s*(?P<value>.*?)\s*$")

LayerPredicate = Callable[[Any], bool]


class FilterSyntaxError(ValueError):
    """Raised when a filter expression cannot be parsed."""


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
        return text[1:-1]
    return text


def _layer_value(layer: Any, key: str) -> Any:
    """Resolve *key* against a layer; None when the layer lacks it."""
    if key == "name":
        return layer.name
    typed = layer.typed_value(key)
    if typed is None:
        return None
    return typed.value


def _matches(actual: Any, expected: str) -> bool:
    if actual is None:
        return False
    if isinstance(actual, (int, float)) and not isinstance(actual, bool):
        try:
            return float(actual) == float(expected)
        except ValueError:
            return False
    return str(actual) == expected


def _compile_clause(text: str) -> LayerPredicate:
    m = _CLAUSE_RE.match(text)
    if m is None:
        raise FilterSyntaxError(f"Invalid filter clause: {text!r}")
    key = m.group("key")
    negate = m.group("op") == "!="
    expected = _unquote(m.group("value"))

    def predicate(layer: Any) -> bool:
        return _matches(_layer_value(layer, key), expected) != negate

    return predicate


def compile_filter(expression: str) -> LayerPredicate:
    """Compile *expression* into a predicate over layers."""
    if not expression or not expression.strip():
        return lambda layer: True

    groups: list[list[LayerPredicate]] = []
    for disjunct in _OR_RE.split(expression.strip()):
        groups.append([_compile_clause(c) for c in _AND_RE.split(disjunct)])

    def predicate(layer: Any) -> bool:
        return any(all(p(layer) for p in group) for group in groups)

    return predicate
