"""Drawing snapshot loading — build an in-memory Drawing from JSON.

Snapshot layout::

    {
      "name": "site.dwg",
      "layers": [
        {"name": "B1", "parent": "Buildings",
         "properties": {"volume": {"value": 120.0, "name": "Volume"},
                        "$type_3": "SmdxVolume3d"}}
      ],
      "model": [
        {"type": "model3d", "layer": "B1", "volume": 60.0,
         "children": [...]}
      ],
      "attachments": [
        {"name": "annex", "path": "annex.json"},
        {"name": "inline", "drawing": {...}}
      ]
    }

Attachments whose file is missing stay unresolved (``model`` is None),
matching a host where an external reference could not be opened.  A file
attachment that leads back to a drawing already being loaded raises
:class:`DrawingLoadError`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from dwgcheck.models.drawing import Attachment, Drawing, GeometryElement, Layout, TypedValue

logger = logging.getLogger(__name__)


class DrawingLoadError(ValueError):
    """Raised when a drawing snapshot is malformed or unreadable."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message if path is None else f"{path}: {message}")
        self.path = path


def load_drawing(path: str | Path) -> Drawing:
    """Load a drawing snapshot file, resolving file attachments relative to it."""
    return _load_file(Path(path), ())


def drawing_from_dict(
    data: dict[str, Any],
    base_dir: str | Path | None = None,
    source: str | Path | None = None,
) -> Drawing:
    """Build a Drawing from an already-parsed snapshot dict."""
    chain = (Path(source).resolve(),) if source is not None else ()
    return _build(data, base_dir, source, chain)


def _load_file(source: Path, chain: tuple[Path, ...]) -> Drawing:
    resolved = source.resolve()
    if resolved in chain:
        raise DrawingLoadError("attachment cycle, drawing references itself", source)
    return _build(_read_json(source), source.parent, source, chain + (resolved,))


def _build(
    data: Any,
    base_dir: str | Path | None,
    source: str | Path | None,
    chain: tuple[Path, ...],
) -> Drawing:
    _require_object(data, "snapshot", source)

    drawing = Drawing(name=str(data.get("name", "")))

    for entry in data.get("layers", []):
        _require_object(entry, "layer entry", source)
        name = entry.get("name")
        if not name:
            raise DrawingLoadError("layer entry without a name", source)
        parent = entry.get("parent")
        if parent is not None and parent not in drawing.layers:
            raise DrawingLoadError(f"layer {name!r} references unknown parent {parent!r}", source)
        properties = entry.get("properties", {})
        _require_object(properties, f"properties of layer {name!r}", source)
        layer = drawing.layers.get(name) or drawing.add_layer(name, parent=parent)
        for key, raw in properties.items():
            layer.set_property(key, _typed_value(raw))

    drawing.model = Layout([_element(e, drawing, source) for e in data.get("model", [])])

    for entry in data.get("attachments", []):
        drawing.attachments.append(_attachment(entry, base_dir, source, chain))

    logger.debug(
        "Loaded drawing %s: %d layers, %d attachments",
        drawing.name, len(drawing.layers), len(drawing.attachments),
    )
    return drawing


def _require_object(value: Any, what: str, source: str | Path | None) -> None:
    if not isinstance(value, dict):
        raise DrawingLoadError(f"{what} must be an object, got {value!r}", source)


def _typed_value(raw: Any) -> TypedValue:
    if isinstance(raw, dict) and "value" in raw:
        return TypedValue(value=raw["value"], name=raw.get("name"))
    return TypedValue(value=raw)


def _element(data: Any, drawing: Drawing, source: str | Path | None) -> GeometryElement:
    _require_object(data, "model element", source)
    layer_name = data.get("layer")
    layer = None
    if layer_name is not None:
        layer = drawing.layers.get(layer_name)
        if layer is None:
            raise DrawingLoadError(f"element references unknown layer {layer_name!r}", source)
    try:
        volume = float(data.get("volume", 0.0))
    except (TypeError, ValueError):
        raise DrawingLoadError(f"invalid volume {data.get('volume')!r}", source) from None
    return GeometryElement(
        type=str(data.get("type", "")),
        layer=layer,
        volume=volume,
        children=[_element(c, drawing, source) for c in data.get("children", [])],
    )


def _attachment(
    data: Any,
    base_dir: str | Path | None,
    source: str | Path | None,
    chain: tuple[Path, ...],
) -> Attachment:
    _require_object(data, "attachment entry", source)
    name = str(data.get("name", ""))
    if "drawing" in data:
        return Attachment(name, _build(data["drawing"], base_dir, source, chain))

    ref = data.get("path")
    if ref is None:
        return Attachment(name)
    target = Path(base_dir or ".") / ref
    if not target.is_file():
        logger.warning("Attachment %s: file %s not found, left unresolved", name, target)
        return Attachment(name)
    return Attachment(name, _load_file(target, chain))


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise DrawingLoadError(f"cannot read snapshot ({exc})", path) from exc
    except json.JSONDecodeError as exc:
        raise DrawingLoadError(f"invalid JSON ({exc.msg})", path) from exc
