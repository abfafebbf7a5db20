"""Tests for the drawing document model — filters, geometry walks, loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from dwgcheck.models import (
    Drawing,
    DrawingLoadError,
    FilterSyntaxError,
    GeometryElement,
    Layer,
    Layout,
    TypedValue,
    compile_filter,
    drawing_from_dict,
    load_drawing,
)


# ---------------------------------------------------------------------------
# Filter expressions
# ---------------------------------------------------------------------------

def _volume_layer(name: str = "B1", **props) -> Layer:
    properties = {"$type_3": "SmdxVolume3d", "volume": 100.0}
    properties.update(props)
    return Layer(name, model_name="site.dwg", properties=properties)


class TestCompileFilter:

    def test_type_clause_matches(self):
        assert compile_filter("$type_3 = SmdxVolume3d")(_volume_layer())

    def test_type_clause_rejects_other_type(self):
        assert not compile_filter("$type_3 = SmdxArea")(_volume_layer())

    def test_missing_key_never_equals(self):
        assert not compile_filter("$type_5 = SmdxVolume3d")(_volume_layer())

    def test_not_equal(self):
        pred = compile_filter("$type_3 != SmdxArea")
        assert pred(_volume_layer())

    def test_and_or_precedence(self):
        pred = compile_filter("name = B2 or $type_3 = SmdxVolume3d and name = B1")
        assert pred(_volume_layer("B1"))
        assert pred(Layer("B2"))
        assert not pred(_volume_layer("B3"))

    def test_quoted_value(self):
        layer = Layer("Block A", properties={"$type_3": "Smdx Volume"})
        assert compile_filter("$type_3 = 'Smdx Volume'")(layer)
        assert compile_filter('name = "Block A"')(layer)

    def test_numeric_comparison(self):
        assert compile_filter("volume = 100")(_volume_layer(volume=100.0))
        assert not compile_filter("volume = abc")(_volume_layer(volume=100.0))

    def test_empty_expression_matches_everything(self):
        assert compile_filter("")(Layer("anything"))
        assert compile_filter("   ")(Layer("anything"))

    def test_invalid_clause_raises(self):
        with pytest.raises(FilterSyntaxError):
            compile_filter("just words")


# ---------------------------------------------------------------------------
# Layers, layouts and drawings
# ---------------------------------------------------------------------------

class TestLayer:

    def test_raw_properties_are_wrapped(self):
        layer = Layer("B1", properties={"volume": 12})
        typed = layer.typed_value("volume")
        assert isinstance(typed, TypedValue)
        assert typed.value == 12
        assert typed.name is None

    def test_set_property_with_display_name(self):
        layer = Layer("B1")
        layer.set_property("volume", 5.0, name="Volume")
        assert layer.typed_value("volume").name == "Volume"

    def test_identity_hashing(self):
        a, b = Layer("B1"), Layer("B1")
        assert a != b
        assert len({a, b}) == 2


class TestLayoutWalk:

    def test_walk_is_depth_first_preorder(self):
        leaf1 = GeometryElement("line")
        leaf2 = GeometryElement("model3d", volume=1.0)
        group = GeometryElement("group", children=[leaf1, leaf2])
        tail = GeometryElement("text")
        layout = Layout([group, tail])

        seen: list[GeometryElement] = []
        stopped = layout.walk(lambda e: seen.append(e) or False)

        assert stopped is False
        assert seen == [group, leaf1, leaf2, tail]

    def test_walk_stops_when_visitor_returns_true(self):
        first = GeometryElement("line")
        second = GeometryElement("line")
        layout = Layout([first, second])

        seen: list[GeometryElement] = []

        def visit(e):
            seen.append(e)
            return True

        assert layout.walk(visit) is True
        assert seen == [first]

    def test_empty_layout(self):
        assert Layout().walk(lambda e: True) is False


class TestDrawing:

    def test_has_default_layer(self):
        drawing = Drawing("site.dwg")
        assert drawing.default_layer is not None
        assert drawing.default_layer.name == "layer0"
        assert drawing.default_layer.model_name == "site.dwg"

    def test_add_layer_with_parent_name(self):
        drawing = Drawing("site.dwg")
        parent = drawing.add_layer("Buildings")
        child = drawing.add_layer("B1", parent="Buildings")
        assert child.parent is parent
        assert child.model_name == "site.dwg"

    def test_resolve_layers_keeps_order(self):
        drawing = Drawing("site.dwg")
        b2 = drawing.add_layer("B2", properties={"$type_3": "SmdxVolume3d"})
        b1 = drawing.add_layer("B1", properties={"$type_3": "SmdxVolume3d"})
        assert drawing.resolve_layers("$type_3 = SmdxVolume3d") == [b2, b1]

    def test_resolve_layers_with_attachments(self):
        annex = Drawing("annex.dwg")
        a1 = annex.add_layer("A1", properties={"$type_3": "SmdxVolume3d"})
        drawing = Drawing("site.dwg")
        b1 = drawing.add_layer("B1", properties={"$type_3": "SmdxVolume3d"})
        drawing.attach("annex", annex)
        drawing.attach("broken", None)

        expr = "$type_3 = SmdxVolume3d"
        assert drawing.resolve_layers(expr) == [b1]
        assert drawing.resolve_layers(expr, include_attachments=True) == [b1, a1]

    def test_attachment_models_skips_unresolved(self):
        annex = Drawing("annex.dwg")
        drawing = Drawing("site.dwg")
        drawing.attach("missing", None)
        drawing.attach("annex", annex)
        assert list(drawing.attachment_models()) == [annex]

    def test_walk_model_without_layout(self):
        drawing = Drawing("site.dwg")
        drawing.model = None
        assert drawing.walk_model(lambda e: True) is False


# ---------------------------------------------------------------------------
# Snapshot loading
# ---------------------------------------------------------------------------

def _write(path: Path, data: dict) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadDrawing:

    def test_load_layers_geometry_and_attachments(self, tmp_path: Path):
        _write(tmp_path / "annex.json", {
            "name": "annex.dwg",
            "layers": [{"name": "A1", "properties": {"volume": 5}}],
            "model": [{"type": "model3d", "layer": "A1", "volume": 5}],
        })
        root = _write(tmp_path / "site.json", {
            "name": "site.dwg",
            "layers": [
                {"name": "Buildings"},
                {
                    "name": "B1",
                    "parent": "Buildings",
                    "properties": {
                        "$type_3": "SmdxVolume3d",
                        "volume": {"value": 120.0, "name": "Volume"},
                    },
                },
            ],
            "model": [
                {"type": "group", "children": [
                    {"type": "model3d", "layer": "B1", "volume": 60},
                ]},
                {"type": "model3d", "layer": "B1", "volume": 60},
            ],
            "attachments": [
                {"name": "annex", "path": "annex.json"},
                {"name": "lost", "path": "missing.json"},
                {"name": "inline", "drawing": {"name": "inline.dwg"}},
            ],
        })

        drawing = load_drawing(root)

        assert drawing.name == "site.dwg"
        b1 = drawing.layers["B1"]
        assert b1.parent is drawing.layers["Buildings"]
        assert b1.typed_value("volume").value == 120.0
        assert b1.typed_value("volume").name == "Volume"
        assert b1.typed_value("$type_3").value == "SmdxVolume3d"

        volumes: list[float] = []
        drawing.walk_model(lambda e: volumes.append(e.volume) or False)
        assert volumes == [0.0, 60.0, 60.0]

        assert [a.name for a in drawing.attachments] == ["annex", "lost", "inline"]
        assert drawing.attachments[0].model.name == "annex.dwg"
        assert drawing.attachments[1].model is None
        assert drawing.attachments[2].model.name == "inline.dwg"

    def test_invalid_json_raises(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DrawingLoadError) as exc_info:
            load_drawing(path)
        assert exc_info.value.path == path

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(DrawingLoadError):
            load_drawing(tmp_path / "nope.json")

    def test_unknown_layer_reference_raises(self, tmp_path: Path):
        path = _write(tmp_path / "site.json", {
            "name": "site.dwg",
            "model": [{"type": "model3d", "layer": "ghost", "volume": 1}],
        })
        with pytest.raises(DrawingLoadError, match="ghost"):
            load_drawing(path)

    def test_unknown_parent_raises(self, tmp_path: Path):
        path = _write(tmp_path / "site.json", {
            "layers": [{"name": "B1", "parent": "Nowhere"}],
        })
        with pytest.raises(DrawingLoadError, match="Nowhere"):
            load_drawing(path)

    def test_load_error_is_value_error(self, tmp_path: Path):
        path = _write(tmp_path / "site.json", {
            "model": [{"type": "model3d", "volume": "lots"}],
        })
        with pytest.raises(ValueError):
            load_drawing(path)

    @pytest.mark.parametrize(
        "data, fragment",
        [
            ({"layers": ["B1"]}, "layer entry"),
            ({"layers": [{"name": "B1", "properties": ["volume"]}]}, "properties of layer 'B1'"),
            ({"model": [42]}, "model element"),
            ({"model": [{"type": "group", "children": ["x"]}]}, "model element"),
            ({"attachments": ["annex.json"]}, "attachment entry"),
            ({"attachments": [{"name": "inline", "drawing": 7}]}, "snapshot"),
        ],
    )
    def test_non_object_entries_raise(self, data, fragment):
        with pytest.raises(DrawingLoadError, match=fragment):
            drawing_from_dict(data, source="site.json")

    def test_self_reference_raises(self, tmp_path: Path):
        path = _write(tmp_path / "site.json", {
            "name": "site.dwg",
            "attachments": [{"name": "self", "path": "site.json"}],
        })
        with pytest.raises(DrawingLoadError, match="cycle") as exc_info:
            load_drawing(path)
        assert exc_info.value.path == path

    def test_indirect_cycle_raises(self, tmp_path: Path):
        _write(tmp_path / "a.json", {"attachments": [{"name": "b", "path": "b.json"}]})
        _write(tmp_path / "b.json", {"attachments": [{"name": "a", "path": "a.json"}]})
        with pytest.raises(DrawingLoadError, match="cycle"):
            load_drawing(tmp_path / "a.json")

    def test_shared_attachment_is_not_a_cycle(self, tmp_path: Path):
        _write(tmp_path / "common.json", {"name": "common.dwg"})
        _write(tmp_path / "annex.json", {
            "name": "annex.dwg",
            "attachments": [{"name": "common", "path": "common.json"}],
        })
        root = _write(tmp_path / "site.json", {
            "name": "site.dwg",
            "attachments": [
                {"name": "common", "path": "common.json"},
                {"name": "annex", "path": "annex.json"},
            ],
        })

        drawing = load_drawing(root)

        assert drawing.attachments[0].model.name == "common.dwg"
        assert drawing.attachments[1].model.attachments[0].model.name == "common.dwg"
