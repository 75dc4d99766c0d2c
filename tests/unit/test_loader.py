"""Tests for composition and capsule file loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from capsuleforge.core.errors import CompositionLoadError
from capsuleforge.core.loader import load_capsules, load_composition

COMPOSITION = {
    "name": "Loaded App",
    "targets": ["web", "android"],
    "root": {
        "id": "page",
        "capsuleId": "card",
        "children": [{"id": "go", "type": "button", "props": {"text": "Go"}}],
        "slots": {"footer": [{"id": "fine", "capsuleId": "text", "props": {"content": "x"}}]},
    },
    "theme": {"colors": {"primary": "#ff0000"}, "borderRadius": "sm"},
    "platformConfig": {"android": {"packageName": "dev.example"}},
}


class TestLoadComposition:
    def test_json(self, tmp_path: Path) -> None:
        path = tmp_path / "app.json"
        path.write_text(json.dumps(COMPOSITION), encoding="utf-8")

        composition = load_composition(path)

        assert composition.name == "Loaded App"
        assert composition.root.children[0].capsule_id == "button"
        assert composition.root.slots["footer"][0].id == "fine"
        assert composition.theme.border_radius == "sm"
        assert composition.platform_config["android"] == {"packageName": "dev.example"}

    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "app.yaml"
        path.write_text(
            "name: Yaml App\n"
            "capsules:\n"
            "  - id: hello\n"
            "    type: text\n"
            "    props:\n"
            "      content: Hi\n",
            encoding="utf-8",
        )
        composition = load_composition(path)
        assert composition.capsules[0].type == "text"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(CompositionLoadError, match="File not found"):
            load_composition(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CompositionLoadError, match="Invalid JSON"):
            load_composition(path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yml"
        path.write_text("name: [unclosed\n", encoding="utf-8")
        with pytest.raises(CompositionLoadError, match="Invalid YAML"):
            load_composition(path)

    def test_structure_error_has_key(self, tmp_path: Path) -> None:
        path = tmp_path / "app.json"
        path.write_text(json.dumps({"name": "X", "root": {"capsuleId": "card"}}), encoding="utf-8")
        with pytest.raises(CompositionLoadError) as exc_info:
            load_composition(path)
        assert exc_info.value.context.key == "root.id"

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(CompositionLoadError, match="mapping"):
            load_composition(path)


class TestLoadCapsules:
    def test_list_document(self, tmp_path: Path) -> None:
        path = tmp_path / "capsules.json"
        path.write_text(
            json.dumps([{"id": "badge", "name": "Badge", "platforms": {"web": {"framework": "react"}}}]),
            encoding="utf-8",
        )
        definitions = load_capsules(path)
        assert [d.id for d in definitions] == ["badge"]

    def test_mapping_document(self, tmp_path: Path) -> None:
        path = tmp_path / "capsules.yaml"
        path.write_text("capsules:\n  - id: chip\n    name: Chip\n", encoding="utf-8")
        assert load_capsules(path)[0].name == "Chip"

    def test_invalid_entry_names_index(self, tmp_path: Path) -> None:
        path = tmp_path / "capsules.json"
        path.write_text(json.dumps([{"id": "ok", "name": "Ok"}, {"name": "No id"}]), encoding="utf-8")
        with pytest.raises(CompositionLoadError) as exc_info:
            load_capsules(path)
        assert exc_info.value.context.key == "1.id"
