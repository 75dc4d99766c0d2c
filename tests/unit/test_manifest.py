"""Tests for capsuleforge.toml loading."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from capsuleforge.core.errors import ConfigError
from capsuleforge.core.manifest import MANIFEST_NAME, load_manifest

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_toml(tmp_path: Path, content: str) -> Path:
    p = tmp_path / MANIFEST_NAME
    p.write_text(textwrap.dedent(content), encoding="utf-8")
    return p


# ---------------------------------------------------------------------------
# load_manifest tests
# ---------------------------------------------------------------------------


class TestLoadManifest:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        mf = load_manifest(tmp_path / MANIFEST_NAME)
        assert mf.compiler.targets == ["web"]
        assert mf.compiler.timeout_seconds is None
        assert mf.compiler.output_dir == "build"
        assert mf.capsules.include_builtin is True
        assert mf.logging.level == "WARNING"
        assert mf.root == tmp_path.resolve()

    def test_full_manifest(self, tmp_path: Path) -> None:
        path = _write_toml(
            tmp_path,
            """\
            [project]
            name = "my-app"
            composition = "app.yaml"
            theme = "midnight"

            [compiler]
            targets = ["web", "ios"]
            timeout_seconds = 30
            output_dir = "out"

            [capsules]
            paths = ["capsules/extra.json"]

            [logging]
            level = "info"
            """,
        )
        mf = load_manifest(path)
        assert mf.name == "my-app"
        assert mf.theme == "midnight"
        assert mf.compiler.targets == ["web", "ios"]
        assert mf.compiler.timeout_seconds == 30.0
        assert mf.compiler.output_dir == "out"
        assert mf.capsules.paths == ["capsules/extra.json"]
        assert mf.logging.level == "INFO"
        assert mf.resolve(mf.composition) == (tmp_path / "app.yaml").resolve()

    def test_malformed_toml(self, tmp_path: Path) -> None:
        path = _write_toml(tmp_path, "[compiler\ntargets = ")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_manifest(path)

    def test_wrong_type_names_key(self, tmp_path: Path) -> None:
        path = _write_toml(tmp_path, '[compiler]\ntargets = "web"\n')
        with pytest.raises(ConfigError) as exc_info:
            load_manifest(path)
        assert exc_info.value.context.key == "compiler.targets"

    def test_non_positive_timeout(self, tmp_path: Path) -> None:
        path = _write_toml(tmp_path, "[compiler]\ntimeout_seconds = 0\n")
        with pytest.raises(ConfigError, match="positive"):
            load_manifest(path)

    def test_unknown_target_is_kept(self, tmp_path: Path) -> None:
        path = _write_toml(tmp_path, '[compiler]\ntargets = ["web", "watchos"]\n')
        assert load_manifest(path).compiler.targets == ["web", "watchos"]
