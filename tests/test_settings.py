from __future__ import annotations

from pathlib import Path

import pytest

from roomgraph.exceptions import ConfigurationError
from roomgraph.geometry.contract import AREA_EPSILON, DEFAULT_SNAP_SIZE
from roomgraph.settings import LabelSettings, Settings


def test_defaults_match_graph_contract() -> None:
    settings = Settings()
    assert settings.graph.snap_size == DEFAULT_SNAP_SIZE
    assert settings.graph.area_epsilon == AREA_EPSILON
    assert settings.labels.text_height == 80.0
    assert settings.logging.level == "INFO"


def test_load_yaml(tmp_path: Path) -> None:
    path = tmp_path / "roomgraph.yaml"
    path.write_text(
        "graph:\n  snap_size: 0.5\nlabels:\n  text_height: 2.5\n  layer: ROOMS\nlogging:\n  level: debug\n",
        encoding="utf-8",
    )

    settings = Settings.load(path)

    assert settings.graph.snap_size == 0.5
    assert settings.graph.area_epsilon == AREA_EPSILON
    assert settings.labels.text_height == 2.5
    assert settings.labels.layer == "ROOMS"
    assert settings.logging.level == "DEBUG"


def test_load_uses_environment_variable(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "env.yaml"
    path.write_text("graph:\n  snap_size: 0.25\n", encoding="utf-8")
    monkeypatch.setenv("ROOMGRAPH_CONFIG", str(path))

    assert Settings.load().graph.snap_size == 0.25


def test_bundled_default_config_is_valid() -> None:
    path = Path(__file__).parent.parent / "config" / "default.yaml"
    settings = Settings.load(path)
    assert settings.graph.snap_size == DEFAULT_SNAP_SIZE


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError) as info:
        Settings.load(tmp_path / "nope.yaml")
    assert "nope.yaml" in info.value.details["path"]


def test_invalid_values_raise(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("graph:\n  snap_size: -1\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        Settings.load(path)


def test_non_mapping_root_raises(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        Settings.load(path)


def test_area_format_placeholders_checked() -> None:
    assert LabelSettings(area_format="#{index}: {area:.1f}").area_format.startswith("#")
    with pytest.raises(ValueError):
        LabelSettings(area_format="{perimeter}")
