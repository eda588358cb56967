"""Tests for YAML configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from tinyexpr.dsl.grammar import DEFAULT_MAX_NESTING
from tinyexpr.utils import config


def test_load_config_reads_mapping(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("parser:\n  max_nesting: 8\n", encoding="utf-8")

    assert config.load_config(path) == {"parser": {"max_nesting": 8}}


def test_load_config_empty_document(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert config.load_config(path) == {}


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        config.load_config(tmp_path / "absent.yaml")


@pytest.mark.parametrize("text", ["- 1\n- 2\n", "parser: [unclosed\n"])
def test_load_config_rejects_bad_documents(tmp_path: Path, text: str) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(text, encoding="utf-8")

    with pytest.raises(ValueError):
        config.load_config(path)


def test_pipeline_config_defaults() -> None:
    settings = config.PipelineConfig.from_mapping(None)

    assert settings.max_nesting == DEFAULT_MAX_NESTING
    assert settings.samples == {}
    assert list(settings.iter_samples()) == []


def test_pipeline_config_merge_applies_overrides() -> None:
    settings = config.PipelineConfig.from_mapping({"samples": {"good": ["1", "2"]}})
    merged = settings.merge({"parser": {"max_nesting": 3}})

    assert merged.max_nesting == 3
    assert list(merged.iter_samples()) == [("good", "1"), ("good", "2")]
    assert settings.merge(None) is settings


@pytest.mark.parametrize(
    "payload",
    [
        {"parser": {"max_nesting": 0}},
        {"parser": {"max_nesting": True}},
        {"parser": {"max_nesting": "deep"}},
        {"parser": ["max_nesting"]},
        {"samples": ["1"]},
        {"samples": {"good": "1"}},
        {"samples": {"good": [1]}},
    ],
)
def test_pipeline_config_validation(payload: dict) -> None:
    with pytest.raises(ValueError):
        config.PipelineConfig.from_mapping(payload)


def test_bundled_samples_are_loaded() -> None:
    settings = config.load_pipeline_config()

    assert list(settings.samples) == ["good", "bad"]
    assert "true | false" in settings.samples["bad"]


def test_pipeline_config_accepts_unlimited_nesting() -> None:
    settings = config.PipelineConfig.from_mapping({"parser": {"max_nesting": None}})

    assert settings.max_nesting is None
    assert settings.merge({"parser": {"max_nesting": 4}}).max_nesting == 4
    assert settings.to_dict()["parser"] == {"max_nesting": None}


def test_bundled_configuration_leaves_nesting_unlimited() -> None:
    assert config.load_pipeline_config().max_nesting is None
