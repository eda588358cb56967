"""Utility helpers for loading YAML configuration files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Mapping

import yaml

from tinyexpr.dsl.grammar import DEFAULT_MAX_NESTING

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_MAX_NESTING",
    "PipelineConfig",
    "load_config",
    "load_pipeline_config",
]

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "configs" / "samples.yaml"


def load_config(path: str | Path) -> Any:
    """Return the parsed YAML document located at ``path``.

    Parses the document via :func:`yaml.safe_load` and raises a
    :class:`ValueError` if the result is not a mapping.  An empty document
    yields an empty dictionary.
    """

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"configuration file not found: {config_path}")
    raw_text = config_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise ValueError(f"failed to parse configuration: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("configuration root must be a mapping")
    return data


def _deep_update(base: Mapping[str, Any], updates: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``updates`` recursively merged."""

    result: dict[str, Any] = {key: value for key, value in base.items()}
    for key, value in updates.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = _deep_update(result[key], value)
        else:
            result[key] = value
    return result


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Settings for the parse/check pipeline and the bundled sample driver."""

    max_nesting: int | None = DEFAULT_MAX_NESTING
    samples: dict[str, tuple[str, ...]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "PipelineConfig":
        payload = dict(data or {})
        parser_section = payload.get("parser") or {}
        if not isinstance(parser_section, Mapping):
            raise ValueError("'parser' section must be a mapping")
        max_nesting = parser_section.get("max_nesting", DEFAULT_MAX_NESTING)
        if max_nesting is not None and (
            isinstance(max_nesting, bool) or not isinstance(max_nesting, int) or max_nesting < 1
        ):
            raise ValueError(f"parser.max_nesting must be a positive integer or null (got {max_nesting!r})")
        return cls(max_nesting=max_nesting, samples=cls._build_samples(payload.get("samples")))

    @staticmethod
    def _build_samples(data: Any) -> dict[str, tuple[str, ...]]:
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            raise ValueError("'samples' section must map group names to lists of sources")
        groups: dict[str, tuple[str, ...]] = {}
        for name, sources in data.items():
            if isinstance(sources, str) or not isinstance(sources, (list, tuple)):
                raise ValueError(f"sample group '{name}' must be a list of strings")
            if not all(isinstance(source, str) for source in sources):
                raise ValueError(f"sample group '{name}' must only contain strings")
            groups[str(name)] = tuple(sources)
        return groups

    def merge(self, overrides: Mapping[str, Any] | None) -> "PipelineConfig":
        if not overrides:
            return self
        return PipelineConfig.from_mapping(_deep_update(self.to_dict(), overrides))

    def to_dict(self) -> dict[str, Any]:
        return {
            "parser": {"max_nesting": self.max_nesting},
            "samples": {name: list(sources) for name, sources in self.samples.items()},
        }

    def iter_samples(self) -> Iterator[tuple[str, str]]:
        """Yield ``(group, source)`` pairs in configuration order."""

        for group, sources in self.samples.items():
            for source in sources:
                yield group, source


def load_pipeline_config(
    config_path: str | Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
) -> PipelineConfig:
    """Return a :class:`PipelineConfig` from ``config_path`` and overrides.

    Without an explicit path the bundled ``configs/samples.yaml`` is used when
    present; otherwise the built-in defaults apply.
    """

    data: Mapping[str, Any] | None = None
    if config_path is not None:
        data = load_config(config_path)
    elif DEFAULT_CONFIG_PATH.exists():
        data = load_config(DEFAULT_CONFIG_PATH)
    return PipelineConfig.from_mapping(data).merge(overrides)
