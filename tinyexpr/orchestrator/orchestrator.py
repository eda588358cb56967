"""High-level helpers sequencing parse, pretty-print and type inference."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import yaml

from tinyexpr.dsl import grammar, printer, type_system
from tinyexpr.telemetry.logger import get_logger
from tinyexpr.utils.config import PipelineConfig

_LOGGER = get_logger("tinyexpr.orchestrator")

SEPARATOR = "========"


@dataclass(frozen=True, slots=True)
class CheckReport:
    """Outcome of running one source string through the pipeline."""

    source: str
    pretty: str
    type: type_system.Type
    group: str | None = None

    @property
    def well_typed(self) -> bool:
        return self.type is not type_system.Type.ILL_TYPED

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "source": self.source,
            "pretty": self.pretty,
            "type": type_system.format_type(self.type),
        }
        if self.group is not None:
            payload["group"] = self.group
        return payload

    def to_text(self) -> str:
        return "\n".join(
            (
                f"Original: {self.source}",
                f"Parsed  : {self.pretty}",
                f" {type_system.format_type(self.type)}",
                SEPARATOR,
            )
        )


def check(
    source: str,
    *,
    max_nesting: int | None = grammar.DEFAULT_MAX_NESTING,
    group: str | None = None,
) -> CheckReport:
    """Parse ``source`` once, then print and type the resulting tree."""

    expr = grammar.parse(source, max_nesting=max_nesting)
    return CheckReport(
        source=source,
        pretty=printer.pretty(expr),
        type=type_system.infer(expr),
        group=group,
    )


def check_many(sources: Iterable[str], *, config: PipelineConfig) -> list[CheckReport]:
    reports = [check(source, max_nesting=config.max_nesting) for source in sources]
    _LOGGER.info("checked %d source(s)", len(reports))
    return reports


def run_samples(config: PipelineConfig) -> list[CheckReport]:
    """Check every configured sample, tagging reports with their group name."""

    reports = [
        check(source, max_nesting=config.max_nesting, group=group)
        for group, source in config.iter_samples()
    ]
    _LOGGER.info("checked %d sample(s) in %d group(s)", len(reports), len(config.samples))
    return reports


def render(reports: Sequence[CheckReport], fmt: str = "text") -> str:
    """Render ``reports`` as ``text``, ``json`` or ``yaml``."""

    if fmt == "json":
        return json.dumps([report.to_dict() for report in reports], indent=2)
    if fmt == "yaml":
        return yaml.safe_dump(
            [report.to_dict() for report in reports], sort_keys=False, allow_unicode=True
        )
    if fmt != "text":
        raise ValueError(f"unknown output format '{fmt}'")
    lines: list[str] = []
    current_group: str | None = None
    for report in reports:
        if report.group is not None and report.group != current_group:
            current_group = report.group
            lines.append(f" {current_group.upper()} ")
        lines.append(report.to_text())
    return "\n".join(lines)


__all__ = ["CheckReport", "SEPARATOR", "check", "check_many", "render", "run_samples"]
