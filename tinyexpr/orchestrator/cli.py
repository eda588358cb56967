"""tinyexpr command-line interface."""

from __future__ import annotations

import argparse
import ast
import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Sequence

from tinyexpr.telemetry import logger
from tinyexpr.utils.config import PipelineConfig, load_pipeline_config

from . import orchestrator

_FORMAT_CHOICES = ("text", "json", "yaml")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tinyexpr", description="Parse, pretty-print and type check tinyexpr sources"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Optional path to a pipeline configuration YAML file.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        metavar="KEY=VALUE",
        help="Override configuration values using dot notation (e.g. parser.max_nesting=20).",
    )
    parser.add_argument(
        "--format",
        dest="fmt",
        choices=_FORMAT_CHOICES,
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log rejected inputs")

    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Check the given source strings")
    check_parser.add_argument("sources", nargs="+", help="Expression source text")

    subparsers.add_parser("samples", help="Check the configured sample sources")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.verbose:
        logger.set_level(logging.DEBUG)
    try:
        overrides = _parse_overrides(args.overrides)
        config = load_pipeline_config(args.config, overrides=overrides)
    except (OSError, ValueError) as exc:
        print(f"[tinyexpr] error: {exc}", file=sys.stderr)
        return 1

    if args.command == "check":
        return _cmd_check(args, config)
    if args.command == "samples":
        return _cmd_samples(args, config)

    parser.print_help()
    return 1


# ---------------------------------------------------------------------------
# Sub-commands


def _cmd_check(args: argparse.Namespace, config: PipelineConfig) -> int:
    reports = orchestrator.check_many(args.sources, config=config)
    print(orchestrator.render(reports, args.fmt))
    return 0


def _cmd_samples(args: argparse.Namespace, config: PipelineConfig) -> int:
    reports = orchestrator.run_samples(config)
    print(orchestrator.render(reports, args.fmt))
    return 0


# ---------------------------------------------------------------------------
# Helpers


def _parse_overrides(raw: Sequence[str] | None) -> Mapping[str, Any]:
    overrides: dict[str, Any] = {}
    if not raw:
        return overrides
    for item in raw:
        key, sep, value_text = item.partition("=")
        if not sep:
            raise ValueError(f"override '{item}' is missing '='")
        key_parts = [part for part in key.split(".") if part]
        if not key_parts:
            raise ValueError("override key must not be empty")
        value = _coerce_literal(value_text)
        cursor = overrides
        for part in key_parts[:-1]:
            cursor = cursor.setdefault(part, {})
            if not isinstance(cursor, dict):
                raise ValueError(f"override '{key}' conflicts with an existing value")
        cursor[key_parts[-1]] = value
    return overrides


def _coerce_literal(value: str) -> Any:
    try:
        return ast.literal_eval(value)
    except (ValueError, SyntaxError):
        return value


if __name__ == "__main__":  # pragma: no cover - module entry point
    raise SystemExit(main())
