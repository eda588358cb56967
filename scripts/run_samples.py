#!/usr/bin/env python3
"""Run the bundled sample sources through the tinyexpr pipeline."""

from __future__ import annotations

import argparse
from pathlib import Path

from tinyexpr.orchestrator import cli

_FORMAT_CHOICES = ("text", "json", "yaml")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check the configured tinyexpr samples")
    parser.add_argument("--config", type=Path, help="Optional pipeline configuration file")
    parser.add_argument(
        "--set", dest="overrides", action="append", help="Configuration overrides (key=value)"
    )
    parser.add_argument("--format", dest="fmt", choices=_FORMAT_CHOICES, help="Output format")
    parser.add_argument("--verbose", action="store_true", help="Log rejected inputs")

    args = parser.parse_args(argv)

    cli_args: list[str] = []
    if args.config:
        cli_args.extend(["--config", str(args.config)])
    for override in args.overrides or ():
        cli_args.extend(["--set", override])
    if args.fmt:
        cli_args.extend(["--format", args.fmt])
    if args.verbose:
        cli_args.append("--verbose")

    cli_args.append("samples")
    return cli.main(cli_args)


if __name__ == "__main__":  # pragma: no cover - script entry point
    raise SystemExit(main())
