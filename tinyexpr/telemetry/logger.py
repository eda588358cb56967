"""Logging helpers shared by the tinyexpr pipeline and its command line.

Configuration comes from ``configs/logging.yaml`` when it exists.  A missing,
unreadable or malformed file never stops the pipeline: the built-in layout is
used instead and the problem is reported once logging is up.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from threading import RLock
from typing import Any, Mapping

import yaml

PACKAGE_LOGGER = "tinyexpr"

LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "configs" / "logging.yaml"

_CONFIG_LOCK = RLock()
_CONFIGURED = False

_DEFAULT_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "formatter": "standard",
        }
    },
    "root": {
        "level": "WARNING",
        "handlers": ["console"],
    },
    "loggers": {
        PACKAGE_LOGGER: {
            "level": "INFO",
            "handlers": ["console"],
            "propagate": False,
        }
    },
}

_DICT_SECTIONS = ("formatters", "handlers", "loggers")
_SCALAR_SECTIONS = ("version", "disable_existing_loggers", "root")


def load_logging_config(path: Path = LOGGING_CONFIG_PATH) -> tuple[dict[str, Any], str | None]:
    """Return ``(dictConfig payload, problem)`` for the YAML file at ``path``.

    Sections of the file are layered over the built-in layout one entry at a
    time, so a file that only tunes ``loggers.tinyexpr`` keeps the default
    console handler.  ``problem`` describes why the file was ignored, if it was.
    """

    merged = {key: _copy(value) for key, value in _DEFAULT_CONFIG.items()}
    if not path.exists():
        return merged, None
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        return merged, f"could not read {path.name}: {exc}"
    if data is None:
        return merged, None
    if not isinstance(data, Mapping):
        return merged, f"{path.name} must contain a mapping, got {type(data).__name__}"
    for key in _SCALAR_SECTIONS:
        if key in data:
            merged[key] = data[key]
    for key in _DICT_SECTIONS:
        section = data.get(key)
        if isinstance(section, Mapping):
            merged[key].update(section)
    return merged, None


def _copy(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _copy(item) for key, item in value.items()}
    return value


def configure(path: Path | None = None, *, force: bool = False) -> None:
    """Configure logging once; ``force`` re-applies it (optionally from ``path``)."""

    global _CONFIGURED
    with _CONFIG_LOCK:
        if _CONFIGURED and not force:
            return
        payload, problem = load_logging_config(path or LOGGING_CONFIG_PATH)
        logging.config.dictConfig(payload)
        _CONFIGURED = True
    if problem is not None:
        logging.getLogger(f"{PACKAGE_LOGGER}.telemetry").warning(
            "using built-in logging setup: %s", problem
        )


def set_level(level: int | str) -> None:
    """Adjust the package logger level (used by ``--verbose``)."""

    configure()
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger configured via ``configs/logging.yaml``."""

    if not isinstance(name, str) or not name:
        raise ValueError("logger name must be a non-empty string")
    configure()
    return logging.getLogger(name)


__all__ = ["LOGGING_CONFIG_PATH", "configure", "get_logger", "load_logging_config", "set_level"]
