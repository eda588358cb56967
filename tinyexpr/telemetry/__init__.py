"""Convenience exports for tinyexpr telemetry utilities."""

from . import logger

__all__ = ["logger"]
