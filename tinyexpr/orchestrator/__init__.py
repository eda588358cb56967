"""Public entry points for running sources through the tinyexpr pipeline."""

from tinyexpr.orchestrator.orchestrator import CheckReport, check, check_many, render, run_samples

__all__ = ["CheckReport", "check", "check_many", "render", "run_samples"]
