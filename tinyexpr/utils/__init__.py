"""Shared helpers (configuration loading)."""
