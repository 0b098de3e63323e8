"""Helpers for building launcher workflows with built-in magic actions."""

__version__ = "0.4.0"

__all__ = ["__version__"]
