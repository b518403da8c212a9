"""Assemble publishable npm package directories from pre-built artifacts."""

__version__ = "0.1.0"

__all__ = ["__version__"]
