"""Originality verification for AI-generated text."""

from originality_guard.version import __version__

__all__ = ["__version__"]
