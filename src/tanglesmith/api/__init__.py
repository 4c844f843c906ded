"""Facade aggregating the high-level TangleSmith entry points."""

from __future__ import annotations

from .pipeline import TangleResult, TangleSettings, tangle_document, tangle_file


__all__ = [
    "TangleResult",
    "TangleSettings",
    "tangle_document",
    "tangle_file",
]
