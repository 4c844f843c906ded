"""Command implementations for the TangleSmith CLI."""

from __future__ import annotations

from .tangle import tangle


__all__ = ["tangle"]
