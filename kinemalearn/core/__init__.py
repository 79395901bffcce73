"""Core utilities: units, types, validation."""

from __future__ import annotations

__all__ = [
    "units",
    "types",
    "validation",
]
