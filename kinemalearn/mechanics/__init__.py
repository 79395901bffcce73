"""Кинематика положений: геометрия, модель механизма, библиотека топологий."""

from kinemalearn.mechanics.catalog import BUILDERS, build
from kinemalearn.mechanics.mechanism import GroundFrame, Mechanism, build_mechanism, hold, place

__all__ = [
    "BUILDERS",
    "GroundFrame",
    "Mechanism",
    "build",
    "build_mechanism",
    "hold",
    "place",
]
