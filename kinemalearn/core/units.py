"""kinemalearn.core.units

Угловые единицы и константы.

Принцип: внутри решателя все углы — в радианах. Градусы встречаются только
в авторских константах (например, ось ползуна 90°) и сразу переводятся.
"""

from __future__ import annotations

import math

TWO_PI: float = 2.0 * math.pi
HALF_PI: float = 0.5 * math.pi

DEG_TO_RAD: float = math.pi / 180.0
RAD_TO_DEG: float = 180.0 / math.pi

# Направления осей в экранной СК (y вниз)
HORIZONTAL: float = 0.0
VERTICAL: float = HALF_PI


def to_rad(deg: float) -> float:
    return float(deg) * DEG_TO_RAD


def to_deg(rad: float) -> float:
    return float(rad) * RAD_TO_DEG
