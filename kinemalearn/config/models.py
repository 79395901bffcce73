from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from kinemalearn.core.units import TWO_PI
from kinemalearn.core.validation import ensure_in_range, ensure_non_negative


# Ключи реестра топологий (kinemalearn.mechanics.catalog)
TOPOLOGY_NAMES: Tuple[str, ...] = (
    "four_bar",
    "slider_crank",
    "water_pump",
    "folding_chair",
    "hydraulic_lift",
    "elliptical_trainer",
    "parallelogram",
    "watt_linkage",
    "watt_six_bar",
    "stephenson_six_bar",
    "scotch_yoke",
    "quick_return",
    "coincident_six_bar",
    "cam_follower",
)


@dataclass(frozen=True)
class AnimationConfig:
    speed: float = 0.02           # рад на тик (≈ 5 с на оборот при 60 кадрах/с)
    start_parameter: float = 0.0  # t после нового механизма

    def __post_init__(self) -> None:
        ensure_in_range(self.speed, 0.0, TWO_PI, "speed")
        ensure_in_range(self.start_parameter, 0.0, TWO_PI, "start_parameter")


@dataclass(frozen=True)
class GeneratorConfig:
    seed: Optional[int] = None
    jitter_range: float = 20.0    # полный разброс координат опор (±range/2)
    topologies: Tuple[str, ...] = TOPOLOGY_NAMES

    def __post_init__(self) -> None:
        ensure_non_negative(self.jitter_range, "jitter_range")
        if not self.topologies:
            raise ValueError("topologies must be non-empty")
        unknown = sorted(set(self.topologies) - set(TOPOLOGY_NAMES))
        if unknown:
            raise ValueError(f"unknown topologies: {unknown}")
