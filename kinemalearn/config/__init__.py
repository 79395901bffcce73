"""Конфиги kinemalearn.

- размеры топологий: `kinemalearn.config.mechanics`;
- анимация и генератор: `kinemalearn.config.models`.
"""

from __future__ import annotations

from .mechanics import (  # noqa: F401
    DEFAULT_CAM_FOLLOWER,
    DEFAULT_COINCIDENT_SIX_BAR,
    DEFAULT_ELLIPTICAL_TRAINER,
    DEFAULT_FOLDING_CHAIR,
    DEFAULT_FOUR_BAR,
    DEFAULT_HYDRAULIC_LIFT,
    DEFAULT_PARALLELOGRAM,
    DEFAULT_QUICK_RETURN,
    DEFAULT_SCOTCH_YOKE,
    DEFAULT_SLIDER_CRANK,
    DEFAULT_STEPHENSON_SIX_BAR,
    DEFAULT_WATER_PUMP,
    DEFAULT_WATT_LINKAGE,
    DEFAULT_WATT_SIX_BAR,
    CamFollowerParams,
    CoincidentSixBarParams,
    EllipticalTrainerParams,
    FoldingChairParams,
    FourBarParams,
    HydraulicLiftParams,
    ParallelogramParams,
    QuickReturnParams,
    ScotchYokeParams,
    SliderCrankParams,
    StephensonSixBarParams,
    WaterPumpParams,
    WattLinkageParams,
    WattSixBarParams,
)
from .models import TOPOLOGY_NAMES, AnimationConfig, GeneratorConfig  # noqa: F401

__all__ = [
    "FourBarParams",
    "SliderCrankParams",
    "WaterPumpParams",
    "FoldingChairParams",
    "HydraulicLiftParams",
    "EllipticalTrainerParams",
    "ParallelogramParams",
    "WattLinkageParams",
    "WattSixBarParams",
    "StephensonSixBarParams",
    "ScotchYokeParams",
    "QuickReturnParams",
    "CoincidentSixBarParams",
    "CamFollowerParams",
    "DEFAULT_FOUR_BAR",
    "DEFAULT_SLIDER_CRANK",
    "DEFAULT_WATER_PUMP",
    "DEFAULT_FOLDING_CHAIR",
    "DEFAULT_HYDRAULIC_LIFT",
    "DEFAULT_ELLIPTICAL_TRAINER",
    "DEFAULT_PARALLELOGRAM",
    "DEFAULT_WATT_LINKAGE",
    "DEFAULT_WATT_SIX_BAR",
    "DEFAULT_STEPHENSON_SIX_BAR",
    "DEFAULT_SCOTCH_YOKE",
    "DEFAULT_QUICK_RETURN",
    "DEFAULT_COINCIDENT_SIX_BAR",
    "DEFAULT_CAM_FOLLOWER",
    "TOPOLOGY_NAMES",
    "AnimationConfig",
    "GeneratorConfig",
]
