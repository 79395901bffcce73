"""Реестр топологий: ключ -> конструктор механизма.

Ключи совпадают с `kinemalearn.config.models.TOPOLOGY_NAMES`; генератор и
тесты обходят топологии только через этот реестр.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from kinemalearn.mechanics.four_bar import build_four_bar, build_parallelogram, build_watt_linkage
from kinemalearn.mechanics.higher_pairs import (
    build_cam_follower,
    build_folding_chair,
    build_quick_return,
    build_scotch_yoke,
)
from kinemalearn.mechanics.mechanism import Mechanism
from kinemalearn.mechanics.six_bar import build_coincident_six_bar, build_stephenson_six_bar, build_watt_six_bar
from kinemalearn.mechanics.sliders import (
    build_elliptical_trainer,
    build_hydraulic_lift,
    build_slider_crank,
    build_water_pump,
)

Builder = Callable[..., Mechanism]

BUILDERS: Mapping[str, Builder] = MappingProxyType(
    {
        "four_bar": build_four_bar,
        "slider_crank": build_slider_crank,
        "water_pump": build_water_pump,
        "folding_chair": build_folding_chair,
        "hydraulic_lift": build_hydraulic_lift,
        "elliptical_trainer": build_elliptical_trainer,
        "parallelogram": build_parallelogram,
        "watt_linkage": build_watt_linkage,
        "watt_six_bar": build_watt_six_bar,
        "stephenson_six_bar": build_stephenson_six_bar,
        "scotch_yoke": build_scotch_yoke,
        "quick_return": build_quick_return,
        "coincident_six_bar": build_coincident_six_bar,
        "cam_follower": build_cam_follower,
    }
)


def build(topology: str, params: Optional[Any] = None) -> Mechanism:
    """Собрать механизм по ключу; без params — номинальные размеры."""

    try:
        builder = BUILDERS[topology]
    except KeyError:
        raise KeyError(f"unknown topology {topology!r}; known: {sorted(BUILDERS)}") from None
    return builder() if params is None else builder(params)
