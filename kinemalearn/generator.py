"""Выбор и генерация механизмов.

Случайность только через инжектируемый `np.random.Generator`: при заданном
seed последовательность механизмов воспроизводима. Размеры разбрасываются
только у четырёхзвенника и кривошипно-ползунного механизма; остальные
топологии строятся с номинальными размерами учебных задач.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional

import logging

import numpy as np

from kinemalearn.config.mechanics import DEFAULT_FOUR_BAR, DEFAULT_SLIDER_CRANK, Vec2
from kinemalearn.config.models import GeneratorConfig
from kinemalearn.mechanics.catalog import BUILDERS
from kinemalearn.mechanics.mechanism import Mechanism

logger = logging.getLogger(__name__)


def jitter(rng: np.random.Generator, value: float, spread: float) -> float:
    """value + U(-spread/2, spread/2)."""

    return float(value + rng.uniform(-spread / 2.0, spread / 2.0))


def _jitter_vec2(rng: np.random.Generator, v: Vec2, spread: float) -> Vec2:
    return (jitter(rng, v[0], spread), jitter(rng, v[1], spread))


def sample_params(topology: str, rng: np.random.Generator, jitter_range: float = 20.0) -> Optional[Any]:
    """Размеры механизма для topology; None — номинальные размеры конструктора."""

    if topology == "four_bar":
        base = DEFAULT_FOUR_BAR
        return replace(
            base,
            pivot_a=_jitter_vec2(rng, base.pivot_a, jitter_range),
            pivot_d=_jitter_vec2(rng, base.pivot_d, jitter_range),
            crank=60.0 + float(rng.uniform(0.0, 20.0)),
            coupler=200.0 + float(rng.uniform(0.0, 50.0)),
            rocker=150.0 + float(rng.uniform(0.0, 50.0)),
        )
    if topology == "slider_crank":
        base = DEFAULT_SLIDER_CRANK
        return replace(
            base,
            pivot=_jitter_vec2(rng, base.pivot, jitter_range),
            crank=60.0 + float(rng.uniform(0.0, 20.0)),
            rod=180.0 + float(rng.uniform(0.0, 40.0)),
            offset=jitter(rng, 20.0, 30.0),
        )
    return None


class MechanismGenerator:
    def __init__(self, cfg: GeneratorConfig = GeneratorConfig(), rng: Optional[np.random.Generator] = None):
        self.cfg = cfg
        self.rng = rng if rng is not None else np.random.default_rng(cfg.seed)

    def build(self, topology: str) -> Mechanism:
        if topology not in BUILDERS:
            raise KeyError(f"unknown topology {topology!r}")
        params = sample_params(topology, self.rng, self.cfg.jitter_range)
        builder = BUILDERS[topology]
        mech = builder() if params is None else builder(params)
        logger.info("generated %s (%s)", mech.name, mech.id)
        return mech

    def pick_random_topology(self) -> Mechanism:
        names = list(self.cfg.topologies)
        return self.build(names[int(self.rng.integers(0, len(names)))])


def pick_random_topology(rng: Optional[np.random.Generator] = None) -> Mechanism:
    """Случайный механизм из всего реестра (равновероятно)."""

    return MechanismGenerator(rng=rng).pick_random_topology()
