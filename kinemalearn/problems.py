"""Статические учебные задачи на подвижность (без анимации).

Для каждой задачи известны авторские n, j, Σf_i и ответ M. Пространственные
задачи (1.29) считаются с K = 6.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from kinemalearn.core.types import MobilityCounts


@dataclass(frozen=True)
class StaticProblem:
    id: str
    title: str
    description: str
    counts: MobilityCounts

    @property
    def is_spatial(self) -> bool:
        return self.counts.spatial


TEXTBOOK_PROBLEMS: Tuple[StaticProblem, ...] = (
    StaticProblem(
        "prob_1_6_pump",
        "Problem 1.6 (Water Pump)",
        "A vertical water pump mechanism. Determine the mobility.",
        MobilityCounts(n=4, j=4, sum_fi=4, m=1),
    ),
    StaticProblem(
        "prob_1_6_chair",
        "Problem 1.6 (Folding Chair)",
        "Folding chair mechanism with a pin-in-slot joint.",
        MobilityCounts(n=3, j=3, sum_fi=4, m=1),
    ),
    StaticProblem(
        "prob_1_9",
        "Problem 1.9 (Excavator)",
        "Excavator mechanism. Treat hydraulic cylinders as sliders in tubes.",
        MobilityCounts(n=11, j=14, sum_fi=14, m=2),
    ),
    StaticProblem(
        "prob_1_13a",
        "Problem 1.13a (Pin in Slot)",
        "Mechanism with a pin-in-slot joint.",
        MobilityCounts(n=3, j=3, sum_fi=4, m=1),
    ),
    StaticProblem(
        "prob_1_17_loader",
        "Problem 1.17 (Loader)",
        "Front end loader linkage.",
        MobilityCounts(n=9, j=11, sum_fi=11, m=2),
    ),
    StaticProblem(
        "prob_1_19",
        "Problem 1.19 (Wedge)",
        "Rolling contact / Wedge mechanism.",
        MobilityCounts(n=4, j=4, sum_fi=4, m=1),
    ),
    StaticProblem(
        "prob_1_14c",
        "Problem 1.14c (12-bar)",
        "Complex 12-bar linkage.",
        MobilityCounts(n=12, j=15, sum_fi=15, m=3),
    ),
    StaticProblem(
        "prob_1_29_a",
        "Problem 1.29a (Spatial RSSR)",
        "Spatial RSSR Mechanism. 2 Ground Revolutes, Coupler with 2 Spherical joints. (Use K=6). "
        "Note: M includes idle DOF.",
        # R + S + S + R = 1 + 3 + 3 + 1; один из двух DOF: холостое вращение шатуна
        MobilityCounts(n=4, j=4, sum_fi=8, m=2, spatial=True),
    ),
    StaticProblem(
        "prob_1_29_b",
        "Problem 1.29b (Spatial Slider)",
        "Spatial mechanism with slider. R-S-S-P loop. (Use K=6).",
        MobilityCounts(n=4, j=4, sum_fi=8, m=2, spatial=True),
    ),
)

_BY_ID: Mapping[str, StaticProblem] = MappingProxyType({p.id: p for p in TEXTBOOK_PROBLEMS})


def problem(problem_id: str) -> StaticProblem:
    try:
        return _BY_ID[problem_id]
    except KeyError:
        raise KeyError(f"unknown problem {problem_id!r}") from None
