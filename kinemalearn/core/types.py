"""kinemalearn.core.types

Типы данных модели механизма: точка, сочленение (кинематическая пара), звено
и авторские числа подвижности.

Соглашение о координатах: экранная СК, x вправо, y вниз. "Верхняя" ветка
сборки — та, у которой y меньше.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Literal, NamedTuple, Optional, Tuple

from kinemalearn.core.validation import ensure_finite, ensure_in_range


JointKind = Literal["R", "P", "Cam", "PinSlot"]
LinkKind = Literal["binary", "ternary", "quaternary"]

JOINT_KINDS: Tuple[str, ...] = ("R", "P", "Cam", "PinSlot")

# f_i по умолчанию: низшие пары R/P дают 1, высшие (кулачок, палец в пазу) дают 2
DEFAULT_CONNECTIVITY: Dict[str, int] = {"R": 1, "P": 1, "Cam": 2, "PinSlot": 2}

_LINK_KINDS: Dict[int, LinkKind] = {2: "binary", 3: "ternary", 4: "quaternary"}


class Point(NamedTuple):
    x: float
    y: float

    def __repr__(self) -> str:
        return f"Point({self.x:.3f}, {self.y:.3f})"


@dataclass(frozen=True, slots=True)
class Joint:
    """Экземпляр кинематической пары.

    Атрибуты:
        id: ключ, уникальный в пределах механизма.
        kind: R / P / Cam / PinSlot.
        position: текущая точка; для подвижных сочленений меняется каждый шаг.
        ground: сочленение закреплено на стойке.
        connectivity: f_i; только для формулы подвижности, решатель его не читает.
            0 означает чисто визуальную точку звена (не пару).
        orientation: ось ползуна (P), поворот паза/кулачка (PinSlot/Cam), рад.
        is_driver: ведущее сочленение (не более одного на механизм).
    """

    id: str
    kind: JointKind
    position: Point
    ground: bool = False
    connectivity: Optional[int] = None
    orientation: Optional[float] = None
    is_driver: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("joint id must be non-empty")
        if self.kind not in JOINT_KINDS:
            raise ValueError(f"{self.id}: unknown joint kind {self.kind!r}")
        # frozen + slots: нормализуем через object.__setattr__
        object.__setattr__(self, "position", Point(float(self.position[0]), float(self.position[1])))
        ensure_finite(self.position.x, f"{self.id}.x")
        ensure_finite(self.position.y, f"{self.id}.y")
        if self.connectivity is None:
            object.__setattr__(self, "connectivity", DEFAULT_CONNECTIVITY[self.kind])
        ensure_in_range(self.connectivity, 0, 3, f"{self.id}.connectivity")

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    def moved_to(self, position: Point, orientation: Optional[float] = None) -> "Joint":
        """Копия сочленения в новой точке (ориентация меняется, если задана)."""

        if orientation is None:
            return replace(self, position=position)
        return replace(self, position=position, orientation=float(orientation))

    def __repr__(self) -> str:
        flags = "".join(("G" if self.ground else "", "*" if self.is_driver else ""))
        return f"Joint({self.id}:{self.kind}{flags} @ {self.position!r})"


@dataclass(frozen=True, slots=True)
class Link:
    """Твёрдое звено, соединяющее 2..4 сочленения."""

    id: str
    joints: Tuple[str, ...]
    ground: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "joints", tuple(self.joints))
        if len(self.joints) not in _LINK_KINDS:
            raise ValueError(f"{self.id}: link must connect 2..4 joints, got {len(self.joints)}")

    @property
    def kind(self) -> LinkKind:
        return _LINK_KINDS[len(self.joints)]


def gruebler_mobility(n: int, j: int, sum_fi: int, spatial: bool = False) -> int:
    """Формула Грюблера: M = K(n - j - 1) + Σf_i, K = 3 (плоский) или 6 (пространственный)."""

    k = 6 if spatial else 3
    return int(k * (n - j - 1) + sum_fi)


@dataclass(frozen=True, slots=True)
class MobilityCounts:
    """Авторские числа для анализа подвижности (n считает стойку как звено)."""

    n: int
    j: int
    sum_fi: int
    m: int
    spatial: bool = False

    @property
    def K(self) -> int:
        return 6 if self.spatial else 3

    def gruebler(self) -> int:
        return gruebler_mobility(self.n, self.j, self.sum_fi, spatial=self.spatial)

    def is_consistent(self) -> bool:
        return self.gruebler() == self.m
