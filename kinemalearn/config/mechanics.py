"""Размеры топологий механизмов (плоская 2D-модель, экранные единицы).

Этот модуль намеренно является data-only конфигом:
- координаты опор (ground pivots) в мировой СК;
- постоянные длины звеньев;
- законы ведущего звена для качающихся механизмов (центр и амплитуда).

Значения по умолчанию — номинальные размеры учебных задач. Рандомизация
размеров живёт в `kinemalearn.generator`, сами решатели детерминированы.

Соглашение о координатах (2D): x вправо, y вниз (экранная СК).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
import math

from kinemalearn.core.units import to_rad
from kinemalearn.core.validation import ensure_in_range, ensure_positive


Vec2 = Tuple[float, float]


def _is_finite(x: float) -> bool:
    return math.isfinite(float(x))


def _check_vec2(name: str, v: Vec2) -> None:
    x, y = float(v[0]), float(v[1])
    if not (_is_finite(x) and _is_finite(y)):
        raise ValueError(f"{name} must contain finite numbers; got {v}")


@dataclass(frozen=True)
class FourBarParams:
    """Шарнирный четырёхзвенник: кривошип A-B, шатун B-C, коромысло C-D."""

    pivot_a: Vec2 = (150.0, 300.0)
    pivot_d: Vec2 = (450.0, 300.0)
    crank: float = 60.0
    coupler: float = 200.0
    rocker: float = 150.0

    def __post_init__(self) -> None:
        _check_vec2("pivot_a", self.pivot_a)
        _check_vec2("pivot_d", self.pivot_d)
        ensure_positive(self.crank, "crank")
        ensure_positive(self.coupler, "coupler")
        ensure_positive(self.rocker, "rocker")


@dataclass(frozen=True)
class SliderCrankParams:
    """Кривошипно-ползунный механизм с горизонтальной направляющей.

    offset — смещение направляющей вверх от оси кривошипа (дезаксиал).
    """

    pivot: Vec2 = (150.0, 250.0)
    crank: float = 60.0
    rod: float = 180.0
    offset: float = 20.0
    slider_start: float = 150.0  # начальная раскладка ползуна по x от опоры

    def __post_init__(self) -> None:
        _check_vec2("pivot", self.pivot)
        ensure_positive(self.crank, "crank")
        ensure_positive(self.rod, "rod")
        if abs(self.offset) + self.crank >= self.rod:
            raise ValueError("rod must exceed crank + |offset| so that the slider never detaches")


@dataclass(frozen=True)
class WaterPumpParams:
    """Вертикальный кривошипно-ползунный механизм (задача 1.6)."""

    pivot: Vec2 = (250.0, 100.0)
    crank: float = 60.0
    rod: float = 220.0
    piston_x: float = 250.0
    piston_drop: float = 200.0  # начальная раскладка поршня ниже опоры

    def __post_init__(self) -> None:
        _check_vec2("pivot", self.pivot)
        ensure_positive(self.crank, "crank")
        ensure_positive(self.rod, "rod")
        ensure_positive(self.piston_drop, "piston_drop")


@dataclass(frozen=True)
class FoldingChairParams:
    """Складной стул: спинка на опоре, сиденье на второй опоре, палец в пазу."""

    backrest_pivot: Vec2 = (200.0, 400.0)
    seat_pivot: Vec2 = (350.0, 400.0)
    pin_distance: float = 150.0
    rest_angle: float = to_rad(-60.0)
    swing: float = 0.5  # амплитуда качания спинки, рад

    def __post_init__(self) -> None:
        _check_vec2("backrest_pivot", self.backrest_pivot)
        _check_vec2("seat_pivot", self.seat_pivot)
        ensure_positive(self.pin_distance, "pin_distance")
        ensure_in_range(self.swing, 0.0, math.pi, "swing")


@dataclass(frozen=True)
class HydraulicLiftParams:
    """Гидроподъёмник: обращённый кривошипно-ползунный механизм (задача 1.12).

    Цилиндр — это два звена (корпус + шток), соединённые P-парой.
    piston_ratio — доля длины цилиндра, на которой рисуется P-пара.
    """

    boom_pivot: Vec2 = (400.0, 350.0)
    cylinder_pivot: Vec2 = (250.0, 350.0)
    mount_distance: float = 100.0
    rest_angle: float = to_rad(-120.0)  # стрела вверх-влево (экранная СК)
    swing: float = 0.5
    piston_ratio: float = 0.6

    def __post_init__(self) -> None:
        _check_vec2("boom_pivot", self.boom_pivot)
        _check_vec2("cylinder_pivot", self.cylinder_pivot)
        ensure_positive(self.mount_distance, "mount_distance")
        ensure_in_range(self.swing, 0.0, math.pi, "swing")
        ensure_in_range(self.piston_ratio, 0.0, 1.0, "piston_ratio")


@dataclass(frozen=True)
class EllipticalTrainerParams:
    """Эллиптический тренажёр: кривошип + длинный шатун + ролик на дорожке (задача 1.7)."""

    crank_pivot: Vec2 = (150.0, 350.0)
    track_y: float = 400.0
    crank: float = 50.0
    coupler: float = 300.0

    def __post_init__(self) -> None:
        _check_vec2("crank_pivot", self.crank_pivot)
        ensure_positive(self.crank, "crank")
        ensure_positive(self.coupler, "coupler")
        if abs(self.track_y - self.crank_pivot[1]) + self.crank >= self.coupler:
            raise ValueError("coupler must reach the track for every crank angle")


@dataclass(frozen=True)
class ParallelogramParams:
    """Параллелограммный механизм (задача 1.5): шатун = расстояние между опорами."""

    pivot_a: Vec2 = (200.0, 300.0)
    pivot_d: Vec2 = (400.0, 300.0)
    crank: float = 100.0

    def __post_init__(self) -> None:
        _check_vec2("pivot_a", self.pivot_a)
        _check_vec2("pivot_d", self.pivot_d)
        ensure_positive(self.crank, "crank")

    @property
    def coupler(self) -> float:
        return math.hypot(self.pivot_d[0] - self.pivot_a[0], self.pivot_d[1] - self.pivot_a[1])


@dataclass(frozen=True)
class WattLinkageParams:
    """Прямолинейный механизм Уатта (задача 1.2): симметричное двухкоромысловое."""

    pivot_a: Vec2 = (150.0, 250.0)
    pivot_d: Vec2 = (450.0, 250.0)
    arm: float = 120.0
    coupler: float = 100.0
    rest_angle: float = -0.5
    swing: float = 0.8

    def __post_init__(self) -> None:
        _check_vec2("pivot_a", self.pivot_a)
        _check_vec2("pivot_d", self.pivot_d)
        ensure_positive(self.arm, "arm")
        ensure_positive(self.coupler, "coupler")
        ensure_in_range(self.swing, 0.0, math.pi, "swing")


@dataclass(frozen=True)
class WattSixBarParams:
    """Шестизвенник Уатта II: два четырёхзвенника последовательно.

    Тернарное звено L4 вращается на опоре B; шарнир J5 задан длиной от B и
    углом от направления B->J3.
    """

    pivot_a: Vec2 = (100.0, 300.0)
    pivot_b: Vec2 = (250.0, 300.0)
    pivot_c: Vec2 = (400.0, 300.0)
    crank: float = 50.0
    coupler: float = 140.0
    ternary_j3: float = 80.0
    ternary_j5: float = 70.0
    ternary_angle: float = 1.0
    coupler_2: float = 140.0
    rocker_2: float = 80.0

    def __post_init__(self) -> None:
        for name in ("pivot_a", "pivot_b", "pivot_c"):
            _check_vec2(name, getattr(self, name))
        for name in ("crank", "coupler", "ternary_j3", "ternary_j5", "coupler_2", "rocker_2"):
            ensure_positive(getattr(self, name), name)


@dataclass(frozen=True)
class StephensonSixBarParams:
    """Шестизвенник Стефенсона III: тернарное звено — плавающий шатун L3."""

    pivot_a: Vec2 = (150.0, 300.0)
    pivot_b: Vec2 = (350.0, 300.0)
    pivot_c: Vec2 = (500.0, 200.0)
    crank: float = 60.0
    coupler: float = 220.0
    rocker: float = 120.0
    ternary_j5: float = 100.0
    ternary_angle: float = -0.5
    coupler_2: float = 180.0
    rocker_2: float = 100.0

    def __post_init__(self) -> None:
        for name in ("pivot_a", "pivot_b", "pivot_c"):
            _check_vec2(name, getattr(self, name))
        for name in ("crank", "coupler", "rocker", "ternary_j5", "coupler_2", "rocker_2"):
            ensure_positive(getattr(self, name), name)


@dataclass(frozen=True)
class ScotchYokeParams:
    """Кулиса (Scotch yoke): вращение -> гармоническое возвратно-поступательное."""

    pivot: Vec2 = (200.0, 250.0)
    crank: float = 80.0
    slider_offset: float = 100.0  # начальная раскладка ползуна правее пальца

    def __post_init__(self) -> None:
        _check_vec2("pivot", self.pivot)
        ensure_positive(self.crank, "crank")


@dataclass(frozen=True)
class QuickReturnParams:
    """Кулисный механизм быстрого возврата: палец кривошипа в пазу кулисы."""

    crank_pivot: Vec2 = (250.0, 300.0)
    lever_pivot: Vec2 = (250.0, 200.0)
    crank: float = 60.0
    lever: float = 200.0

    def __post_init__(self) -> None:
        _check_vec2("crank_pivot", self.crank_pivot)
        _check_vec2("lever_pivot", self.lever_pivot)
        ensure_positive(self.crank, "crank")
        ensure_positive(self.lever, "lever")
        gap = math.hypot(
            self.crank_pivot[0] - self.lever_pivot[0],
            self.crank_pivot[1] - self.lever_pivot[1],
        )
        if gap <= self.crank:
            # палец прошёл бы через опору кулисы: угол кулисы не определён
            raise ValueError("lever pivot must lie outside the crank circle")


@dataclass(frozen=True)
class CoincidentSixBarParams:
    """Два кривошипа на общий ползун; три звена сходятся в одном пальце."""

    pivot_1: Vec2 = (150.0, 350.0)
    pivot_2: Vec2 = (450.0, 350.0)
    slider_x: float = 300.0
    slider_start_y: float = 150.0
    crank: float = 80.0
    rod: float = 220.0

    def __post_init__(self) -> None:
        _check_vec2("pivot_1", self.pivot_1)
        _check_vec2("pivot_2", self.pivot_2)
        ensure_positive(self.crank, "crank")
        ensure_positive(self.rod, "rod")


@dataclass(frozen=True)
class CamFollowerParams:
    """Дисковый кулачок с толкателем на вертикальной направляющей."""

    pivot: Vec2 = (300.0, 300.0)
    base_radius: float = 50.0
    eccentricity: float = 30.0
    guide_height: float = 150.0

    def __post_init__(self) -> None:
        _check_vec2("pivot", self.pivot)
        ensure_positive(self.base_radius, "base_radius")
        ensure_positive(self.eccentricity, "eccentricity")
        ensure_positive(self.guide_height, "guide_height")


DEFAULT_FOUR_BAR = FourBarParams()
DEFAULT_SLIDER_CRANK = SliderCrankParams()
DEFAULT_WATER_PUMP = WaterPumpParams()
DEFAULT_FOLDING_CHAIR = FoldingChairParams()
DEFAULT_HYDRAULIC_LIFT = HydraulicLiftParams()
DEFAULT_ELLIPTICAL_TRAINER = EllipticalTrainerParams()
DEFAULT_PARALLELOGRAM = ParallelogramParams()
DEFAULT_WATT_LINKAGE = WattLinkageParams()
DEFAULT_WATT_SIX_BAR = WattSixBarParams()
DEFAULT_STEPHENSON_SIX_BAR = StephensonSixBarParams()
DEFAULT_SCOTCH_YOKE = ScotchYokeParams()
DEFAULT_QUICK_RETURN = QuickReturnParams()
DEFAULT_COINCIDENT_SIX_BAR = CoincidentSixBarParams()
DEFAULT_CAM_FOLLOWER = CamFollowerParams()
