"""Механизмы с ползуном: один конец шатуна ограничен прямой (ось P-пары).

Точка шатун–ползун находится либо прямым решением квадратного уравнения
против направляющей, либо общим `intersect_line` — выбор сделан для каждой
топологии отдельно.

Ground P-сочленение — это ползун на неподвижной направляющей: направляющая
(точка + orientation) неподвижна, а сама точка сочленения едет вдоль неё
вместе с ползуном.
"""

from __future__ import annotations

import math

from kinemalearn.config.mechanics import (
    DEFAULT_ELLIPTICAL_TRAINER,
    DEFAULT_HYDRAULIC_LIFT,
    DEFAULT_SLIDER_CRANK,
    DEFAULT_WATER_PUMP,
    EllipticalTrainerParams,
    HydraulicLiftParams,
    SliderCrankParams,
    WaterPumpParams,
)
from kinemalearn.core.types import Joint, Link, MobilityCounts, Point
from kinemalearn.core.units import HORIZONTAL, VERTICAL
from kinemalearn.mechanics.geometry import angle_of, distance, intersect_line, polar
from kinemalearn.mechanics.mechanism import GroundFrame, Joints, Mechanism, build_mechanism, hold, place

SLIDER_COUNTS = MobilityCounts(n=4, j=4, sum_fi=4, m=1)


def build_slider_crank(params: SliderCrankParams = DEFAULT_SLIDER_CRANK) -> Mechanism:
    """Кривошипно-ползунный механизм: вращение -> возвратно-поступательное.

    Направляющая горизонтальна и смещена на offset вверх от опоры кривошипа.
    Ползун берётся правее пальца кривошипа (+sqrt).
    """

    a = Point(*params.pivot)
    crank, rod, offset = params.crank, params.rod, params.offset

    def solve(t: float, joints: Joints) -> Joints:
        pivot = GroundFrame(joints)["J1"]
        b = polar(pivot, crank, t)

        slider_y = pivot.y - offset
        dy = slider_y - b.y
        dx_sq = rod * rod - dy * dy
        if dx_sq < 0:
            return hold(joints, "slider_crank", t)

        slider = Point(b.x + math.sqrt(dx_sq), slider_y)
        return place(joints, {"J2": b, "J3": slider, "J4": slider})

    slider0 = Point(a.x + params.slider_start, a.y - offset)
    joints = (
        Joint("J1", "R", a, ground=True, is_driver=True),
        Joint("J2", "R", Point(a.x, a.y - crank)),
        Joint("J3", "R", slider0),
        Joint("J4", "P", slider0, ground=True, orientation=HORIZONTAL),
    )
    links = (
        Link("L1", ("J1", "J4"), ground=True),
        Link("L2", ("J1", "J2")),
        Link("L3", ("J2", "J3")),
        Link("L4", ("J3", "J4")),
    )
    return build_mechanism(
        "slider_crank",
        "Slider-Crank",
        "Converts rotational motion into reciprocating linear motion.",
        joints,
        links,
        SLIDER_COUNTS,
        solve,
    )


def build_water_pump(params: WaterPumpParams = DEFAULT_WATER_PUMP) -> Mechanism:
    """Водяной насос (задача 1.6): вертикальный кривошипно-ползунный механизм."""

    a = Point(*params.pivot)
    crank, rod, piston_x = params.crank, params.rod, params.piston_x
    guide = Point(piston_x, 0.0)

    def solve(t: float, joints: Joints) -> Joints:
        pivot = GroundFrame(joints)["J1"]
        b = polar(pivot, crank, t)

        if intersect_line(b, rod, guide, VERTICAL) is None:
            return hold(joints, "water_pump", t)

        # TODO: решить ветку поршня явно. Общий intersect_line отдаёт только
        # корень с +sqrt; здесь y пересчитывается напрямую (поршень ниже пальца),
        # что совпадает с этим корнем, но выбор ветки не проверен для смещённых
        # направляющих.
        dx = piston_x - b.x
        dy_sq = rod * rod - dx * dx
        if dy_sq < 0:
            return hold(joints, "water_pump", t)

        piston = Point(piston_x, b.y + math.sqrt(dy_sq))
        return place(joints, {"J2": b, "J3": piston, "J4": piston})

    piston0 = Point(piston_x, a.y + params.piston_drop)
    joints = (
        Joint("J1", "R", a, ground=True, is_driver=True),
        Joint("J2", "R", Point(a.x + crank, a.y)),
        Joint("J3", "R", piston0),
        Joint("J4", "P", piston0, ground=True, orientation=VERTICAL),
    )
    links = (
        Link("L1", ("J1", "J4"), ground=True),
        Link("L2", ("J1", "J2")),
        Link("L3", ("J2", "J3")),
        Link("L4", ("J3", "J4")),
    )
    return build_mechanism(
        "water_pump",
        "Water Pump (Prob 1.6)",
        "Vertical Slider-Crank mechanism. n=4, j=4, M=1.",
        joints,
        links,
        SLIDER_COUNTS,
        solve,
    )


def build_elliptical_trainer(params: EllipticalTrainerParams = DEFAULT_ELLIPTICAL_TRAINER) -> Mechanism:
    """Эллиптический тренажёр (задача 1.7).

    Задний кривошип, длинный шатун (педаль), ролик на горизонтальной дорожке.
    Точка педали на шатуне описывает эллипсоподобную кривую.
    """

    a = Point(*params.crank_pivot)
    crank, coupler, track_y = params.crank, params.coupler, params.track_y

    def solve(t: float, joints: Joints) -> Joints:
        b = polar(GroundFrame(joints)["J1"], crank, t)

        dy = track_y - b.y
        dx_sq = coupler * coupler - dy * dy
        if dx_sq < 0:
            return hold(joints, "elliptical_trainer", t)

        roller = Point(b.x + math.sqrt(dx_sq), track_y)
        return place(joints, {"J2": b, "J3": roller, "J4": roller})

    roller0 = Point(a.x + 200.0, track_y)
    joints = (
        Joint("J1", "R", a, ground=True, is_driver=True),
        Joint("J2", "R", Point(a.x, a.y - crank)),
        Joint("J3", "R", roller0),
        Joint("J4", "P", roller0, ground=True, orientation=HORIZONTAL),
    )
    links = (
        Link("L1", ("J1", "J4"), ground=True),
        Link("L2", ("J1", "J2")),
        Link("L3", ("J2", "J3")),
        Link("L4", ("J3", "J4")),
    )
    return build_mechanism(
        "elliptical_trainer",
        "Elliptical Trainer (Prob 1.7)",
        "Slider-Crank mechanism. Coupler creates elliptical motion for foot.",
        joints,
        links,
        SLIDER_COUNTS,
        solve,
    )


def build_hydraulic_lift(params: HydraulicLiftParams = DEFAULT_HYDRAULIC_LIFT) -> Mechanism:
    """Гидроподъёмник (задачи 1.12 / 1.14): обращённый кривошипно-ползунный.

    Ведущий параметр — угол стрелы rest + swing·sin(t). Цилиндр — два звена
    (корпус J2-J3 и шток J3-J4), P-пара J3 лежит на оси J2->J4 и повёрнута
    вдоль неё.
    """

    boom_pivot = Point(*params.boom_pivot)
    cyl_pivot = Point(*params.cylinder_pivot)
    mount, ratio = params.mount_distance, params.piston_ratio
    rest, swing = params.rest_angle, params.swing

    def solve(t: float, joints: Joints) -> Joints:
        frame = GroundFrame(joints)
        base = frame["J2"]
        rod_end = polar(frame["J1"], mount, rest + swing * math.sin(t))

        cyl_angle = angle_of(base, rod_end)
        piston = polar(base, distance(base, rod_end) * ratio, cyl_angle)
        return place(joints, {"J3": piston, "J4": rod_end}, orientations={"J3": cyl_angle})

    rod_end0 = polar(boom_pivot, mount, rest)
    joints = (
        Joint("J1", "R", boom_pivot, ground=True),
        Joint("J2", "R", cyl_pivot, ground=True),
        Joint("J3", "P", Point((cyl_pivot.x + rod_end0.x) / 2.0, (cyl_pivot.y + rod_end0.y) / 2.0)),
        Joint("J4", "R", rod_end0, is_driver=True),
    )
    links = (
        Link("L1", ("J1", "J2"), ground=True),
        Link("L2", ("J1", "J4")),
        Link("L3", ("J2", "J3")),
        Link("L4", ("J3", "J4")),
    )
    return build_mechanism(
        "hydraulic_lift",
        "Hydraulic Lift (Prob 1.12)",
        "Inverted Slider-Crank (Cylinder). Piston/Cyl are 2 links. n=4, j=4 (3R, 1P).",
        joints,
        links,
        SLIDER_COUNTS,
        solve,
    )
