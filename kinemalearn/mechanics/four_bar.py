"""Семейство шарнирных четырёхзвенников.

Общая схема решения:
- конец ведущего кривошипа считается прямо из заданного угла (polar);
- шарнир шатун–коромысло — одно пересечение окружностей
  (конец кривошипа, длина шатуна) и (вторая опора, длина коромысла).

Сочленения: J1 — опора кривошипа (ведущая), J2 — кривошип/шатун,
J3 — шатун/коромысло, J4 — опора коромысла. Звенья: L1 — стойка.
"""

from __future__ import annotations

import math

from kinemalearn.config.mechanics import (
    DEFAULT_FOUR_BAR,
    DEFAULT_PARALLELOGRAM,
    DEFAULT_WATT_LINKAGE,
    FourBarParams,
    ParallelogramParams,
    WattLinkageParams,
)
from kinemalearn.core.types import Joint, Link, MobilityCounts, Point
from kinemalearn.mechanics.geometry import intersect, intersect_both, polar
from kinemalearn.mechanics.mechanism import GroundFrame, Joints, Mechanism, build_mechanism, hold, place

FOUR_BAR_COUNTS = MobilityCounts(n=4, j=4, sum_fi=4, m=1)


def _four_bar_records(a: Point, d: Point, b0: Point, c0: Point):
    joints = (
        Joint("J1", "R", a, ground=True, is_driver=True),
        Joint("J2", "R", b0),
        Joint("J3", "R", c0),
        Joint("J4", "R", d, ground=True),
    )
    links = (
        Link("L1", ("J1", "J4"), ground=True),
        Link("L2", ("J1", "J2")),
        Link("L3", ("J2", "J3")),
        Link("L4", ("J3", "J4")),
    )
    return joints, links


def build_four_bar(params: FourBarParams = DEFAULT_FOUR_BAR) -> Mechanism:
    a = Point(*params.pivot_a)
    d = Point(*params.pivot_d)
    crank, coupler, rocker = params.crank, params.coupler, params.rocker

    def solve(t: float, joints: Joints) -> Joints:
        frame = GroundFrame(joints)
        b = polar(frame["J1"], crank, t)
        c = intersect(b, coupler, frame["J4"], rocker, upper=True)
        if c is None:
            return hold(joints, "four_bar", t)
        return place(joints, {"J2": b, "J3": c})

    joints, links = _four_bar_records(a, d, Point(a.x, a.y - crank), Point(d.x, d.y - rocker))
    return build_mechanism(
        "four_bar",
        "Four-Bar Linkage",
        "A fundamental planar linkage. All joints are Revolute (R) with 1 degree of freedom.",
        joints,
        links,
        FOUR_BAR_COUNTS,
        solve,
    )


def build_parallelogram(params: ParallelogramParams = DEFAULT_PARALLELOGRAM) -> Mechanism:
    """Параллелограмм (задача 1.5): оба кривошипа повёрнуты на один угол.

    Шатун равен стойке, поэтому второе сочленение известно без пересечения.
    """

    a = Point(*params.pivot_a)
    d = Point(*params.pivot_d)
    crank = params.crank

    def solve(t: float, joints: Joints) -> Joints:
        frame = GroundFrame(joints)
        return place(joints, {"J2": polar(frame["J1"], crank, t), "J3": polar(frame["J4"], crank, t)})

    joints, links = _four_bar_records(a, d, Point(a.x, a.y - crank), Point(d.x, d.y - crank))
    return build_mechanism(
        "parallelogram",
        "Parallelogram Linkage (Prob 1.5)",
        "Parallel motion mechanism. Coupler stays parallel to ground.",
        joints,
        links,
        FOUR_BAR_COUNTS,
        solve,
    )


def build_watt_linkage(params: WattLinkageParams = DEFAULT_WATT_LINKAGE) -> Mechanism:
    """Прямолинейный механизм Уатта (задача 1.2).

    Коромысло качается по закону rest + swing·sin(t). Режим сборки —
    скрещённый: всегда первый кандидат `intersect_both`, без сравнения по y.
    """

    a = Point(*params.pivot_a)
    d = Point(*params.pivot_d)
    arm, coupler = params.arm, params.coupler
    rest, swing = params.rest_angle, params.swing

    def solve(t: float, joints: Joints) -> Joints:
        frame = GroundFrame(joints)
        b = polar(frame["J1"], arm, rest + swing * math.sin(t))
        both = intersect_both(b, coupler, frame["J4"], arm)
        if both is None:
            return hold(joints, "watt_linkage", t)
        return place(joints, {"J2": b, "J3": both[0]})

    joints, links = _four_bar_records(a, d, Point(a.x + arm, a.y), Point(d.x - arm, d.y))
    return build_mechanism(
        "watt_linkage",
        "Watt Straight Line (Prob 1.2)",
        "Double-rocker mechanism used in cabinet hinges. Midpoint traces approx straight line.",
        joints,
        links,
        FOUR_BAR_COUNTS,
        solve,
    )
