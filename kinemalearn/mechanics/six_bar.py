"""Шестизвенники: Уатт II, Стефенсон III и шестизвенник с совпадающими сочленениями.

Уатт/Стефенсон — два пересечения окружностей по цепочке, между ними —
перенос точки твёрдого тела: третий шарнир тернарного звена жёстко связан с
двумя уже найденными.

Порядок решения (общий):
    J2 = кривошип(t)
    J3 = пересечение (J2, шатун) и (опора B, коромысло)
    J5 = rigid_point(база тернарного звена, J3, локальное смещение)
    J6 = пересечение (J5, второй шатун) и (опора C, второе коромысло)
"""

from __future__ import annotations

from kinemalearn.config.mechanics import (
    DEFAULT_COINCIDENT_SIX_BAR,
    DEFAULT_STEPHENSON_SIX_BAR,
    DEFAULT_WATT_SIX_BAR,
    CoincidentSixBarParams,
    StephensonSixBarParams,
    WattSixBarParams,
)
from kinemalearn.core.types import Joint, Link, MobilityCounts, Point
from kinemalearn.core.units import VERTICAL
from kinemalearn.mechanics.geometry import intersect, intersect_line, local_offset, polar, rigid_point
from kinemalearn.mechanics.mechanism import GroundFrame, Joints, Mechanism, build_mechanism, hold, place

SIX_BAR_COUNTS = MobilityCounts(n=6, j=7, sum_fi=7, m=1)


def _six_bar_joints(a: Point, b: Point, c: Point, crank: float, rocker: float, j5: Point, rocker_2: float):
    return (
        Joint("J1", "R", a, ground=True, is_driver=True),
        Joint("J2", "R", Point(a.x, a.y - crank)),
        Joint("J3", "R", Point(b.x, b.y - rocker)),
        Joint("J4", "R", b, ground=True),
        Joint("J5", "R", j5),
        Joint("J6", "R", Point(c.x, c.y - rocker_2)),
        Joint("J7", "R", c, ground=True),
    )


def build_watt_six_bar(params: WattSixBarParams = DEFAULT_WATT_SIX_BAR) -> Mechanism:
    """Уатт II: тернарное звено L4 (J4, J3, J5) качается на опоре B."""

    a, b, c = Point(*params.pivot_a), Point(*params.pivot_b), Point(*params.pivot_c)
    crank, coupler, ternary_j3 = params.crank, params.coupler, params.ternary_j3
    coupler_2, rocker_2 = params.coupler_2, params.rocker_2
    j5_local = local_offset(params.ternary_j5, params.ternary_angle)

    def solve(t: float, joints: Joints) -> Joints:
        frame = GroundFrame(joints)
        pivot_b = frame["J4"]

        j2 = polar(frame["J1"], crank, t)
        j3 = intersect(j2, coupler, pivot_b, ternary_j3, upper=True)
        if j3 is None:
            return hold(joints, "watt_six_bar", t)

        j5 = rigid_point(pivot_b, j3, j5_local)

        j6 = intersect(j5, coupler_2, frame["J7"], rocker_2, upper=True)
        if j6 is None:
            return hold(joints, "watt_six_bar", t)

        return place(joints, {"J2": j2, "J3": j3, "J5": j5, "J6": j6})

    joints = _six_bar_joints(a, b, c, crank, ternary_j3, Point(b.x + 10.0, b.y - 50.0), rocker_2)
    links = (
        Link("L1", ("J1", "J4", "J7"), ground=True),
        Link("L2", ("J1", "J2")),
        Link("L3", ("J2", "J3")),
        Link("L4", ("J4", "J3", "J5")),
        Link("L5", ("J5", "J6")),
        Link("L6", ("J6", "J7")),
    )
    return build_mechanism(
        "watt_six_bar",
        "Watt II Six-Bar Linkage",
        "Two four-bar linkages in series. Includes a ternary link pivoting on ground.",
        joints,
        links,
        SIX_BAR_COUNTS,
        solve,
    )


def build_stephenson_six_bar(params: StephensonSixBarParams = DEFAULT_STEPHENSON_SIX_BAR) -> Mechanism:
    """Стефенсон III: тернарное звено L3 (J2, J3, J5) — плавающий шатун."""

    a, b, c = Point(*params.pivot_a), Point(*params.pivot_b), Point(*params.pivot_c)
    crank, coupler, rocker = params.crank, params.coupler, params.rocker
    coupler_2, rocker_2 = params.coupler_2, params.rocker_2
    j5_local = local_offset(params.ternary_j5, params.ternary_angle)

    def solve(t: float, joints: Joints) -> Joints:
        frame = GroundFrame(joints)

        j2 = polar(frame["J1"], crank, t)
        j3 = intersect(j2, coupler, frame["J4"], rocker, upper=True)
        if j3 is None:
            return hold(joints, "stephenson_six_bar", t)

        j5 = rigid_point(j2, j3, j5_local)

        j6 = intersect(j5, coupler_2, frame["J7"], rocker_2, upper=True)
        if j6 is None:
            return hold(joints, "stephenson_six_bar", t)

        return place(joints, {"J2": j2, "J3": j3, "J5": j5, "J6": j6})

    joints = _six_bar_joints(a, b, c, crank, rocker, Point(a.x + 100.0, a.y - 150.0), rocker_2)
    links = (
        Link("L1", ("J1", "J4", "J7"), ground=True),
        Link("L2", ("J1", "J2")),
        Link("L3", ("J2", "J3", "J5")),
        Link("L4", ("J3", "J4")),
        Link("L5", ("J5", "J6")),
        Link("L6", ("J6", "J7")),
    )
    return build_mechanism(
        "stephenson_six_bar",
        "Stephenson III Six-Bar",
        "A 6-bar linkage where the ternary link is a floating coupler.",
        joints,
        links,
        SIX_BAR_COUNTS,
        solve,
    )


def build_coincident_six_bar(params: CoincidentSixBarParams = DEFAULT_COINCIDENT_SIX_BAR) -> Mechanism:
    """Шестизвенник с совпадающими сочленениями.

    Два кривошипа через шатуны приводят общий ползун. Шатуны L3, L5 и ползун
    L6 сходятся в одном пальце: три звена в одной точке дают две пары, поэтому
    палец записан двумя сочленениями J6 и J7 (j = 7 в формуле подвижности).
    Точка пальца считается один раз и пишется в оба сочленения каждый тик.
    """

    g1, g2 = Point(*params.pivot_1), Point(*params.pivot_2)
    crank, rod, slider_x = params.crank, params.rod, params.slider_x
    guide = Point(slider_x, 0.0)

    def solve(t: float, joints: Joints) -> Joints:
        frame = GroundFrame(joints)
        c1 = polar(frame["J1"], crank, t)

        # TODO: проверить выбор ветки пальца. intersect_line отдаёт только
        # корень с +sqrt (палец ниже кривошипа); для части диапазона t
        # физически верным может быть второй корень.
        pin = intersect_line(c1, rod, guide, VERTICAL)
        if pin is None:
            return hold(joints, "coincident_six_bar", t)

        c2 = intersect(frame["J3"], crank, pin, rod, upper=True)
        if c2 is None:
            return hold(joints, "coincident_six_bar", t)

        return place(joints, {"J2": c1, "J4": c2, "J5": pin, "J6": pin, "J7": pin})

    pin0 = Point(slider_x, params.slider_start_y)
    joints = (
        Joint("J1", "R", g1, ground=True, is_driver=True),
        Joint("J2", "R", Point(g1.x, g1.y - crank)),
        Joint("J3", "R", g2, ground=True),
        Joint("J4", "R", Point(g2.x, g2.y - crank)),
        Joint("J5", "P", pin0, ground=True, orientation=VERTICAL),
        Joint("J6", "R", pin0),
        Joint("J7", "R", pin0),
    )
    links = (
        Link("L1", ("J1", "J3", "J5"), ground=True),
        Link("L2", ("J1", "J2")),
        Link("L3", ("J2", "J6")),
        Link("L4", ("J3", "J4")),
        Link("L5", ("J4", "J7")),
        Link("L6", ("J5", "J6", "J7")),
    )
    return build_mechanism(
        "coincident_six_bar",
        "Coincident Joint 6-Bar",
        "Two cranks driving a common slider. Note: 3 links meet at the slider pin (counts as 2 joints).",
        joints,
        links,
        SIX_BAR_COUNTS,
        solve,
    )
