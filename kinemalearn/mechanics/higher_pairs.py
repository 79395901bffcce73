"""Механизмы с высшими парами: палец в пазу (PinSlot) и кулачок (Cam).

Высшая пара даёт f_i = 2, поэтому трёхзвенник с двумя R/P-парами и одной
высшей парой имеет M = 3(3 - 3 - 1) + 4 = 1.

Решатели здесь не пересекают окружности: положение пальца/толкателя
выражается явно через ведущий угол, поэтому мягкого отказа нет.
"""

from __future__ import annotations

import math

from kinemalearn.config.mechanics import (
    DEFAULT_CAM_FOLLOWER,
    DEFAULT_FOLDING_CHAIR,
    DEFAULT_QUICK_RETURN,
    DEFAULT_SCOTCH_YOKE,
    CamFollowerParams,
    FoldingChairParams,
    QuickReturnParams,
    ScotchYokeParams,
)
from kinemalearn.core.types import Joint, Link, MobilityCounts, Point
from kinemalearn.core.units import HALF_PI, HORIZONTAL, VERTICAL
from kinemalearn.mechanics.geometry import angle_of, polar
from kinemalearn.mechanics.mechanism import GroundFrame, Joints, Mechanism, build_mechanism, place

HIGHER_PAIR_COUNTS = MobilityCounts(n=3, j=3, sum_fi=4, m=1)


def build_folding_chair(params: FoldingChairParams = DEFAULT_FOLDING_CHAIR) -> Mechanism:
    """Складной стул (задача 1.6).

    Спинка качается на опоре J1 по закону rest + swing·sin(t). Палец J2 на
    спинке скользит в пазу сиденья, которое вращается на опоре J3; угол паза
    берётся по направлению J3 -> палец.
    """

    backrest = Point(*params.backrest_pivot)
    seat = Point(*params.seat_pivot)
    reach = params.pin_distance
    rest, swing = params.rest_angle, params.swing

    def solve(t: float, joints: Joints) -> Joints:
        frame = GroundFrame(joints)
        pin = polar(frame["J1"], reach, rest + swing * math.sin(t))
        return place(joints, {"J2": pin}, orientations={"J2": angle_of(frame["J3"], pin)})

    joints = (
        Joint("J1", "R", backrest, ground=True, is_driver=True),
        Joint("J2", "PinSlot", polar(backrest, reach, rest)),
        Joint("J3", "R", seat, ground=True),
    )
    links = (
        Link("L1", ("J1", "J3"), ground=True),
        Link("L2", ("J1", "J2")),
        Link("L3", ("J3", "J2")),
    )
    return build_mechanism(
        "folding_chair",
        "Folding Chair (Prob 1.6)",
        "3-link mechanism with Pin-in-Slot joint (f=2). n=3, j=3, sum(fi)=4, M=1.",
        joints,
        links,
        HIGHER_PAIR_COUNTS,
        solve,
    )


def build_scotch_yoke(params: ScotchYokeParams = DEFAULT_SCOTCH_YOKE) -> Mechanism:
    """Кулиса: палец кривошипа ходит в вертикальном пазу ползуна.

    Ползун J3 едет по горизонтали на высоте опоры, x ползуна равен x пальца,
    то есть x(t) = Ax + r·cos t (гармоническое движение).
    """

    a = Point(*params.pivot)
    crank = params.crank

    def solve(t: float, joints: Joints) -> Joints:
        pivot = GroundFrame(joints)["J1"]
        pin = polar(pivot, crank, t)
        return place(joints, {"J2": pin, "J3": Point(pin.x, pivot.y)})

    joints = (
        Joint("J1", "R", a, ground=True, is_driver=True),
        Joint("J2", "PinSlot", Point(a.x + crank, a.y), orientation=VERTICAL),
        Joint("J3", "P", Point(a.x + crank + params.slider_offset, a.y), ground=True, orientation=HORIZONTAL),
    )
    links = (
        Link("L1", ("J1", "J3"), ground=True),
        Link("L2", ("J1", "J2")),
        Link("L3", ("J2", "J3")),
    )
    return build_mechanism(
        "scotch_yoke",
        "Scotch Yoke",
        "Contains a Pin-in-Slot joint (Higher Pair, f=2). Converts rotation to SHM.",
        joints,
        links,
        HIGHER_PAIR_COUNTS,
        solve,
    )


def build_quick_return(params: QuickReturnParams = DEFAULT_QUICK_RETURN) -> Mechanism:
    """Кулисный механизм быстрого возврата.

    Кулиса L3 качается на опоре J3 и всегда направлена на палец кривошипа J2.
    J4 — конец кулисы, точка для отрисовки (connectivity 0, в j не входит).
    """

    crank_pivot = Point(*params.crank_pivot)
    lever_pivot = Point(*params.lever_pivot)
    crank, lever = params.crank, params.lever

    def solve(t: float, joints: Joints) -> Joints:
        frame = GroundFrame(joints)
        pin = polar(frame["J1"], crank, t)
        angle = angle_of(frame["J3"], pin)
        tip = polar(frame["J3"], lever, angle)
        return place(joints, {"J2": pin, "J4": tip}, orientations={"J2": angle})

    pin0 = Point(crank_pivot.x + crank, crank_pivot.y)
    joints = (
        Joint("J1", "R", crank_pivot, ground=True, is_driver=True),
        Joint("J2", "PinSlot", pin0),
        Joint("J3", "R", lever_pivot, ground=True),
        Joint("J4", "R", polar(lever_pivot, lever, angle_of(lever_pivot, pin0)), connectivity=0),
    )
    links = (
        Link("L1", ("J1", "J3"), ground=True),
        Link("L2", ("J1", "J2")),
        Link("L3", ("J3", "J2", "J4")),
    )
    return build_mechanism(
        "quick_return",
        "Slotted Link Quick Return",
        "Pin-in-Slot joint (f=2) produces quick return motion. Note: Tip of lever is free end.",
        joints,
        links,
        HIGHER_PAIR_COUNTS,
        solve,
    )


def build_cam_follower(params: CamFollowerParams = DEFAULT_CAM_FOLLOWER) -> Mechanism:
    """Дисковый кулачок и толкатель на вертикальной направляющей.

    Профиль — эксцентрик: подъём толкателя e·sin(t - π/2), точка контакта J2
    лежит на вертикали через ось кулачка. Поворот кулачка пишется в
    orientation ведущего сочленения J1.
    """

    a = Point(*params.pivot)
    base, e = params.base_radius, params.eccentricity

    def solve(t: float, joints: Joints) -> Joints:
        axis = GroundFrame(joints)["J1"]
        lift = e * math.sin(t - HALF_PI)
        contact = Point(axis.x, axis.y - base - e - lift)
        return place(joints, {"J2": contact}, orientations={"J1": t})

    joints = (
        Joint("J1", "R", a, ground=True, is_driver=True, orientation=0.0),
        Joint("J2", "Cam", Point(a.x, a.y - base - e)),
        Joint("J3", "P", Point(a.x, a.y - params.guide_height), ground=True, orientation=VERTICAL),
    )
    links = (
        Link("L1", ("J1", "J3"), ground=True),
        Link("L2", ("J1", "J2")),
        Link("L3", ("J2", "J3")),
    )
    return build_mechanism(
        "cam_follower",
        "Plate Cam & Follower",
        "A higher-pair mechanism with 1 degree of freedom.",
        joints,
        links,
        HIGHER_PAIR_COUNTS,
        solve,
    )
