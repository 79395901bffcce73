import math

import numpy as np
import pytest

from kinemalearn.config.mechanics import (
    DEFAULT_COINCIDENT_SIX_BAR,
    DEFAULT_ELLIPTICAL_TRAINER,
    DEFAULT_FOUR_BAR,
    DEFAULT_HYDRAULIC_LIFT,
    DEFAULT_PARALLELOGRAM,
    DEFAULT_QUICK_RETURN,
    DEFAULT_SLIDER_CRANK,
    DEFAULT_STEPHENSON_SIX_BAR,
    DEFAULT_WATER_PUMP,
    DEFAULT_WATT_LINKAGE,
    DEFAULT_WATT_SIX_BAR,
)
from kinemalearn.config.models import TOPOLOGY_NAMES
from kinemalearn.core.types import Point
from kinemalearn.mechanics.catalog import BUILDERS, build
from kinemalearn.mechanics.four_bar import build_four_bar
from kinemalearn.mechanics.geometry import distance, intersect
from kinemalearn.mechanics.higher_pairs import build_cam_follower, build_scotch_yoke
from kinemalearn.mechanics.mechanism import Mechanism
from kinemalearn.mechanics.six_bar import build_coincident_six_bar

SWEEP = np.linspace(0.0, 2.0 * math.pi, 73)


def _sweep(mech: Mechanism):
    """Кадры анимации на одном обороте, как их строит драйвер (от предыдущего кадра)."""

    joints = mech.joints
    for t in SWEEP:
        joints = mech.solve(float(t), joints)
        yield float(t), {j.id: j for j in joints}


def test_registry_matches_topology_names():
    assert set(BUILDERS) == set(TOPOLOGY_NAMES)


def test_build_unknown_topology():
    with pytest.raises(KeyError):
        build("five_bar")


@pytest.mark.parametrize("name", TOPOLOGY_NAMES)
class TestEveryTopology:
    def test_topology_key(self, name: str) -> None:
        mech = build(name)
        assert mech.topology == name
        assert mech.id.startswith(name + "_")
        assert mech.links[0].id == "L1" and mech.links[0].ground

    def test_single_driver(self, name: str) -> None:
        mech = build(name)
        assert sum(1 for j in mech.joints if j.is_driver) == 1

    def test_mobility_is_consistent(self, name: str) -> None:
        mech = build(name)
        assert mech.expected.is_consistent()
        assert mech.counted() == mech.expected

    def test_rigid_lengths_hold_over_a_revolution(self, name: str) -> None:
        mech = build(name)
        start = {j.id: j.position for j in mech.joints}
        lengths = {(a, b): distance(start[a], start[b]) for _, a, b in mech.rigid_pairs()}
        for t, frame in _sweep(mech):
            for (a, b), length in lengths.items():
                assert distance(frame[a].position, frame[b].position) == pytest.approx(length, abs=1e-6), (
                    f"{name}: |{a}{b}| drifted at t={t:.3f}"
                )

    def test_fixed_ground_joints_never_move(self, name: str) -> None:
        mech = build(name)
        start = {j.id: j.position for j in mech.joints if j.ground and j.kind != "P"}
        for _, frame in _sweep(mech):
            for jid, pos in start.items():
                assert frame[jid].position == pos

    def test_ground_sliders_stay_on_their_line(self, name: str) -> None:
        mech = build(name)
        sliders = {j.id: j for j in mech.joints if j.ground and j.kind == "P"}
        for _, frame in _sweep(mech):
            for jid, j0 in sliders.items():
                dx = frame[jid].x - j0.x
                dy = frame[jid].y - j0.y
                # смещение параллельно оси направляющей
                cross = dx * math.sin(j0.orientation) - dy * math.cos(j0.orientation)
                assert cross == pytest.approx(0.0, abs=1e-6)

    def test_resolve_is_deterministic(self, name: str) -> None:
        mech = build(name)
        assert mech.solve(0.9) == mech.solve(0.9)

    def test_soft_failure_is_idempotent(self, name: str) -> None:
        mech = build(name)
        for t in SWEEP:
            once = mech.solve(float(t))
            if once is mech.joints:
                assert mech.solve(float(t), once) == once


def _law_of_cosines(a: float, b: float, angle: float) -> float:
    return math.sqrt(a * a + b * b - 2.0 * a * b * math.cos(angle))


_WS, _SS = DEFAULT_WATT_SIX_BAR, DEFAULT_STEPHENSON_SIX_BAR

# Длины жёстких пар по номинальным размерам: topology -> {(a, b): длина}
AUTHORED_LENGTHS = {
    "four_bar": {
        ("J1", "J2"): DEFAULT_FOUR_BAR.crank,
        ("J2", "J3"): DEFAULT_FOUR_BAR.coupler,
        ("J3", "J4"): DEFAULT_FOUR_BAR.rocker,
    },
    "parallelogram": {
        ("J1", "J2"): DEFAULT_PARALLELOGRAM.crank,
        ("J2", "J3"): DEFAULT_PARALLELOGRAM.coupler,
        ("J3", "J4"): DEFAULT_PARALLELOGRAM.crank,
    },
    "watt_linkage": {
        ("J1", "J2"): DEFAULT_WATT_LINKAGE.arm,
        ("J2", "J3"): DEFAULT_WATT_LINKAGE.coupler,
        ("J3", "J4"): DEFAULT_WATT_LINKAGE.arm,
    },
    "slider_crank": {
        ("J1", "J2"): DEFAULT_SLIDER_CRANK.crank,
        ("J2", "J3"): DEFAULT_SLIDER_CRANK.rod,
    },
    "water_pump": {
        ("J1", "J2"): DEFAULT_WATER_PUMP.crank,
        ("J2", "J3"): DEFAULT_WATER_PUMP.rod,
    },
    "elliptical_trainer": {
        ("J1", "J2"): DEFAULT_ELLIPTICAL_TRAINER.crank,
        ("J2", "J3"): DEFAULT_ELLIPTICAL_TRAINER.coupler,
    },
    "hydraulic_lift": {
        ("J1", "J4"): DEFAULT_HYDRAULIC_LIFT.mount_distance,
    },
    "watt_six_bar": {
        ("J1", "J2"): _WS.crank,
        ("J2", "J3"): _WS.coupler,
        ("J4", "J3"): _WS.ternary_j3,
        ("J4", "J5"): _WS.ternary_j5,
        ("J3", "J5"): _law_of_cosines(_WS.ternary_j3, _WS.ternary_j5, _WS.ternary_angle),
        ("J5", "J6"): _WS.coupler_2,
        ("J6", "J7"): _WS.rocker_2,
    },
    "stephenson_six_bar": {
        ("J1", "J2"): _SS.crank,
        ("J2", "J3"): _SS.coupler,
        ("J2", "J5"): _SS.ternary_j5,
        ("J3", "J5"): _law_of_cosines(_SS.coupler, _SS.ternary_j5, _SS.ternary_angle),
        ("J3", "J4"): _SS.rocker,
        ("J5", "J6"): _SS.coupler_2,
        ("J6", "J7"): _SS.rocker_2,
    },
    "coincident_six_bar": {
        ("J1", "J2"): DEFAULT_COINCIDENT_SIX_BAR.crank,
        ("J2", "J6"): DEFAULT_COINCIDENT_SIX_BAR.rod,
        ("J3", "J4"): DEFAULT_COINCIDENT_SIX_BAR.crank,
        ("J4", "J7"): DEFAULT_COINCIDENT_SIX_BAR.rod,
        ("J6", "J7"): 0.0,
    },
    "quick_return": {
        ("J3", "J4"): DEFAULT_QUICK_RETURN.lever,
    },
}


@pytest.mark.parametrize("name", sorted(AUTHORED_LENGTHS))
class TestAuthoredLengths:
    def test_table_covers_every_rigid_pair(self, name: str) -> None:
        pairs = {frozenset((a, b)) for _, a, b in build(name).rigid_pairs()}
        assert pairs == {frozenset(k) for k in AUTHORED_LENGTHS[name]}

    def test_assembled_lengths_match_dimensions(self, name: str) -> None:
        mech = build(name)
        for (a, b), length in AUTHORED_LENGTHS[name].items():
            got = distance(mech.joint(a).position, mech.joint(b).position)
            assert got == pytest.approx(length, abs=1e-6), f"{name}: |{a}{b}| = {got:.6f}, expected {length}"

    def test_lengths_match_dimensions_over_a_revolution(self, name: str) -> None:
        mech = build(name)
        for t, frame in _sweep(mech):
            for (a, b), length in AUTHORED_LENGTHS[name].items():
                assert distance(frame[a].position, frame[b].position) == pytest.approx(length, abs=1e-6), (
                    f"{name}: |{a}{b}| off at t={t:.3f}"
                )


def test_topologies_without_rigid_pairs():
    for name in set(TOPOLOGY_NAMES) - set(AUTHORED_LENGTHS):
        assert build(name).rigid_pairs() == []


class TestFourBarScenario:
    def test_assembled_at_zero(self) -> None:
        mech = build_four_bar()
        assert mech.joint("J2").position == pytest.approx(Point(210.0, 300.0))
        expected = intersect(Point(210.0, 300.0), 200.0, Point(450.0, 300.0), 150.0, upper=True)
        assert mech.joint("J3").position == pytest.approx(expected)

    def test_upper_branch(self) -> None:
        mech = build_four_bar()
        assert mech.joint("J3").y < 300.0

    def test_unreachable_returns_input_unchanged(self) -> None:
        mech = build_four_bar()
        before = mech.joints
        out = mech.solve(math.pi)
        assert out == before
        assert mech.advance(math.pi) == before

    def test_same_parameter_bit_identical(self) -> None:
        mech = build_four_bar()
        first = mech.solve(0.7)
        mech.advance(2.0)
        assert mech.solve(0.7) == first


class TestScotchYoke:
    def test_quarter_turn(self) -> None:
        mech = build_scotch_yoke()
        mech.advance(math.pi / 2.0)
        pin = mech.joint("J2").position
        slider = mech.joint("J3").position
        assert pin == pytest.approx(Point(200.0, 330.0))
        assert slider.x == pin.x
        assert slider.y == 250.0

    def test_harmonic_motion(self) -> None:
        mech = build_scotch_yoke()
        for t in (0.0, 1.0, 2.5, 4.0):
            assert mech.solve(t)[2].x == pytest.approx(200.0 + 80.0 * math.cos(t))


class TestCoincidentSixBar:
    def test_pin_joints_synchronised(self) -> None:
        mech = build_coincident_six_bar()
        for _, frame in _sweep(mech):
            assert frame["J5"].position == frame["J6"].position == frame["J7"].position

    def test_pin_stays_on_vertical_guide(self) -> None:
        mech = build_coincident_six_bar()
        for _, frame in _sweep(mech):
            assert frame["J6"].x == pytest.approx(300.0)


class TestCamFollower:
    def test_cam_orientation_follows_driver(self) -> None:
        mech = build_cam_follower()
        mech.advance(1.25)
        assert mech.joint("J1").orientation == 1.25

    def test_lift_range(self) -> None:
        mech = build_cam_follower()
        ys = [mech.solve(t)[1].y for t in (0.0, math.pi / 2.0, math.pi)]
        # подъём e·sin(t - π/2): -e, 0, +e
        assert ys == pytest.approx([300.0 - 50.0, 300.0 - 80.0, 300.0 - 110.0])
