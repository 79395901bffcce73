import logging
import math

import pytest

from kinemalearn.core.types import Joint, Link, MobilityCounts, Point
from kinemalearn.core.validation import MalformedTopologyError
from kinemalearn.mechanics.four_bar import FOUR_BAR_COUNTS, build_four_bar
from kinemalearn.mechanics.higher_pairs import build_quick_return
from kinemalearn.mechanics.mechanism import GroundFrame, Mechanism, build_mechanism, place


def _joints():
    return (
        Joint("J1", "R", Point(0.0, 0.0), ground=True, is_driver=True),
        Joint("J2", "R", Point(0.0, -10.0)),
        Joint("J3", "R", Point(40.0, -20.0)),
        Joint("J4", "R", Point(50.0, 0.0), ground=True),
    )


def _links():
    return (
        Link("L1", ("J1", "J4"), ground=True),
        Link("L2", ("J1", "J2")),
        Link("L3", ("J2", "J3")),
        Link("L4", ("J3", "J4")),
    )


class TestValidation:
    def test_valid_static_mechanism(self) -> None:
        mech = Mechanism("m", "static", "", _joints(), _links(), FOUR_BAR_COUNTS)
        assert mech.solve(1.0) == mech.joints
        assert mech.counted() == FOUR_BAR_COUNTS

    def test_duplicate_joint_ids(self) -> None:
        joints = _joints() + (Joint("J2", "R", Point(1.0, 1.0)),)
        with pytest.raises(MalformedTopologyError, match="duplicate joint"):
            Mechanism("m", "bad", "", joints, _links(), FOUR_BAR_COUNTS)

    def test_dangling_link_reference(self) -> None:
        links = _links() + (Link("L5", ("J3", "J9")),)
        with pytest.raises(MalformedTopologyError, match="J9"):
            Mechanism("m", "bad", "", _joints(), links, FOUR_BAR_COUNTS)

    def test_duplicate_link_ids(self) -> None:
        links = _links() + (Link("L4", ("J2", "J4")),)
        with pytest.raises(MalformedTopologyError):
            Mechanism("m", "bad", "", _joints(), links, FOUR_BAR_COUNTS)

    def test_two_drivers(self) -> None:
        joints = _joints()[:1] + (Joint("J2", "R", Point(0.0, -10.0), is_driver=True),) + _joints()[2:]
        with pytest.raises(MalformedTopologyError, match="driver"):
            Mechanism("m", "bad", "", joints, _links(), FOUR_BAR_COUNTS)

    def test_malformed_topology_error_is_runtime_error(self) -> None:
        assert issubclass(MalformedTopologyError, RuntimeError)


class TestGroundFrame:
    def test_exposes_only_ground_joints(self) -> None:
        frame = GroundFrame(_joints())
        assert set(frame) == {"J1", "J4"}
        assert len(frame) == 2
        assert frame["J4"] == Point(50.0, 0.0)
        assert "J2" not in frame

    def test_missing_anchor(self) -> None:
        with pytest.raises(MalformedTopologyError):
            GroundFrame(_joints())["J2"]


class TestPlace:
    def test_moves_only_named_joints(self) -> None:
        joints = _joints()
        out = place(joints, {"J2": Point(5.0, 5.0)}, orientations={"J1": 1.0})
        assert out[1].position == Point(5.0, 5.0)
        assert out[0].position == joints[0].position
        assert out[0].orientation == 1.0
        assert out[2] is joints[2]
        assert joints[1].position == Point(0.0, -10.0)

    def test_unknown_joint(self) -> None:
        with pytest.raises(MalformedTopologyError):
            place(_joints(), {"J9": Point(0.0, 0.0)})

    def test_solver_writing_unknown_joint_fails_fast(self) -> None:
        def solve(t, joints):
            return place(joints, {"J7": Point(t, t)})

        with pytest.raises(MalformedTopologyError):
            build_mechanism("broken", "Broken", "", _joints(), _links(), FOUR_BAR_COUNTS, solve)


class TestMechanism:
    @pytest.fixture()
    def mech(self) -> Mechanism:
        return build_four_bar()

    def test_unique_ids(self) -> None:
        a, b = build_four_bar(), build_four_bar()
        assert a.id != b.id
        assert a.id.startswith("four_bar_")

    def test_expected_counts(self, mech: Mechanism) -> None:
        assert (mech.expected_n, mech.expected_j, mech.expected_sum_fi, mech.expected_m) == (4, 4, 4, 1)

    def test_set_driver(self, mech: Mechanism) -> None:
        mech.set_driver("J3")
        drivers = [j.id for j in mech.joints if j.is_driver]
        assert drivers == ["J3"]
        assert mech.driver.id == "J3"

    def test_set_driver_keeps_positions(self, mech: Mechanism) -> None:
        before = mech.positions()
        mech.set_driver("J2")
        assert mech.positions() == before

    def test_set_driver_unknown_joint(self, mech: Mechanism) -> None:
        with pytest.raises(MalformedTopologyError):
            mech.set_driver("J42")

    def test_rigid_pairs_four_bar(self, mech: Mechanism) -> None:
        assert mech.rigid_pairs() == [("L2", "J1", "J2"), ("L3", "J2", "J3"), ("L4", "J3", "J4")]

    def test_rigid_pairs_skip_sliding_joints(self) -> None:
        # кулиса: палец J2 в пазу, жёстко связаны только опора J3 и конец J4
        assert build_quick_return().rigid_pairs() == [("L3", "J3", "J4")]

    def test_solve_is_pure(self, mech: Mechanism) -> None:
        before = mech.joints
        out = mech.solve(1.3)
        assert mech.joints is before
        assert out != before

    def test_advance_replaces_joints(self, mech: Mechanism) -> None:
        out = mech.advance(0.5)
        assert mech.joints is out
        assert mech.joint("J2").position == pytest.approx(Point(150.0 + 60.0 * math.cos(0.5), 300.0 + 60.0 * math.sin(0.5)))

    def test_unreachable_logged_at_debug(self, mech: Mechanism, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="kinemalearn.mechanics.mechanism"):
            mech.solve(math.pi)
        assert any("unreachable" in r.getMessage() and "180.0°" in r.getMessage() for r in caplog.records)

    def test_counted_excludes_zero_connectivity(self) -> None:
        counted = build_quick_return().counted()
        assert counted == MobilityCounts(n=3, j=3, sum_fi=4, m=1)
