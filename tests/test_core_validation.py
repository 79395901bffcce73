import dataclasses
import math

import pytest

from kinemalearn.core.types import Joint, Link, MobilityCounts, Point, gruebler_mobility
from kinemalearn.core.units import HALF_PI, to_deg, to_rad
from kinemalearn.core.validation import ensure_finite, ensure_in_range, ensure_positive


def test_ensure_positive_ok():
    ensure_positive(1.0, "x")


def test_ensure_positive_raises():
    with pytest.raises(ValueError):
        ensure_positive(0.0, "x")


def test_ensure_in_range_boundaries():
    ensure_in_range(0.0, 0.0, 1.0, "x")
    ensure_in_range(1.0, 0.0, 1.0, "x")
    with pytest.raises(ValueError):
        ensure_in_range(1.5, 0.0, 1.0, "x")


def test_ensure_finite_raises_on_nan():
    with pytest.raises(ValueError):
        ensure_finite(float("nan"), "x")


def test_degree_conversion():
    assert to_rad(90.0) == pytest.approx(HALF_PI)
    assert to_deg(math.pi) == pytest.approx(180.0)


class TestJoint:
    @pytest.mark.parametrize("kind,expected", [("R", 1), ("P", 1), ("Cam", 2), ("PinSlot", 2)])
    def test_default_connectivity(self, kind: str, expected: int) -> None:
        assert Joint("J1", kind, Point(0.0, 0.0)).connectivity == expected

    def test_position_is_normalised_to_point(self) -> None:
        j = Joint("J1", "R", (1, 2))
        assert isinstance(j.position, Point)
        assert (j.x, j.y) == (1.0, 2.0)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"id": "", "kind": "R"},
            {"id": "J1", "kind": "S"},
            {"id": "J1", "kind": "R", "connectivity": 4},
            {"id": "J1", "kind": "R", "connectivity": -1},
        ],
    )
    def test_invariants(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            Joint(position=Point(0.0, 0.0), **kwargs)

    def test_non_finite_position_rejected(self) -> None:
        with pytest.raises(ValueError):
            Joint("J1", "R", Point(float("inf"), 0.0))

    def test_frozen(self) -> None:
        j = Joint("J1", "R", Point(0.0, 0.0))
        with pytest.raises(dataclasses.FrozenInstanceError):
            j.position = Point(1.0, 1.0)  # type: ignore[misc]

    def test_moved_to_keeps_identity_fields(self) -> None:
        j = Joint("J4", "P", Point(0.0, 0.0), ground=True, orientation=HALF_PI)
        moved = j.moved_to(Point(0.0, 5.0))
        assert moved.position == Point(0.0, 5.0)
        assert moved.orientation == HALF_PI
        assert moved.ground and moved.kind == "P"
        assert j.position == Point(0.0, 0.0)

        turned = j.moved_to(j.position, orientation=0.0)
        assert turned.orientation == 0.0


class TestLink:
    def test_kind_from_joint_count(self) -> None:
        assert Link("L1", ("J1", "J2")).kind == "binary"
        assert Link("L2", ("J1", "J2", "J3")).kind == "ternary"
        assert Link("L3", ("J1", "J2", "J3", "J4")).kind == "quaternary"

    @pytest.mark.parametrize("joints", [("J1",), ("J1", "J2", "J3", "J4", "J5")])
    def test_invariants(self, joints: tuple) -> None:
        with pytest.raises(ValueError):
            Link("L1", joints)


class TestMobility:
    def test_planar_four_bar(self) -> None:
        assert gruebler_mobility(4, 4, 4) == 1

    def test_spatial_uses_k6(self) -> None:
        counts = MobilityCounts(n=4, j=4, sum_fi=8, m=2, spatial=True)
        assert counts.K == 6
        assert counts.gruebler() == 2
        assert counts.is_consistent()

    def test_inconsistent_counts_detected(self) -> None:
        assert not MobilityCounts(n=4, j=4, sum_fi=4, m=2).is_consistent()
