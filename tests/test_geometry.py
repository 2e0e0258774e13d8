from __future__ import annotations

import pytest
from pydantic import ValidationError

from carton_packer.geometry import boxes_overlap, fits_within, placement_bounds
from carton_packer.models import Axis, OrientedBox, Rotation, Vector3, rotated_dims


def test_boxes_overlap_overlapping() -> None:
    """Test that overlapping boxes are detected."""
    # Box a: (0, 0, 0) to (2, 2, 2)
    a = (0.0, 0.0, 0.0, 2.0, 2.0, 2.0)
    # Box b: (1, 1, 1) to (3, 3, 3) - overlaps with a
    b = (1.0, 1.0, 1.0, 3.0, 3.0, 3.0)

    assert boxes_overlap(a, b) is True


def test_boxes_overlap_touching_faces() -> None:
    """Shared faces are not a collision."""
    a = (0.0, 0.0, 0.0, 1.0, 1.0, 1.0)
    b = (1.0, 0.0, 0.0, 2.0, 1.0, 1.0)

    assert boxes_overlap(a, b) is False
    assert boxes_overlap(b, a) is False


def test_boxes_overlap_needs_all_three_axes() -> None:
    a = (0.0, 0.0, 0.0, 2.0, 2.0, 2.0)
    # overlaps on X and Y, clear on Z
    b = (1.0, 1.0, 2.0, 3.0, 3.0, 4.0)

    assert boxes_overlap(a, b) is False


def test_vector_volume_and_axes() -> None:
    v = Vector3.of([2, 3, 4])

    assert v.volume() == 24
    assert v.get_by_axis(Axis.X) == 2
    assert v.get_by_axis(Axis.Y) == 3
    assert v.get_by_axis(Axis.Z) == 4


def test_compute_pivot_advances_one_axis() -> None:
    pos = Vector3.of([1, 2, 3])
    dims = Vector3.of([4, 5, 6])

    assert Vector3.compute_pivot(Axis.X, pos, dims).as_tuple() == (5, 2, 3)
    assert Vector3.compute_pivot(Axis.Y, pos, dims).as_tuple() == (1, 7, 3)
    assert Vector3.compute_pivot(Axis.Z, pos, dims).as_tuple() == (1, 2, 9)
    # pos is untouched
    assert pos.as_tuple() == (1, 2, 3)


def test_vector_rejects_negative_extent() -> None:
    with pytest.raises(ValidationError):
        Vector3(length=-1, width=1, height=1)


@pytest.mark.parametrize(
    "rotation, expected",
    [
        (Rotation.LWH, (1, 2, 3)),
        (Rotation.WLH, (2, 1, 3)),
        (Rotation.WHL, (2, 3, 1)),
        (Rotation.HLW, (3, 1, 2)),
        (Rotation.HWL, (3, 2, 1)),
        (Rotation.LHW, (1, 3, 2)),
    ],
)
def test_rotation_table(rotation: Rotation, expected: tuple[float, float, float]) -> None:
    assert rotated_dims(Vector3.of([1, 2, 3]), rotation).as_tuple() == expected


def test_dimensions_follow_rotation() -> None:
    box = OrientedBox(id="A", base_dim=Vector3.of([1, 2, 3]))
    assert box.dimensions().as_tuple() == (1, 2, 3)

    box.rotate(Rotation.HWL)
    assert box.dimensions().as_tuple() == (3, 2, 1)

    box.rotate(Rotation.LWH)
    assert box.dimensions().as_tuple() == (1, 2, 3)


def test_collides_uses_rotated_extents() -> None:
    a = OrientedBox(id="A", base_dim=Vector3.of([10, 10, 10]))
    b = OrientedBox(id="B", base_dim=Vector3.of([2, 2, 20]), position=Vector3.of([10, 0, 0]))

    # touching a's right face
    assert a.collides(b) is False

    # lying down, b reaches back into a
    b.move_to(Vector3.of([0, 0, 5]))
    b.rotate(Rotation.HLW)
    assert a.collides(b) is True
    assert b.collides(a) is True


def test_fits_within() -> None:
    space = Vector3.of([10, 10, 10])

    assert fits_within(Vector3.of([5, 0, 0]), Vector3.of([5, 10, 10]), space) is True
    assert fits_within(Vector3.of([5.5, 0, 0]), Vector3.of([5, 10, 10]), space) is False


def test_placement_bounds() -> None:
    assert placement_bounds(Vector3.of([1, 2, 3]), Vector3.of([4, 5, 6])) == (1, 2, 3, 5, 7, 9)
