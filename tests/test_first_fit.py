from __future__ import annotations

from carton_packer.models import Bin, LabelOrientation, OrientedBox, Rotation, Vector3
from carton_packer.packing.first_fit import pack_item_simple, pack_to_box


def test_pack_to_box_appends_a_clone() -> None:
    bin = Bin(id="C", usable_dim=Vector3.of([10, 10, 10]))
    item = OrientedBox(id="A", base_dim=Vector3.of([5, 5, 5]))

    assert pack_to_box(item, bin, Vector3.origin()) is True
    assert len(bin.items) == 1
    assert bin.items[0] is not item

    # the working item can be reused without touching the resident copy
    item.move_to(Vector3.of([5, 5, 5]))
    assert bin.items[0].position == Vector3.origin()


def test_pack_to_box_rotates_to_fit() -> None:
    bin = Bin(id="C", usable_dim=Vector3.of([30, 10, 10]))
    item = OrientedBox(id="A", base_dim=Vector3.of([10, 10, 30]))

    assert pack_to_box(item, bin, Vector3.origin()) is True
    # LWH and WLH are too tall; WHL is (10, 30, 10) too wide; HLW fits
    assert bin.items[0].rotation is Rotation.HLW
    assert bin.items[0].dimensions().as_tuple() == (30, 10, 10)


def test_pack_to_box_honours_label_orientation() -> None:
    bin = Bin(
        id="C",
        usable_dim=Vector3.of([30, 10, 10]),
        label_orientation=LabelOrientation.LENGTH_WIDTH_UP,
    )
    item = OrientedBox(id="A", base_dim=Vector3.of([10, 10, 30]))

    assert pack_to_box(item, bin, Vector3.origin()) is False
    assert bin.items == []


def test_pack_to_box_failure_resets_item() -> None:
    bin = Bin(id="C", usable_dim=Vector3.of([10, 10, 10]))
    item = OrientedBox(id="A", base_dim=Vector3.of([20, 1, 1]))

    assert pack_to_box(item, bin, Vector3.of([1, 1, 1])) is False
    assert item.position == Vector3.origin()
    assert item.rotation is Rotation.LWH


def test_simple_strategy_tries_right_face_first() -> None:
    bin = Bin(id="C", usable_dim=Vector3.of([20, 20, 30]))
    tall = OrientedBox(id="T", base_dim=Vector3.of([10, 10, 30]))

    assert pack_item_simple(tall.clone(), bin) is True
    assert pack_item_simple(tall.clone(), bin) is True
    assert pack_item_simple(tall.clone(), bin) is True
    assert pack_item_simple(tall.clone(), bin) is True

    positions = [i.position.as_tuple() for i in bin.items]
    assert positions == [(0, 0, 0), (10, 0, 0), (0, 10, 0), (10, 10, 0)]
    assert pack_item_simple(tall.clone(), bin) is False
