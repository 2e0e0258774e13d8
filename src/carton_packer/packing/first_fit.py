# src/carton_packer/packing/first_fit.py

from __future__ import annotations

from carton_packer.models import Axis, Bin, OrientedBox, Vector3
from carton_packer.packing.constraints import (
    collides_with_any,
    fits_in_bin,
    permitted_rotations,
)

# right, back, top
FACE_AXES: tuple[Axis, ...] = (Axis.X, Axis.Y, Axis.Z)


def pack_to_box(item: OrientedBox, bin: Bin, pivot: Vector3) -> bool:
    """
    Commit `item` at `pivot` using the first permitted rotation that fits.

    - Rotations are tried in the bin's permitted order
    - Containment is checked before the (more expensive) collision scan
    - On success a clone is appended to bin.items; the working item is not stored
    - On failure the item is reset to the origin / LWH (unplaced)
    """
    item.move_to(pivot)

    for rotation in permitted_rotations(bin.label_orientation):
        item.rotate(rotation)
        if not fits_in_bin(item, bin):
            continue
        if collides_with_any(item, bin):
            continue
        bin.items.append(item.clone())
        return True

    item.reset()
    return False


def pack_item_simple(item: OrientedBox, bin: Bin) -> bool:
    """
    First-fit placement used for large batches.

    Only the right / back / top faces of resident items are tried, in that order,
    and the first position + rotation that fits is accepted. No scoring, no grid scan.
    """
    if not bin.items:
        return pack_to_box(item, bin, Vector3.origin())

    for existing in bin.items:
        dims = existing.dimensions()
        for axis in FACE_AXES:
            pivot = Vector3.compute_pivot(axis, existing.position, dims)
            if pack_to_box(item, bin, pivot):
                return True
    return False
