"""Placement constraints: permitted rotations, containment and non-overlap."""

from __future__ import annotations

from carton_packer.geometry import fits_within
from carton_packer.models import Bin, LabelOrientation, OrientedBox, Rotation

# Every rotation, in the order placement tries them.
ROTATION_ORDER: tuple[Rotation, ...] = (
    Rotation.LWH,
    Rotation.WLH,
    Rotation.WHL,
    Rotation.HLW,
    Rotation.HWL,
    Rotation.LHW,
)

ORIENTATION_RULES: dict[LabelOrientation, frozenset[Rotation]] = {
    LabelOrientation.AUTO: frozenset(ROTATION_ORDER),
    # height axis stays vertical
    LabelOrientation.LENGTH_WIDTH_UP: frozenset({Rotation.LWH, Rotation.WLH}),
    # width axis stays vertical
    LabelOrientation.LENGTH_HEIGHT_UP: frozenset({Rotation.LHW, Rotation.HLW}),
    # length axis stays vertical
    LabelOrientation.WIDTH_HEIGHT_UP: frozenset({Rotation.WHL, Rotation.HWL}),
}

_PERMITTED: dict[LabelOrientation, tuple[Rotation, ...]] = {
    label: tuple(r for r in ROTATION_ORDER if r in allowed)
    for label, allowed in ORIENTATION_RULES.items()
}


def permitted_rotations(label: LabelOrientation) -> tuple[Rotation, ...]:
    """Rotations a bin with this label orientation may use, in try order."""
    return _PERMITTED[label]


def rotation_allowed(label: LabelOrientation, rotation: Rotation) -> bool:
    return rotation in ORIENTATION_RULES[label]


def fits_in_bin(item: OrientedBox, bin: Bin) -> bool:
    """Containment of the item at its current position and rotation."""
    return fits_within(item.position, item.dimensions(), bin.usable_dim)


def collides_with_any(item: OrientedBox, bin: Bin) -> bool:
    """True on the first resident item the candidate overlaps."""
    return any(item.collides(other) for other in bin.items)
