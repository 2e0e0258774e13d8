"""Geometry utilities for carton packing."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Vector3


Bounds = tuple[float, float, float, float, float, float]


def boxes_overlap(a: Bounds, b: Bounds) -> bool:
    """
    Axis-aligned bounding box (AABB) overlap test.

    a, b are bounds: (x1, y1, z1, x2, y2, z2)

    Overlap exists only if they overlap on ALL 3 axes with positive volume.
    Touching faces/edges (ax2 == bx1) is NOT considered overlap.
    """
    ax1, ay1, az1, ax2, ay2, az2 = a
    bx1, by1, bz1, bx2, by2, bz2 = b

    if ax2 <= bx1 or bx2 <= ax1:
        return False
    if ay2 <= by1 or by2 <= ay1:
        return False
    if az2 <= bz1 or bz2 <= az1:
        return False
    return True


def placement_bounds(position: "Vector3", dims: "Vector3") -> Bounds:
    x, y, z = position.length, position.width, position.height
    return (x, y, z, x + dims.length, y + dims.width, z + dims.height)


def fits_within(position: "Vector3", dims: "Vector3", space: "Vector3") -> bool:
    """True when a box of `dims` at `position` stays inside `space` on all three axes."""
    return (
        position.length + dims.length <= space.length
        and position.width + dims.width <= space.width
        and position.height + dims.height <= space.height
    )
