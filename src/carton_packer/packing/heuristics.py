"""Scored (Bottom-Left-Fill flavoured) placement search."""

from __future__ import annotations

import math
from typing import Iterator

from carton_packer.models import Bin, OrientedBox, Vector3
from carton_packer.packing.constraints import (
    collides_with_any,
    fits_in_bin,
    permitted_rotations,
)
from carton_packer.packing.first_fit import FACE_AXES, pack_to_box

# Grid scan only while the bin is nearly empty
GRID_SCAN_MAX_ITEMS = 5
GRID_DIVISIONS = 5
MIN_GRID_STEP = 5

BOTTOM_BONUS = 0.5
CORNER_BONUS = 0.3


def grid_step(extent: float) -> int:
    return max(MIN_GRID_STEP, math.floor(extent / GRID_DIVISIONS))


def _axis_steps(extent: float) -> list[float]:
    step = grid_step(extent)
    values = []
    value = 0
    while value < extent:
        values.append(float(value))
        value += step
    return values


def grid_positions(bin: Bin) -> Iterator[Vector3]:
    """Coarse lattice over the bin interior, length-major."""
    dim = bin.usable_dim
    heights = _axis_steps(dim.height)
    widths = _axis_steps(dim.width)
    for x in _axis_steps(dim.length):
        for y in widths:
            for z in heights:
                yield Vector3(length=x, width=y, height=z)


def candidate_positions(bin: Bin) -> list[Vector3]:
    """
    Candidate pivots for the next item:
      the origin,
      (x+L, y, z), (x, y+W, z), (x, y, z+H) for each resident item,
      plus a coarse grid while the bin holds fewer than GRID_SCAN_MAX_ITEMS items.
    Duplicates (exact coordinates) are dropped, first occurrence wins.
    """
    seen: dict[tuple[float, float, float], Vector3] = {}

    def add(pos: Vector3) -> None:
        seen.setdefault(pos.as_tuple(), pos)

    add(Vector3.origin())
    for existing in bin.items:
        dims = existing.dimensions()
        for axis in FACE_AXES:
            add(Vector3.compute_pivot(axis, existing.position, dims))

    if len(bin.items) < GRID_SCAN_MAX_ITEMS:
        for pos in grid_positions(bin):
            add(pos)

    return list(seen.values())


def score_position(pos: Vector3, bin: Bin) -> float:
    """Closer to the origin is better; floor contact and wall contact earn bonuses."""
    dim = bin.usable_dim
    max_reach = dim.length + dim.width + dim.height
    distance_score = 0.0
    if max_reach > 0:
        distance_score = (max_reach - (pos.length + pos.width + pos.height)) / max_reach
    bottom_bonus = BOTTOM_BONUS if pos.height == 0 else 0.0
    corner_bonus = CORNER_BONUS if pos.length == 0 or pos.width == 0 else 0.0
    return distance_score + bottom_bonus + corner_bonus


def _is_floor_corner(pos: Vector3) -> bool:
    return pos.height == 0 and (pos.length == 0 or pos.width == 0)


def find_best_position(item: OrientedBox, bin: Bin) -> Vector3 | None:
    """
    Highest-scoring feasible candidate position for `item`, or None.

    A feasible candidate touching both the floor and a side wall is returned at once.
    Ties keep the earliest candidate. Mutates item position/rotation while searching.
    """
    rotations = permitted_rotations(bin.label_orientation)
    best: Vector3 | None = None
    best_score = -math.inf

    for pos in candidate_positions(bin):
        item.move_to(pos)
        for rotation in rotations:
            item.rotate(rotation)
            if not fits_in_bin(item, bin) or collides_with_any(item, bin):
                continue

            if _is_floor_corner(pos):
                return pos

            # score depends only on position; one feasible rotation is enough
            score = score_position(pos, bin)
            if score > best_score:
                best, best_score = pos, score
            break

    return best


def pack_item(item: OrientedBox, bin: Bin) -> bool:
    """Full strategy: origin for an empty bin, otherwise the best scored candidate."""
    if not bin.items:
        return pack_to_box(item, bin, Vector3.origin())

    best = find_best_position(item, bin)
    if best is None:
        item.reset()
        return False
    return pack_to_box(item, bin, best)
