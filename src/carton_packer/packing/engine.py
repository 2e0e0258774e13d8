"""Greedy multi-container packing engine."""

from __future__ import annotations

import logging
from typing import Any, Callable

from carton_packer.io.schemas import PackRequest
from carton_packer.models import Bin, ContainerSpec, ItemSpec, OrientedBox, PackingResult
from carton_packer.packing.first_fit import pack_item_simple
from carton_packer.packing.heuristics import pack_item

logger = logging.getLogger(__name__)

# Above this many units the simple first-fit strategy is used for every unit
DEFAULT_SIMPLE_THRESHOLD = 100

PlaceFn = Callable[[OrientedBox, Bin], bool]


class PackingEngine:
    """
    Packs item specs into bins opened from container specs.

    The engine owns deep copies of the specs it is given: callers' lists,
    templates and quantities are never sorted or decremented.
    """

    def __init__(
        self,
        items: list[ItemSpec],
        containers: list[ContainerSpec],
        simple_threshold: int = DEFAULT_SIMPLE_THRESHOLD,
    ) -> None:
        # Largest first; sorted() is stable, so equal volumes keep input order
        self.items = sorted(
            (spec.model_copy(deep=True) for spec in items), key=ItemSpec.volume, reverse=True
        )
        self.containers = sorted(
            (spec.model_copy(deep=True) for spec in containers), key=ContainerSpec.volume, reverse=True
        )
        self.simple_threshold = simple_threshold

    @classmethod
    def from_input(
        cls,
        request: PackRequest | dict[str, Any],
        simple_threshold: int = DEFAULT_SIMPLE_THRESHOLD,
    ) -> PackingEngine:
        if not isinstance(request, PackRequest):
            request = PackRequest.model_validate(request)
        items, containers = request.to_engine_specs()
        return cls(items, containers, simple_threshold=simple_threshold)

    @property
    def total_units(self) -> int:
        return sum(spec.qty for spec in self.items)

    def uses_simple_strategy(self) -> bool:
        return self.total_units > self.simple_threshold

    def pack(self) -> PackingResult:
        """
        Place every unit of demand, opening containers as needed.

        Each call starts from the engine's original supply, so packing twice
        gives identical results.
        """
        supply = [spec.model_copy(deep=True) for spec in self.containers]
        simple = self.uses_simple_strategy()
        place: PlaceFn = pack_item_simple if simple else pack_item

        bins: list[Bin] = []
        unpacked: list[OrientedBox] = []

        for item_spec in self.items:
            for _ in range(item_spec.qty):
                item = item_spec.template.clone()
                if self._place_in_open_bins(item, bins, place):
                    continue
                new_bin = self._open_bin(item, supply, place)
                if new_bin is not None:
                    bins.append(new_bin)
                    continue
                logger.debug(f"unit of {item.id!r} did not fit any container")
                unpacked.append(item)

        logger.info(
            f"packed units={self.total_units - len(unpacked)}, unpacked={len(unpacked)}, "
            f"containers={len(bins)}, strategy={'simple' if simple else 'full'}"
        )
        return PackingResult(containers=bins, unpacked_items=unpacked)

    @staticmethod
    def _place_in_open_bins(item: OrientedBox, bins: list[Bin], place: PlaceFn) -> bool:
        for bin in bins:
            if not bin.can_admit(item):
                continue
            if place(item, bin):
                return True
        return False

    @staticmethod
    def _open_bin(item: OrientedBox, supply: list[ContainerSpec], place: PlaceFn) -> Bin | None:
        for container_spec in supply:
            if container_spec.qty <= 0:
                continue
            new_bin = container_spec.template.clone()
            if not new_bin.can_admit(item):
                continue
            if place(item, new_bin):
                container_spec.qty -= 1
                return new_bin
        return None


def pack(
    request: PackRequest | dict[str, Any],
    simple_threshold: int = DEFAULT_SIMPLE_THRESHOLD,
) -> PackingResult:
    """Validate a wire request and pack it."""
    return PackingEngine.from_input(request, simple_threshold=simple_threshold).pack()
