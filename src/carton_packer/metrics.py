from __future__ import annotations

from typing import Any

from carton_packer.models import Bin, PackingResult


def packed_volume(bin: Bin) -> float:
    return sum(item.base_dim.volume() for item in bin.items)


def bin_utilization(bin: Bin) -> float:
    container_volume = bin.usable_dim.volume()
    return 0.0 if container_volume == 0 else packed_volume(bin) / container_volume


def summarize(result: PackingResult) -> dict[str, Any]:
    packed_units = sum(len(b.items) for b in result.containers)
    utilizations = [bin_utilization(b) for b in result.containers]
    mean_utilization = sum(utilizations) / len(utilizations) if utilizations else 0.0
    return {
        "containers_used": len(result.containers),
        "packed_units": packed_units,
        "unpacked_units": len(result.unpacked_items),
        "mean_utilization": mean_utilization,
    }
