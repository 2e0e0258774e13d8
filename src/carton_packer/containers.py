# src/carton_packer/containers.py
from __future__ import annotations

from typing import Any

# Outer carton sizes in cm; weights in kg.
BOX_PRESETS: list[dict[str, Any]] = [
    {
        "id": "small",
        "name": "Small carton",
        "dimensions": [30, 20, 15],
        "thickness": 0.5,
        "netWeight": 0.2,
        "grossWeight": 0.3,
        "description": "For small items",
    },
    {
        "id": "medium",
        "name": "Medium carton",
        "dimensions": [40, 30, 25],
        "thickness": 0.5,
        "netWeight": 0.4,
        "grossWeight": 0.6,
        "description": "For medium-sized items",
    },
    {
        "id": "large",
        "name": "Large carton",
        "dimensions": [60, 40, 35],
        "thickness": 0.5,
        "netWeight": 0.8,
        "grossWeight": 1.2,
        "description": "For large items",
    },
    {
        "id": "extra-large",
        "name": "Extra-large carton",
        "dimensions": [80, 60, 50],
        "thickness": 0.5,
        "netWeight": 1.5,
        "grossWeight": 2.0,
        "description": "For oversized items",
    },
]


def get_box_preset(preset_id: str) -> dict[str, Any]:
    key = preset_id.strip().lower()
    for preset in BOX_PRESETS:
        if preset["id"] == key:
            return dict(preset)
    valid = sorted(p["id"] for p in BOX_PRESETS)
    raise ValueError(f"Unknown box preset '{preset_id}'. Valid: {valid}")


def container_input_from_preset(preset: dict[str, Any], qty: int = 1, **overrides: Any) -> dict[str, Any]:
    """Wire-format container entry built from a carton preset."""
    container = {
        "id": preset.get("name", preset["id"]),
        "qty": qty,
        "dim": list(preset["dimensions"]),
        "thickness": preset.get("thickness", 0.0),
        "containerNetWeight": preset.get("netWeight", 0.0),
        "containerGrossWeight": preset.get("grossWeight", 0.0),
    }
    container.update(overrides)
    return container
