"""JSON-file backed preset store (carton and item-box catalogs)."""

from __future__ import annotations

import copy
import json
import logging
import threading
from pathlib import Path
from typing import Any

from carton_packer.errors import DuplicatePresetError, PresetError, PresetNotFoundError

logger = logging.getLogger(__name__)

Preset = dict[str, Any]


class PresetStore:
    """
    A list of presets keyed by "id", persisted as one JSON array.

    The file is created with `defaults` the first time it is read.
    """

    def __init__(self, path: Path, defaults: list[Preset] | None = None) -> None:
        self.path = Path(path)
        self.defaults = copy.deepcopy(defaults or [])
        self._lock = threading.Lock()

    def _ensure_file(self) -> None:
        if self.path.exists():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._write(self.defaults)
        logger.info(f"created preset file {self.path}")

    def _read(self) -> list[Preset]:
        self._ensure_file()
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise PresetError(f"{self.path} does not hold a JSON array")
        return data

    def _write(self, data: list[Preset]) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    @staticmethod
    def _check(preset: Any) -> Preset:
        if not isinstance(preset, dict) or not isinstance(preset.get("id"), str) or not preset["id"]:
            raise PresetError("preset must be an object with a non-empty string 'id'")
        return preset

    def list_all(self) -> list[Preset]:
        with self._lock:
            return self._read()

    def get(self, preset_id: str) -> Preset:
        for preset in self.list_all():
            if preset.get("id") == preset_id:
                return preset
        raise PresetNotFoundError(f"preset '{preset_id}' not found")

    def replace_all(self, data: Any) -> list[Preset]:
        if not isinstance(data, list):
            raise PresetError("preset data must be a list")
        presets = [self._check(p) for p in data]
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._write(presets)
        return presets

    def add(self, preset: Any) -> Preset:
        preset = self._check(preset)
        with self._lock:
            data = self._read()
            if any(p.get("id") == preset["id"] for p in data):
                raise DuplicatePresetError(f"preset '{preset['id']}' already exists")
            data.append(preset)
            self._write(data)
        return preset

    def update(self, preset_id: str, changes: dict[str, Any]) -> Preset:
        """Merge `changes` into the preset; the id never changes."""
        with self._lock:
            data = self._read()
            for index, preset in enumerate(data):
                if preset.get("id") == preset_id:
                    data[index] = {**preset, **changes, "id": preset_id}
                    self._write(data)
                    return data[index]
        raise PresetNotFoundError(f"preset '{preset_id}' not found")

    def delete(self, preset_id: str) -> Preset:
        with self._lock:
            data = self._read()
            for index, preset in enumerate(data):
                if preset.get("id") == preset_id:
                    removed = data.pop(index)
                    self._write(data)
                    return removed
        raise PresetNotFoundError(f"preset '{preset_id}' not found")
