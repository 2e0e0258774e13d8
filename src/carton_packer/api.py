"""FastAPI endpoints for the carton packer."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Callable

from fastapi import APIRouter, Depends, FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from carton_packer.config import configure_logging, get_settings
from carton_packer.containers import BOX_PRESETS
from carton_packer.errors import PresetError, PresetNotFoundError
from carton_packer.io.schemas import PackRequest, PackResult
from carton_packer.metrics import summarize
from carton_packer.packing.engine import PackingEngine
from carton_packer.presets import PresetStore

logger = logging.getLogger(__name__)

configure_logging(get_settings().log_level)

app = FastAPI(
    title="Carton Packer API",
    description="3D carton packing service",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@lru_cache
def get_box_store() -> PresetStore:
    settings = get_settings()
    return PresetStore(settings.presets_dir / "boxPresets.json", defaults=BOX_PRESETS)


@lru_cache
def get_item_box_store() -> PresetStore:
    settings = get_settings()
    return PresetStore(settings.presets_dir / "itemBoxPresets.json")


def run_pack(request: PackRequest, simple_threshold: int) -> tuple[float, PackResult, dict[str, Any]]:
    """Pack synchronously; returns (timing_ms, wire result, summary)."""
    start = time.perf_counter()
    result = PackingEngine.from_input(request, simple_threshold=simple_threshold).pack()
    elapsed_ms = (time.perf_counter() - start) * 1000.0
    return elapsed_ms, PackResult.from_result(result), summarize(result)


@app.post("/pack")
async def pack_endpoint(request: PackRequest) -> dict[str, Any]:
    """
    Pack items into containers.

    Input (request body):
        {
            "items": [{"id": "A", "qty": 4, "dim": [10, 10, 30]}],
            "containers": [{"id": "C1", "qty": 1, "dim": [20, 20, 30]}]
        }

    Returns:
        {"timing": <ms>, "summary": {...}, "result": {"containers": [...], "unpacked_items": [...]}}
    """
    try:
        settings = get_settings()
        # CPU bound: keep it off the event loop
        timing, result, summary = await run_in_threadpool(run_pack, request, settings.simple_threshold)
    except Exception as e:
        logger.error(f"ERROR in /pack endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(
        f"containers={summary['containers_used']}, packed_units={summary['packed_units']}, "
        f"unpacked_units={summary['unpacked_units']}, timing_ms={timing:.1f}"
    )
    return {"timing": timing, "summary": summary, "result": result.to_wire()}


def preset_router(prefix: str, get_store: Callable[[], PresetStore]) -> APIRouter:
    """CRUD routes over one preset collection."""
    router = APIRouter(prefix=prefix)

    @router.get("")
    def list_presets(store: PresetStore = Depends(get_store)) -> dict[str, Any]:
        return {"success": True, "data": store.list_all()}

    @router.post("")
    def save_presets(body: dict[str, Any], store: PresetStore = Depends(get_store)) -> dict[str, Any]:
        try:
            store.replace_all(body.get("data"))
        except PresetError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"success": True, "message": "presets saved"}

    @router.post("/add")
    def add_preset(body: dict[str, Any], store: PresetStore = Depends(get_store)) -> dict[str, Any]:
        try:
            preset = store.add(body)
        except PresetError as e:
            # includes duplicates
            raise HTTPException(status_code=400, detail=str(e))
        return {"success": True, "data": preset}

    @router.put("/{preset_id}")
    def update_preset(
        preset_id: str, body: dict[str, Any], store: PresetStore = Depends(get_store)
    ) -> dict[str, Any]:
        try:
            preset = store.update(preset_id, body)
        except PresetNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return {"success": True, "data": preset}

    @router.delete("/{preset_id}")
    def delete_preset(preset_id: str, store: PresetStore = Depends(get_store)) -> dict[str, Any]:
        try:
            preset = store.delete(preset_id)
        except PresetNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return {"success": True, "data": preset}

    return router


app.include_router(preset_router("/api/box-presets", get_box_store))
app.include_router(preset_router("/api/item-box-presets", get_item_box_store))


@app.get("/health")
async def health() -> dict[str, Any]:
    """Health check endpoint."""
    return {"ok": True}


@app.get("/api/health")
async def api_health() -> dict[str, Any]:
    """Health check alongside the preset routes."""
    return {
        "success": True,
        "message": "server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
