from __future__ import annotations

import argparse
import json
import logging
import time
from pathlib import Path

from pydantic import ValidationError

from carton_packer.config import configure_logging, get_settings
from carton_packer.containers import container_input_from_preset, get_box_preset
from carton_packer.io.schemas import PackRequest, PackResult
from carton_packer.metrics import summarize
from carton_packer.packing.engine import PackingEngine

logger = logging.getLogger(__name__)


def load_input(path: Path, box_presets: list[str] | None = None, box_qty: int = 1) -> PackRequest:
    """Read a pack request; each named carton preset is added to its containers."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if box_presets and isinstance(data, dict):
        containers = data.setdefault("containers", [])
        for preset_id in box_presets:
            containers.append(container_input_from_preset(get_box_preset(preset_id), qty=box_qty))
    return PackRequest.model_validate(data)


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Carton Packer CLI")
    parser.add_argument("--input", required=True, help="Pack request JSON file")
    parser.add_argument("--output", required=True, help="Output result JSON file")
    parser.add_argument(
        "--threshold",
        type=int,
        default=settings.simple_threshold,
        help="Above this many units the simple (first-fit) strategy is used",
    )
    parser.add_argument(
        "--box-preset",
        action="append",
        default=None,
        help="Add a carton preset (small, medium, large, extra-large) to the containers; repeatable",
    )
    parser.add_argument("--box-qty", type=int, default=1, help="Cartons available per --box-preset")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        request = load_input(Path(args.input), args.box_preset, args.box_qty)
    except (OSError, ValueError, ValidationError) as e:
        parser.error(f"invalid input {args.input}: {e}")

    start = time.perf_counter()
    result = PackingEngine.from_input(request, simple_threshold=args.threshold).pack()
    elapsed_ms = (time.perf_counter() - start) * 1000.0

    output = PackResult.from_result(result).to_wire()
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(output, f, indent=2)

    summary = summarize(result)
    print(f"📦 Containers used : {summary['containers_used']}")
    print(f"✅ Packed units    : {summary['packed_units']}")
    print(f"❌ Unpacked units  : {summary['unpacked_units']}")
    print(f"📊 Mean fill rate  : {summary['mean_utilization'] * 100:.2f}%")
    print(f"⏱️  Done in {elapsed_ms:.1f} ms -> {output_path}")
    logger.debug(f"wrote {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
