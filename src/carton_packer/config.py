"""Environment-driven settings; loads .env locally via python-dotenv."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from carton_packer.packing.engine import DEFAULT_SIMPLE_THRESHOLD

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    simple_threshold: int = DEFAULT_SIMPLE_THRESHOLD
    presets_dir: Path = Path("data")
    log_level: str = "INFO"
    worker_timeout: float = 60.0


def get_settings() -> Settings:
    """Read settings from the environment (a local .env never overrides real variables)."""
    load_dotenv(override=False)
    return Settings(
        simple_threshold=int(os.getenv("CARTON_PACKER_SIMPLE_THRESHOLD", DEFAULT_SIMPLE_THRESHOLD)),
        presets_dir=Path(os.getenv("CARTON_PACKER_PRESETS_DIR", "data")),
        log_level=os.getenv("CARTON_PACKER_LOG_LEVEL", "INFO").upper(),
        worker_timeout=float(os.getenv("CARTON_PACKER_WORKER_TIMEOUT", "60")),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
