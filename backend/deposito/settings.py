from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    log_level: str = "INFO"


def get_settings() -> Settings:
    # 1) env var
    env = os.getenv("DEPOSITO_DATA_DIR")
    if env and env.strip():
        p = Path(env).expanduser()
    else:
        # 2) default: backend/data
        # deposito/settings.py -> deposito/ -> backend/
        p = Path(__file__).resolve().parents[1] / "data"

    p.mkdir(parents=True, exist_ok=True)

    level = (os.getenv("DEPOSITO_LOG_LEVEL") or "INFO").strip().upper()
    if level not in logging.getLevelNamesMapping():
        level = "INFO"

    return Settings(data_dir=p, log_level=level)


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
