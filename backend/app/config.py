from __future__ import annotations

import logging
import os
from pathlib import Path

# repository_root/data (we are in backend/app/)
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"
DEFAULT_NOTES_FILE = "notes.json"


def data_dir() -> Path:
    return Path(os.getenv("APP_DATA_DIR", str(DEFAULT_DATA_DIR)))


def notes_file_name() -> str:
    name = os.getenv("NOTES_FILE", DEFAULT_NOTES_FILE).strip()
    # a bare file name only; the store always lives inside the data dir
    if not name or any(ch in name for ch in "/\\") or name in (".", ".."):
        return DEFAULT_NOTES_FILE
    return name


def log_level() -> int:
    name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return logging.INFO
    return level


def cors_allow_origins() -> list[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS", "*")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]
