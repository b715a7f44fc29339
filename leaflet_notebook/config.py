from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

OPTIONS_PATH_ENV = "LEAFLET_NOTEBOOK_OPTIONS"


def options_path() -> Path | None:
    raw = (os.getenv(OPTIONS_PATH_ENV) or "").strip()
    return Path(raw).expanduser() if raw else None


def _load_yaml(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid options yaml root: {path}")
    return data


@lru_cache(maxsize=8)
def _load_options_file(path: str) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"{OPTIONS_PATH_ENV} points to a missing file: {p}")
    data = _load_yaml(p)
    logger.info("Loaded %d map option default(s) from %s", len(data), p)
    return data


def configured_defaults() -> dict[str, Any]:
    """
    Option defaults from the YAML file named by `LEAFLET_NOTEBOOK_OPTIONS`, if any.

    Keys use the same hyphenated names as view options (e.g. `tile-layer-url`).
    """
    path = options_path()
    if path is None:
        return {}
    # Copy so callers can't mutate the cached dict.
    return dict(_load_options_file(str(path.resolve())))


def clear_config_cache() -> None:
    """
    Drop cached option files.

    Edits to the YAML file are otherwise not picked up until the process restarts.
    """
    _load_options_file.cache_clear()
