from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


@dataclass
class JobConfig:
    index_path: str
    hostname: Optional[str] = None
    segment_offset: int = 0
    record_offset: int = 0
    entry_offset: int = 0
    limit: Optional[int] = None
    checkpoint: Optional[str] = None


def _int(data: Dict[str, Any], key: str, default: int = 0) -> int:
    value = data.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be an integer, got {value!r}") from None


def load_config(path: Path) -> JobConfig:
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Job config must be a mapping: {path}")
    return config_from_dict(data)


def config_from_dict(data: Dict[str, Any]) -> JobConfig:
    index_path = data.get("index_path")
    if not index_path:
        raise ValueError("index_path is required")
    limit = data.get("limit")
    return JobConfig(
        index_path=str(index_path),
        hostname=data.get("hostname"),
        segment_offset=_int(data, "segment_offset"),
        record_offset=_int(data, "record_offset"),
        entry_offset=_int(data, "entry_offset"),
        limit=_int(data, "limit") if limit is not None else None,
        checkpoint=data.get("checkpoint"),
    )
