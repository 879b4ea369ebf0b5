from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from .types import ExtractedItem, SegmentRecord


@dataclass(frozen=True)
class Checkpoint:
    segment_offset: int = 0
    record_offset: int = 0
    entry_offset: int = 0

    @classmethod
    def after_record(cls, result: SegmentRecord) -> "Checkpoint":
        # A record offset past the segment's end is fine: that segment contributes nothing
        return cls(segment_offset=result.segment.index, record_offset=result.record.index + 1)

    def after_item(self, item: ExtractedItem) -> "Checkpoint":
        # Entry indices count from the run's own segment/record offsets, so those stay put
        return Checkpoint(
            segment_offset=self.segment_offset,
            record_offset=self.record_offset,
            entry_offset=item.entry_index + 1,
        )


class CheckpointStore:
    def save(self, name: str, checkpoint: Checkpoint) -> None:
        raise NotImplementedError

    def load(self, name: str) -> Optional[Checkpoint]:
        raise NotImplementedError


@dataclass
class LocalCheckpointStore(CheckpointStore):
    root: Path

    def _ensure(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, name: str) -> Path:
        return self.root / f"checkpoint-{name}.json"

    def save(self, name: str, checkpoint: Checkpoint) -> None:
        self._ensure()
        path = self._path(name)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(asdict(checkpoint)), encoding="utf-8")
        os.replace(tmp, path)

    def load(self, name: str) -> Optional[Checkpoint]:
        path = self._path(name)
        if not path.is_file():
            return None
        data = json.loads(path.read_text(encoding="utf-8"))
        return Checkpoint(
            segment_offset=int(data.get("segment_offset", 0)),
            record_offset=int(data.get("record_offset", 0)),
            entry_offset=int(data.get("entry_offset", 0)),
        )
