from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from .warc.records import Record


T = TypeVar("T")


@dataclass(frozen=True)
class IndexedValue(Generic[T]):
    """A value with its zero-based position in the enumeration that produced it."""

    index: int
    value: T


@dataclass(frozen=True)
class SegmentRecord:
    segment: IndexedValue[str]
    record: IndexedValue[Record]


@dataclass(frozen=True)
class ExtractedItem:
    # position in the flattened item space, independent of segment and record
    entry_index: int
    item: str
