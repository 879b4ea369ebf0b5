from __future__ import annotations

from contextlib import closing
from typing import Callable, Iterable, Iterator, Optional
import logging

from ..cancel import CancelToken, check_cancelled
from ..metrics import items_extracted_total
from ..types import ExtractedItem
from ..warc.records import Record
from .streamer import Streamer


ExtractItems = Callable[[Record], Iterable[str]]


class ItemExtractor:
    """Flattens the items extracted from each streamed record into one sequence.

    Every produced item gets the next entry index, whichever segment or record
    it came from. An ``entry_offset`` past the last available item gives an
    empty result rather than an error.
    """

    def __init__(self, streamer: Streamer, extract_items: ExtractItems) -> None:
        self.streamer = streamer
        self.extract_items = extract_items
        self._log = logging.getLogger(__name__)

    def extract(
        self,
        hostname: str,
        index_path: str,
        segment_offset: int = 0,
        record_offset: int = 0,
        entry_offset: int = 0,
        cancel: Optional[CancelToken] = None,
    ) -> Iterator[ExtractedItem]:
        entry_offset = max(entry_offset or 0, 0)
        if entry_offset:
            self._log.debug("Skipping to entry %d", entry_offset)
        results = self.streamer.stream(hostname, index_path, segment_offset, record_offset, cancel)
        index = 0
        with closing(results):
            for result in results:
                for item in self.extract_items(result.record.value):
                    check_cancelled(cancel)
                    # Items before the offset are still counted, just not emitted
                    if index >= entry_offset:
                        items_extracted_total.inc()
                        yield ExtractedItem(index, item)
                    index += 1
