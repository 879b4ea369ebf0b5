from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import closing
from itertools import islice
from typing import Iterator, Optional
import logging

from ..cancel import CancelToken, check_cancelled
from ..metrics import records_streamed_total, segments_opened_total
from ..transport import Transport
from ..types import IndexedValue, SegmentRecord
from ..warc.parser import ParseLog, WarcParser
from .segment_index import SegmentIndex


class Streamer(ABC):
    """Streams every record of every segment listed in a dataset's index file.

    Segments are fetched strictly one after another so that a shared,
    rate-limited origin only ever sees a single open request per stream.
    """

    def __init__(self, transport: Transport, segment_index: Optional[SegmentIndex] = None) -> None:
        self.transport = transport
        self.segment_index = segment_index or SegmentIndex(transport)
        self._log = logging.getLogger(__name__)

    def stream(
        self,
        hostname: str,
        index_path: str,
        segment_offset: int = 0,
        record_offset: int = 0,
        cancel: Optional[CancelToken] = None,
    ) -> Iterator[SegmentRecord]:
        """Yield ``SegmentRecord``s from segment ``segment_offset`` onward.

        ``record_offset`` only applies to that first segment; every later segment
        is streamed from its first record.
        """
        skip = max(record_offset or 0, 0)
        segments = self.segment_index.lines(hostname, index_path, segment_offset, cancel)
        with closing(segments):
            first = True
            for segment in segments:
                records = self.stream_segment(segment, cancel)
                with closing(records):
                    results: Iterator[SegmentRecord] = records
                    if first and skip:
                        self._log.debug("Skipping %d record(s) of segment #%d", skip, segment.index)
                        results = islice(records, skip, None)
                    first = False
                    for result in results:
                        check_cancelled(cancel)
                        records_streamed_total.inc()
                        yield result

    @abstractmethod
    def stream_segment(
        self,
        segment: IndexedValue[str],
        cancel: Optional[CancelToken] = None,
    ) -> Iterator[SegmentRecord]:
        """Yield all records of one segment, tagged with zero-based record indices."""
        raise NotImplementedError


class WarcParserStreamer(Streamer):
    def __init__(
        self,
        transport: Transport,
        parser: Optional[WarcParser] = None,
        parse_log: Optional[ParseLog] = None,
        segment_index: Optional[SegmentIndex] = None,
    ) -> None:
        super().__init__(transport, segment_index)
        self.parser = parser or WarcParser()
        # Without a parse log the first parse problem ends the stream
        self.parse_log = parse_log

    def stream_segment(
        self,
        segment: IndexedValue[str],
        cancel: Optional[CancelToken] = None,
    ) -> Iterator[SegmentRecord]:
        url = segment.value
        check_cancelled(cancel)
        self._log.info("Streaming segment #%d: %s", segment.index, url)
        segments_opened_total.inc()
        with closing(self.transport.get(url)) as stream:
            records = self.parser.parse(
                stream,
                is_compressed=url.endswith(".gz"),
                parse_log=self.parse_log,
                byte_offset=0,
                cancel=cancel,
            )
            with closing(records):
                for index, record in enumerate(records):
                    yield SegmentRecord(segment, IndexedValue(index, record))
