from .types import IndexedValue, SegmentRecord, ExtractedItem
from .errors import CrawlStreamError, InvalidSegmentOffset, StreamCancelled, WarcParseError
from .transport import Transport, HttpTransport, gzip_decompress
from .checkpoint import Checkpoint, CheckpointStore, LocalCheckpointStore
from .streaming import (
    SegmentIndex,
    Streamer,
    WarcParserStreamer,
    ItemExtractor,
    WatUrlExtractor,
    extract_wat_urls,
)
from .warc import WarcParser, LoggingParseLog, RecordFactory, WatRecordFactory

__version__ = "0.1.0"

__all__ = [
    "IndexedValue",
    "SegmentRecord",
    "ExtractedItem",
    "CrawlStreamError",
    "InvalidSegmentOffset",
    "StreamCancelled",
    "WarcParseError",
    "Transport",
    "HttpTransport",
    "gzip_decompress",
    "Checkpoint",
    "CheckpointStore",
    "LocalCheckpointStore",
    "SegmentIndex",
    "Streamer",
    "WarcParserStreamer",
    "ItemExtractor",
    "WatUrlExtractor",
    "extract_wat_urls",
    "WarcParser",
    "LoggingParseLog",
    "RecordFactory",
    "WatRecordFactory",
]
