from .records import (
    Record,
    MetadataRecord,
    RecordFactory,
    WatMetadataRecord,
    WatRecordFactory,
    RECORD_TYPES,
    METADATA,
)
from .parser import WarcParser, ParseLog, LoggingParseLog

__all__ = [
    "Record",
    "MetadataRecord",
    "RecordFactory",
    "WatMetadataRecord",
    "WatRecordFactory",
    "RECORD_TYPES",
    "METADATA",
    "WarcParser",
    "ParseLog",
    "LoggingParseLog",
]
