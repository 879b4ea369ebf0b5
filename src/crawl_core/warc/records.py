from __future__ import annotations

from typing import Optional

from requests.structures import CaseInsensitiveDict

from ..urls import create_absolute_url


WARCINFO = "warcinfo"
RESPONSE = "response"
RESOURCE = "resource"
REQUEST = "request"
METADATA = "metadata"
REVISIT = "revisit"
CONVERSION = "conversion"
CONTINUATION = "continuation"

RECORD_TYPES = (
    WARCINFO,
    RESPONSE,
    RESOURCE,
    REQUEST,
    METADATA,
    REVISIT,
    CONVERSION,
    CONTINUATION,
)

FIELD_TARGET_URI = "WARC-Target-URI"


class Record:
    """One parsed WARC record: named header fields plus an optional content block."""

    def __init__(
        self,
        version: str,
        record_type: str,
        record_id: Optional[str],
        date: Optional[str],
    ) -> None:
        self.version = version
        self.type = record_type.lower()
        self.id = record_id
        self.date = date
        self.headers: CaseInsensitiveDict = CaseInsensitiveDict()
        self.content_block: Optional[bytes | str] = None
        self.offset: int = 0

    def set(self, field: str, value: str) -> None:
        self.headers[field] = value

    def set_content_block(self, data: bytes) -> None:
        self.content_block = data or None

    @property
    def target_uri(self) -> Optional[str]:
        return self.headers.get(FIELD_TARGET_URI)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type={self.type!r}, id={self.id!r}, offset={self.offset})"


class MetadataRecord(Record):
    content_block: Optional[str]

    def set_content_block(self, data: bytes) -> None:
        self.content_block = data.decode("utf-8", errors="replace") if data else None


class RecordFactory:
    def create_record(
        self,
        version: str,
        record_type: str,
        record_id: Optional[str],
        date: Optional[str],
    ) -> Record:
        if record_type.lower() == METADATA:
            return MetadataRecord(version, record_type, record_id, date)
        return Record(version, record_type, record_id, date)


class WatMetadataRecord(MetadataRecord):
    """Metadata record whose WARC-Target-URI is made absolute against ``base_url``.

    The first metadata record of a WAT segment describes the segment itself and
    carries a target URI relative to the dataset host.
    """

    def __init__(
        self,
        version: str,
        record_type: str,
        record_id: Optional[str],
        date: Optional[str],
        base_url: str,
    ) -> None:
        super().__init__(version, record_type, record_id, date)
        self.base_url = base_url

    def set(self, field: str, value: str) -> None:
        if field.lower() == FIELD_TARGET_URI.lower():
            value = create_absolute_url(self.base_url, value)
        super().set(field, value)


class WatRecordFactory(RecordFactory):
    """Record factory for one WAT segment parse pass.

    Only the first metadata record it creates gets the target URI rewrite, so a
    fresh instance is needed per segment.
    """

    def __init__(self, hostname: str) -> None:
        self.hostname = hostname
        self._first_metadata = True

    def create_record(
        self,
        version: str,
        record_type: str,
        record_id: Optional[str],
        date: Optional[str],
    ) -> Record:
        if record_type.lower() == METADATA and self._first_metadata:
            self._first_metadata = False
            return WatMetadataRecord(
                version,
                record_type,
                record_id,
                date,
                base_url=f"https://{self.hostname}/",
            )
        return super().create_record(version, record_type, record_id, date)
