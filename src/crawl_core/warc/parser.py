from __future__ import annotations

from typing import BinaryIO, Callable, Iterator, List, Optional, Protocol, Tuple
import io
import logging

from ..cancel import CancelToken, check_cancelled
from ..errors import WarcParseError
from ..metrics import parse_problems_total
from ..transport import gzip_decompress
from .records import Record, RecordFactory


VERSION_PREFIX = b"WARC/"
# Content-Length is untrusted input, so blocks are read in bounded pieces
READ_CHUNK_SIZE = 1 << 16


class ParseLog(Protocol):
    def chunk_skipped(self, chunk: str) -> None: ...

    def error_encountered(self, error: str) -> None: ...


class LoggingParseLog:
    """Parse log that forwards every problem to the standard logger."""

    def __init__(self, logger: Optional[logging.Logger] = None, max_chunk_chars: int = 200) -> None:
        self._log = logger or logging.getLogger(__name__)
        self.max_chunk_chars = max_chunk_chars

    def chunk_skipped(self, chunk: str) -> None:
        shown = chunk if len(chunk) <= self.max_chunk_chars else chunk[: self.max_chunk_chars] + "..."
        self._log.warning("Skipped unparseable chunk (%d chars): %r", len(chunk), shown)

    def error_encountered(self, error: str) -> None:
        self._log.error("WARC parse error: %s", error)


class _RecordError(Exception):
    pass


class _LineReader:
    def __init__(self, stream: BinaryIO, byte_offset: int) -> None:
        self._stream = stream
        self.position = byte_offset

    def readline(self) -> bytes:
        line = self._stream.readline()
        self.position += len(line)
        return line

    def read(self, size: int) -> bytes:
        chunks: List[bytes] = []
        remaining = size
        while remaining > 0:
            data = self._stream.read(min(remaining, READ_CHUNK_SIZE))
            if not data:
                break
            chunks.append(data)
            remaining -= len(data)
        body = b"".join(chunks)
        self.position += len(body)
        return body


def _is_blank(line: bytes) -> bool:
    return not line.strip()


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _strip_brackets(value: Optional[str]) -> Optional[str]:
    # WARC-Record-ID is written as <urn:uuid:...>
    if value is None:
        return None
    return value.strip("<>") or None


class WarcParser:
    """Lazy WARC/1.x record parser.

    ``record_factory`` is called once per ``parse`` call, so any state a factory
    keeps (such as "first metadata record seen") is bound to a single segment.
    """

    def __init__(
        self,
        record_factory: Callable[[], RecordFactory] = RecordFactory,
        decompress: Callable[[BinaryIO], BinaryIO] = gzip_decompress,
    ) -> None:
        self.record_factory = record_factory
        self.decompress = decompress

    def parse(
        self,
        stream: BinaryIO,
        is_compressed: bool = False,
        parse_log: Optional[ParseLog] = None,
        byte_offset: int = 0,
        cancel: Optional[CancelToken] = None,
    ) -> Iterator[Record]:
        factory = self.record_factory()
        source = self.decompress(stream) if is_compressed else stream
        buffered = source if isinstance(source, io.BufferedIOBase) else io.BufferedReader(source)  # type: ignore[arg-type]
        reader = _LineReader(buffered, byte_offset)  # type: ignore[arg-type]
        try:
            resync = False
            while True:
                check_cancelled(cancel)
                version_line, start, skipped = self._seek_version_line(reader)
                if skipped and not resync:
                    self._report(parse_log, "chunk_skipped", _decode(skipped), start)
                resync = False
                if version_line is None:
                    return
                try:
                    record = self._read_record(factory, reader, version_line, start)
                except _RecordError as e:
                    self._report(parse_log, "error_encountered", str(e), start)
                    resync = True
                    continue
                yield record
        finally:
            if source is not stream:
                source.close()

    def _seek_version_line(self, reader: _LineReader) -> Tuple[Optional[bytes], int, bytes]:
        skipped: List[bytes] = []
        while True:
            start = reader.position
            line = reader.readline()
            if not line:
                return None, start, b"".join(skipped)
            if line.startswith(VERSION_PREFIX):
                return line, start, b"".join(skipped)
            if skipped or not _is_blank(line):
                skipped.append(line)

    def _read_headers(self, reader: _LineReader) -> List[Tuple[str, str]]:
        headers: List[Tuple[str, str]] = []
        while True:
            line = reader.readline()
            if not line:
                raise _RecordError("Unexpected end of stream inside record header")
            if _is_blank(line):
                return headers
            text = _decode(line).rstrip("\r\n")
            if text[:1] in (" ", "\t") and headers:
                # folded continuation of the previous field
                name, value = headers[-1]
                headers[-1] = (name, f"{value} {text.strip()}")
                continue
            name, sep, value = text.partition(":")
            if not sep or not name.strip():
                raise _RecordError(f"Malformed header line: {text!r}")
            headers.append((name.strip(), value.strip()))

    def _read_record(
        self,
        factory: RecordFactory,
        reader: _LineReader,
        version_line: bytes,
        start: int,
    ) -> Record:
        version = _decode(version_line).strip()[len("WARC/"):]
        headers = self._read_headers(reader)
        fields = {name.lower(): value for name, value in headers}
        record_type = fields.get("warc-type")
        if not record_type:
            raise _RecordError("Missing WARC-Type header")
        raw_length = fields.get("content-length")
        if raw_length is None:
            raise _RecordError("Missing Content-Length header")
        try:
            length = int(raw_length)
        except ValueError:
            raise _RecordError(f"Invalid Content-Length: {raw_length!r}") from None
        if length < 0:
            raise _RecordError(f"Invalid Content-Length: {raw_length!r}")

        record = factory.create_record(
            version,
            record_type,
            _strip_brackets(fields.get("warc-record-id")),
            fields.get("warc-date"),
        )
        record.offset = start
        for name, value in headers:
            record.set(name, value)
        body = reader.read(length)
        if len(body) < length:
            raise _RecordError(
                f"Truncated content block: expected {length} bytes, got {len(body)}"
            )
        record.set_content_block(body)
        return record

    def _report(self, parse_log: Optional[ParseLog], kind: str, text: str, offset: int) -> None:
        parse_problems_total.labels(kind=kind).inc()
        if parse_log is None:
            raise WarcParseError(text, offset)
        if kind == "chunk_skipped":
            parse_log.chunk_skipped(text)
        else:
            parse_log.error_encountered(text)
