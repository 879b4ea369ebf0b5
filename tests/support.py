from __future__ import annotations

import gzip
import io
import json
from typing import Any, Dict, List, Optional

import requests

from crawl_core.transport import Transport


HOSTNAME = "www.example.com"
INDEX_PATH = "/foobar"
INDEX_URL = f"https://{HOSTNAME}{INDEX_PATH}"


def segment_url(name: str) -> str:
    return f"https://{HOSTNAME}/{name}"


def gzip_lines(lines: List[str]) -> bytes:
    text = "".join(f"{line}\n" for line in lines)
    return gzip.compress(text.encode("utf-8"))


def warc_record(
    record_type: str,
    record_id: str,
    *,
    target_uri: Optional[str] = None,
    content: bytes = b"",
    extra_headers: Optional[Dict[str, str]] = None,
) -> bytes:
    lines = [
        "WARC/1.0",
        f"WARC-Type: {record_type}",
        f"WARC-Record-ID: <urn:uuid:{record_id}>",
        "WARC-Date: 2021-10-16T12:00:00Z",
    ]
    if target_uri is not None:
        lines.append(f"WARC-Target-URI: {target_uri}")
    for name, value in (extra_headers or {}).items():
        lines.append(f"{name}: {value}")
    lines.append(f"Content-Length: {len(content)}")
    head = ("\r\n".join(lines) + "\r\n\r\n").encode("utf-8")
    return head + content + b"\r\n\r\n"


def wat_document(
    target_uri: Optional[str],
    *,
    links: Optional[List[Dict[str, Any]]] = None,
    head_links: Optional[List[Dict[str, Any]]] = None,
    scripts: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    header: Dict[str, Any] = {"WARC-Type": "response"}
    if target_uri is not None:
        header["WARC-Target-URI"] = target_uri
    html: Dict[str, Any] = {}
    if links is not None:
        html["Links"] = links
    head: Dict[str, Any] = {}
    if head_links is not None:
        head["Link"] = head_links
    if scripts is not None:
        head["Scripts"] = scripts
    if head:
        html["Head"] = head
    envelope: Dict[str, Any] = {"WARC-Header-Metadata": header}
    if html:
        envelope["Payload-Metadata"] = {"HTTP-Response-Metadata": {"HTML-Metadata": html}}
    return {"Envelope": envelope}


def wat_record(record_id: str, document: Dict[str, Any], *, target_uri: Optional[str] = None) -> bytes:
    content = json.dumps(document).encode("utf-8")
    return warc_record("metadata", record_id, target_uri=target_uri, content=content)


class TrackedStream(io.BytesIO):
    pass


class FakeTransport(Transport):
    """Serves canned bodies per URL and remembers every request and stream."""

    def __init__(self, responses: Dict[str, bytes]) -> None:
        self.responses = responses
        self.requests: List[str] = []
        self.streams: List[TrackedStream] = []
        self.closed = False

    def get(self, url: str) -> TrackedStream:  # type: ignore[override]
        self.requests.append(url)
        if url not in self.responses:
            raise requests.HTTPError(f"404 Client Error: Not Found for url: {url}")
        stream = TrackedStream(self.responses[url])
        self.streams.append(stream)
        return stream

    def open_streams(self) -> int:
        return sum(1 for s in self.streams if not s.closed)

    def close(self) -> None:
        self.closed = True


class RecordingParseLog:
    def __init__(self) -> None:
        self.skipped: List[str] = []
        self.errors: List[str] = []

    def chunk_skipped(self, chunk: str) -> None:
        self.skipped.append(chunk)

    def error_encountered(self, error: str) -> None:
        self.errors.append(error)



# A metadata document touching every branch the URL extractor reads
FULL_WAT_DOCUMENT = wat_document(
    "http://www.example.com",
    links=[{"url": "/foo.css"}, {"href": "foobar.css"}],
    head_links=[{"url": "https://www.example.com/foo.css"}, {"url": "/foobar.js"}],
    scripts=[{"url": "http://www.example.sg/foobar.js"}, {"url": "/3"}, {"url": "foo_bar.js"}],
)

FULL_WAT_URLS = [
    "http://www.example.com",
    "http://www.example.com/foo.css",
    "http://www.example.com/foobar.css",
    "https://www.example.com/foo.css",
    "http://www.example.com/foobar.js",
    "http://www.example.sg/foobar.js",
    "http://www.example.com/3",
    "http://www.example.com/foo_bar.js",
]
