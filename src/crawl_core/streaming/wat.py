from __future__ import annotations

from typing import Any, Iterator, List, Optional
import json

from ..urls import authority_url, create_absolute_url, is_absolute_url
from ..warc.records import METADATA, Record
from .extractor import ItemExtractor
from .streamer import Streamer


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class Lookup:
    """Chained key access over a parsed JSON document.

    ``Lookup(doc)["a"]["b"]`` never raises; any absent hop yields a lookup whose
    value is ``MISSING``.
    """

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def __getitem__(self, key: str) -> "Lookup":
        if isinstance(self.value, dict) and key in self.value:
            return Lookup(self.value[key])
        return Lookup(MISSING)

    @property
    def present(self) -> bool:
        return self.value is not MISSING

    def text(self) -> Optional[str]:
        return self.value if isinstance(self.value, str) else None

    def children(self) -> List[Any]:
        return self.value if isinstance(self.value, list) else []


def _child_urls(base_url: str, parent: Lookup) -> Iterator[str]:
    for child in parent.children():
        # Both keys have been observed in WAT link entries
        node = Lookup(child)
        value = node["url"].text()
        if value is None:
            value = node["href"].text()
        if value is None:
            return
        yield create_absolute_url(base_url, value)


def extract_wat_urls(record: Record) -> Iterator[str]:
    """Yield the URLs found in a WAT metadata record.

    Order: the record's target URI, then body links, head link tags and head
    script tags, the last three resolved against the target URI's host.
    """
    if record.type != METADATA:
        return
    content = record.content_block
    if not content or not isinstance(content, str):
        return
    try:
        document = json.loads(content)
    except (ValueError, RecursionError):
        # RecursionError: nesting deeper than the decoder can follow
        return

    envelope = Lookup(document)["Envelope"]
    target_uri = envelope["WARC-Header-Metadata"]["WARC-Target-URI"].text()
    # Relative in the segment's first metadata record
    if target_uri is None or not is_absolute_url(target_uri):
        return
    yield target_uri

    base_url = authority_url(target_uri)
    html = envelope["Payload-Metadata"]["HTTP-Response-Metadata"]["HTML-Metadata"]
    yield from _child_urls(base_url, html["Links"])
    head = html["Head"]
    yield from _child_urls(base_url, head["Link"])
    yield from _child_urls(base_url, head["Scripts"])


class WatUrlExtractor(ItemExtractor):
    def __init__(self, streamer: Streamer) -> None:
        super().__init__(streamer, extract_wat_urls)
