from __future__ import annotations

import threading

import pytest

from crawl_core import InvalidSegmentOffset, StreamCancelled
from crawl_core.streaming import SegmentIndex
from support import HOSTNAME, INDEX_PATH, INDEX_URL, FakeTransport, gzip_lines


LINES = ["crawl-data/a.warc.gz", "crawl-data/b.warc.gz", "crawl-data/c.warc.gz"]


def _index(lines=LINES) -> FakeTransport:
    return FakeTransport({INDEX_URL: gzip_lines(lines)})


@pytest.mark.parametrize("offset", [None, 0, -5])
def test_lines_from_start(offset):
    index = SegmentIndex(_index())

    values = list(index.lines(HOSTNAME, INDEX_PATH, offset))

    assert [(v.index, v.value) for v in values] == [
        (0, f"https://{HOSTNAME}/crawl-data/a.warc.gz"),
        (1, f"https://{HOSTNAME}/crawl-data/b.warc.gz"),
        (2, f"https://{HOSTNAME}/crawl-data/c.warc.gz"),
    ]


def test_resumed_lines_keep_absolute_numbers():
    index = SegmentIndex(_index())

    values = list(index.lines(HOSTNAME, INDEX_PATH, 1))

    assert [v.index for v in values] == [1, 2]
    assert values[0].value.endswith("/crawl-data/b.warc.gz")


def test_offset_of_last_line_yields_only_it():
    index = SegmentIndex(_index())

    values = list(index.lines(HOSTNAME, INDEX_PATH, len(LINES) - 1))

    assert [v.index for v in values] == [2]


@pytest.mark.parametrize("offset", [3, 4, 100])
def test_offset_at_or_past_length_fails(offset):
    transport = _index()
    index = SegmentIndex(transport)

    with pytest.raises(InvalidSegmentOffset) as info:
        list(index.lines(HOSTNAME, INDEX_PATH, offset))
    assert info.value.offset == offset
    assert transport.open_streams() == 0


def test_empty_index_has_no_anchor_line():
    index = SegmentIndex(_index([]))

    with pytest.raises(InvalidSegmentOffset):
        list(index.lines(HOSTNAME, INDEX_PATH))


def test_invalid_offset_is_a_value_error():
    assert issubclass(InvalidSegmentOffset, ValueError)


def test_urls():
    assert SegmentIndex.index_url("Data.CommonCrawl.ORG", "/x/wat.paths.gz") == "https://data.commoncrawl.org/x/wat.paths.gz"
    assert SegmentIndex.segment_url("Data.CommonCrawl.ORG", "x/1.warc.gz") == "https://Data.CommonCrawl.ORG/x/1.warc.gz"
    assert SegmentIndex.segment_url("h", "s3://bucket/1.warc.gz") == "s3://bucket/1.warc.gz"


def test_windows_line_endings_are_stripped():
    index = SegmentIndex(FakeTransport({INDEX_URL: gzip_lines(["a.warc\r", "b.warc\r"])}))

    values = [v.value for v in index.lines(HOSTNAME, INDEX_PATH)]

    assert values == [f"https://{HOSTNAME}/a.warc", f"https://{HOSTNAME}/b.warc"]


def test_cancel_while_reading_lines():
    cancel = threading.Event()
    transport = _index()
    lines = SegmentIndex(transport).lines(HOSTNAME, INDEX_PATH, cancel=cancel)

    assert next(lines).index == 0
    cancel.set()
    with pytest.raises(StreamCancelled):
        next(lines)
    assert transport.open_streams() == 0
