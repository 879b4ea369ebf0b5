# tests/conftest.py
import pytest

from support import (
    INDEX_URL,
    FakeTransport,
    RecordingParseLog,
    gzip_lines,
    segment_url,
    warc_record,
)


@pytest.fixture
def make_dataset():
    """
    Factory for a fake dataset: each entry of ``segments`` maps a segment name
    to the record types it holds. Record ids are ``<segment>-<n>``.
    """
    def _make(segments, index_lines=None):
        responses = {}
        names = list(segments)
        responses[INDEX_URL] = gzip_lines(index_lines if index_lines is not None else names)
        for name, types in segments.items():
            body = b"".join(
                warc_record(t, f"{name}-{i}") for i, t in enumerate(types)
            )
            responses[segment_url(name)] = body
        return FakeTransport(responses)
    return _make


@pytest.fixture
def three_segments(make_dataset):
    # Same layout as the classic warcinfo / conversion / metadata sample
    return make_dataset({
        "warcinfo.warc": ["warcinfo"],
        "conversion.warc": ["conversion", "conversion", "conversion"],
        "metadata.warc": ["metadata"],
    })


@pytest.fixture
def parse_log():
    return RecordingParseLog()
