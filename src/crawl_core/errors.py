from __future__ import annotations


class CrawlStreamError(Exception):
    pass


class InvalidSegmentOffset(CrawlStreamError, ValueError):
    def __init__(self, offset: int) -> None:
        super().__init__(f"Invalid segment offset: {offset} (index file has fewer lines)")
        self.offset = offset


class StreamCancelled(CrawlStreamError):
    pass


class WarcParseError(CrawlStreamError):
    def __init__(self, message: str, offset: int | None = None) -> None:
        super().__init__(message if offset is None else f"{message} (offset={offset})")
        self.offset = offset
