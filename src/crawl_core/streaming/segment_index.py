from __future__ import annotations

from contextlib import closing
from typing import BinaryIO, Callable, Iterator, Optional
import io
import logging

from ..cancel import CancelToken, check_cancelled
from ..errors import InvalidSegmentOffset
from ..transport import Transport, gzip_decompress
from ..types import IndexedValue
from ..urls import is_absolute_url


class SegmentIndex:
    """Forward-only reader over the compressed file listing a dataset's segments."""

    def __init__(
        self,
        transport: Transport,
        decompress: Callable[[BinaryIO], BinaryIO] = gzip_decompress,
        encoding: str = "utf-8",
    ) -> None:
        self.transport = transport
        self.decompress = decompress
        self.encoding = encoding
        self._log = logging.getLogger(__name__)

    @staticmethod
    def index_url(hostname: str, index_path: str) -> str:
        return f"https://{hostname.lower()}{index_path}"

    @staticmethod
    def segment_url(hostname: str, line: str) -> str:
        # Hostname case is kept as given here, unlike index_url
        if is_absolute_url(line):
            return line
        return f"https://{hostname}/{line}"

    def lines(
        self,
        hostname: str,
        index_path: str,
        offset: Optional[int] = None,
        cancel: Optional[CancelToken] = None,
    ) -> Iterator[IndexedValue[str]]:
        """Yield absolute segment URLs starting at line ``offset``.

        Indices are absolute line numbers in the index file. Raises
        ``InvalidSegmentOffset`` when the file ends before line ``offset``.
        """
        start = max(offset or 0, 0)
        url = self.index_url(hostname, index_path)
        check_cancelled(cancel)
        self._log.info("Opening segment index: %s", url)
        with closing(self.transport.get(url)) as raw:
            with io.TextIOWrapper(self.decompress(raw), encoding=self.encoding) as reader:
                index = 0
                while index < start:
                    check_cancelled(cancel)
                    if not reader.readline():
                        raise InvalidSegmentOffset(start)
                    index += 1
                if start:
                    self._log.debug("Resuming segment index at line %d", start)
                while True:
                    check_cancelled(cancel)
                    line = reader.readline()
                    if not line:
                        if index == start:
                            raise InvalidSegmentOffset(start)
                        return
                    yield IndexedValue(index, self.segment_url(hostname, line.rstrip("\r\n")))
                    index += 1
