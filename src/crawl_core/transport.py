from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO, Optional
import gzip
import logging

import requests


DEFAULT_USER_AGENT = "crawl-stream/0.1"


class Transport(ABC):
    @abstractmethod
    def get(self, url: str) -> BinaryIO:
        """Perform one GET and return the response body as a readable byte stream.

        The caller owns the returned stream and must close it. No retries are
        attempted; failures propagate as raised by the underlying client.
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release any connections the transport holds."""


class HttpTransport(Transport):
    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        timeout: float | None = 60.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.session = session or requests.Session()
        self.timeout = timeout
        self.user_agent = user_agent
        self._log = logging.getLogger(__name__)

    def get(self, url: str) -> BinaryIO:
        self._log.debug("GET %s", url)
        resp = self.session.get(
            url,
            stream=True,
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent},
        )
        try:
            resp.raise_for_status()
        except requests.HTTPError:
            resp.close()
            raise
        # Payloads are decompressed by the caller, not by urllib3
        resp.raw.decode_content = False
        return resp.raw  # type: ignore[return-value]

    def close(self) -> None:
        self.session.close()


def gzip_decompress(stream: BinaryIO) -> BinaryIO:
    # GzipFile reads concatenated members, which is how WARC/WAT segments are stored
    return gzip.GzipFile(fileobj=stream, mode="rb")  # type: ignore[return-value]
