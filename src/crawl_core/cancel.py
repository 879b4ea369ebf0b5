from __future__ import annotations

import threading
from typing import Optional

from .errors import StreamCancelled


CancelToken = threading.Event


def check_cancelled(cancel: Optional[CancelToken]) -> None:
    if cancel is not None and cancel.is_set():
        raise StreamCancelled("Streaming cancelled")
