from __future__ import annotations

import argparse
import logging
import sys
from contextlib import closing
from typing import Optional

from crawl_cli.config import settings
from crawl_cli.config_loader import JobConfig
from crawl_cli.stream import (
    Emit,
    add_common_arguments,
    build_store,
    build_streamer,
    job_from_args,
    resume_point,
)
from crawl_core import Checkpoint, CheckpointStore, ItemExtractor, WatUrlExtractor
from crawl_core.cancel import CancelToken
from crawl_core.logging import setup_logging


def extract_urls(
    extractor: ItemExtractor,
    job: JobConfig,
    *,
    store: Optional[CheckpointStore] = None,
    emit: Emit = print,
    cancel: Optional[CancelToken] = None,
    every: int = 1000,
) -> int:
    hostname = job.hostname or settings.hostname
    start = resume_point(job, store)
    track = store is not None and bool(job.checkpoint)
    last: Optional[Checkpoint] = None
    count = 0
    try:
        items = extractor.extract(
            hostname,
            job.index_path,
            start.segment_offset,
            start.record_offset,
            start.entry_offset,
            cancel,
        )
        with closing(items):
            for item in items:
                emit(f"{item.entry_index}: {item.item}")
                last = start.after_item(item)
                count += 1
                if track and every > 0 and count % every == 0:
                    store.save(job.checkpoint, last)  # type: ignore[union-attr,arg-type]
                if job.limit and count >= job.limit:
                    break
    finally:
        if track and last is not None:
            store.save(job.checkpoint, last)  # type: ignore[union-attr,arg-type]
    return count


def main() -> None:
    setup_logging(settings.log_level)
    log = logging.getLogger(__name__)
    parser = argparse.ArgumentParser(description="Extract URLs from the WAT metadata records of a dataset.")
    add_common_arguments(parser)
    parser.add_argument("--entry-offset", type=int, default=0, help="Zero-based index of the first URL to print")
    args = parser.parse_args()
    job = job_from_args(args, parser)

    hostname = job.hostname or settings.hostname
    extractor = WatUrlExtractor(build_streamer(hostname, wat=True))
    log.info("Extracting URLs: index=%s", job.index_path)
    try:
        with closing(extractor.streamer.transport):
            count = extract_urls(extractor, job, store=build_store(), every=settings.checkpoint_every)
    except KeyboardInterrupt:
        log.warning("Interrupted")
        sys.exit(130)
    log.info("Extracted %d URL(s)", count)


if __name__ == "__main__":
    main()
