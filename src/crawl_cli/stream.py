from __future__ import annotations

import argparse
import logging
import sys
from contextlib import closing
from functools import partial
from pathlib import Path
from typing import Callable, Optional

from crawl_cli.config import settings
from crawl_cli.config_loader import JobConfig, load_config
from crawl_core import (
    Checkpoint,
    CheckpointStore,
    HttpTransport,
    LocalCheckpointStore,
    LoggingParseLog,
    RecordFactory,
    SegmentRecord,
    WarcParser,
    WarcParserStreamer,
    WatRecordFactory,
)
from crawl_core.cancel import CancelToken
from crawl_core.logging import setup_logging


Emit = Callable[[str], None]


def build_streamer(hostname: str, *, wat: bool = False) -> WarcParserStreamer:
    transport = HttpTransport(timeout=settings.http_timeout, user_agent=settings.user_agent)
    # A fresh factory per segment keeps the first-metadata-record rewrite per segment
    factory = partial(WatRecordFactory, hostname) if wat else RecordFactory
    return WarcParserStreamer(
        transport,
        parser=WarcParser(record_factory=factory),
        parse_log=LoggingParseLog(),
    )


def build_store() -> LocalCheckpointStore:
    return LocalCheckpointStore(root=Path(settings.checkpoint_dir))


def format_record(result: SegmentRecord) -> str:
    record = result.record.value
    return " ".join([
        str(result.segment.index),
        str(result.record.index),
        record.type,
        record.id or "-",
        record.target_uri or "-",
    ])


def resume_point(job: JobConfig, store: Optional[CheckpointStore]) -> Checkpoint:
    start = Checkpoint(job.segment_offset, job.record_offset, job.entry_offset)
    if store is not None and job.checkpoint:
        saved = store.load(job.checkpoint)
        if saved is not None:
            logging.getLogger(__name__).info(
                "Resuming '%s' at segment=%d record=%d entry=%d",
                job.checkpoint,
                saved.segment_offset,
                saved.record_offset,
                saved.entry_offset,
            )
            return saved
    return start


def stream_records(
    streamer: WarcParserStreamer,
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
        results = streamer.stream(
            hostname,
            job.index_path,
            start.segment_offset,
            start.record_offset,
            cancel,
        )
        with closing(results):
            for result in results:
                emit(format_record(result))
                last = Checkpoint.after_record(result)
                count += 1
                if track and every > 0 and count % every == 0:
                    store.save(job.checkpoint, last)  # type: ignore[union-attr,arg-type]
                if job.limit and count >= job.limit:
                    break
    finally:
        if track and last is not None:
            store.save(job.checkpoint, last)  # type: ignore[union-attr,arg-type]
    return count


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("index_path", nargs="?", type=str, help="Path of the segment index file, e.g. /crawl-data/CC-MAIN-2021-43/warc.paths.gz")
    parser.add_argument("--config", type=Path, default=None, help="YAML file describing the job")
    parser.add_argument("--hostname", type=str, default=None, help=f"Dataset host (default: {settings.hostname})")
    parser.add_argument("--segment-offset", type=int, default=0, help="Zero-based index of the segment to start from")
    parser.add_argument("--record-offset", type=int, default=0, help="Records to skip in the first segment only")
    parser.add_argument("--limit", type=int, default=None, help="Stop after this many outputs")
    parser.add_argument("--checkpoint", type=str, default=None, help="Name of a checkpoint to resume from and update")


def job_from_args(args: argparse.Namespace, parser: argparse.ArgumentParser) -> JobConfig:
    if args.config:
        return load_config(args.config)
    if not args.index_path:
        parser.error("Either provide --config or index_path")
    return JobConfig(
        index_path=args.index_path,
        hostname=args.hostname,
        segment_offset=args.segment_offset,
        record_offset=args.record_offset,
        entry_offset=getattr(args, "entry_offset", 0),
        limit=args.limit,
        checkpoint=args.checkpoint,
    )


def main() -> None:
    setup_logging(settings.log_level)
    log = logging.getLogger(__name__)
    parser = argparse.ArgumentParser(description="Stream the records of every segment listed in a dataset index.")
    add_common_arguments(parser)
    args = parser.parse_args()
    job = job_from_args(args, parser)

    streamer = build_streamer(job.hostname or settings.hostname)
    log.info("Streaming records: index=%s", job.index_path)
    try:
        with closing(streamer.transport):
            count = stream_records(streamer, job, store=build_store(), every=settings.checkpoint_every)
    except KeyboardInterrupt:
        log.warning("Interrupted")
        sys.exit(130)
    log.info("Streamed %d record(s)", count)


if __name__ == "__main__":
    main()
