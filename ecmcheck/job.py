"""Job lifecycle: open, per-run and per-event processing, close."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO, Union

from .aggregate import RunAggregator
from .classify import classify_event
from .config import JobConfig
from .cuts import NO_CUTS, CutTable
from .errors import MissingInputCollection, OutputWriteFailure
from .io import detect_format, get_reader, get_writer
from .io.writer_base import Writer
from .models import EventDerived, MCEvent
from .report import Report, emit, flavour_counts

logger = logging.getLogger(__name__)

NO_CUTS_ORDINAL = 0


class AnalysisJob:
    """State of one analysis job.

    Owns the cut table, the run aggregator and the open output writer. Use as
    a context manager so the output is flushed and closed even when event
    processing fails.
    """

    def __init__(self, config: JobConfig, writer: Writer, stream: Optional[TextIO] = None):
        self.config = config
        self.writer = writer
        self.stream = stream
        self.cuts = CutTable(config.cut_capacity)
        self.cuts.declare(NO_CUTS_ORDINAL, NO_CUTS)
        for label in config.extra_stages:
            self.cuts.add_stage(label)
        self.aggregator = RunAggregator(config.heartbeat, on_heartbeat=self._heartbeat)
        self.n_skipped = 0
        self.report: Optional[Report] = None

    @property
    def n_run(self) -> int:
        return self.aggregator.n_run

    @property
    def n_evt(self) -> int:
        return self.aggregator.n_evt

    @property
    def rows(self) -> list[EventDerived]:
        return self.aggregator.rows

    @property
    def closed(self) -> bool:
        return self.report is not None

    def note(self, msg: str) -> None:
        if not self.config.quiet:
            print(msg, file=self.stream if self.stream is not None else sys.stderr)

    def _heartbeat(self, n_evt: int) -> None:
        self.note(f"  Processed {n_evt} events")

    def process_run_header(self, run_number: Optional[int] = None) -> None:
        self.aggregator.on_run_start()
        logger.debug("run %s started (run %d of job)", run_number, self.aggregator.n_run)

    def process_event(self, event: MCEvent) -> EventDerived:
        """Classify ``event`` and append its row.

        Raises MissingInputCollection before anything is recorded when the
        configured collection is absent.
        """
        particles = event.get_collection(self.config.collection)
        derived = classify_event(particles, self.config.ecm)
        self.cuts.record_pass(NO_CUTS_ORDINAL)
        self.aggregator.on_event(derived)
        return derived

    def skip_event(self, event: MCEvent, reason: Exception) -> None:
        self.n_skipped += 1
        logger.warning("skipping event %d: %s", event.event_number, reason)

    def close(self) -> Report:
        """Emit the summary, then flush dataset and histogram and close the output.

        The summary is printed even when the flush fails. Closing twice returns
        the first report and never retries the flush.
        """
        if self.report is not None:
            return self.report
        self.report = Report(
            n_events=self.n_evt,
            n_runs=self.n_run,
            n_skipped=self.n_skipped,
            cuts=self.cuts.render(),
            output=self.config.output,
            flavours=flavour_counts(self.rows),
        )
        if not self.config.quiet:
            emit(self.report, self.stream)
        try:
            self.writer.write(self.rows, self.cuts)
        finally:
            self.writer.close()
        return self.report

    def __enter__(self) -> "AnalysisJob":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None or self.closed:
            return
        # Best-effort flush of what was built before the failure.
        try:
            self.close()
        except OutputWriteFailure as close_exc:
            logger.error("output flush after failure also failed: %s", close_exc)


def open_job(
    config: JobConfig,
    writer: Optional[Writer] = None,
    stream: Optional[TextIO] = None,
) -> AnalysisJob:
    """Open the output destination and return a fresh job.

    Raises OutputWriteFailure if the destination cannot be created.
    """
    if writer is None:
        fmt = config.output_format or detect_format(config.output)
        writer = get_writer(fmt)
    if not config.quiet:
        print(config.describe(), file=stream if stream is not None else sys.stderr)
    writer.open(config.output)
    return AnalysisJob(config, writer, stream=stream)


def process_run_header(job: AnalysisJob, run_number: Optional[int] = None) -> None:
    job.process_run_header(run_number)


def process_event(job: AnalysisJob, event: MCEvent) -> EventDerived:
    return job.process_event(event)


def close_job(job: AnalysisJob) -> Report:
    return job.close()


def run(
    inputs: Iterable[Union[str, Path]],
    config: Optional[JobConfig] = None,
    *,
    input_format: Optional[str] = None,
    max_events: int = -1,
    stream: Optional[TextIO] = None,
) -> Report:
    """Analyse event files, one run per file, and write the output.

    Events missing the configured collection are skipped. Any other error
    aborts the job after a best-effort flush of the output.
    """
    config = config or JobConfig()
    paths = [str(p) for p in inputs]
    for p in paths:
        if not Path(p).exists():
            raise FileNotFoundError(f"Input file not found: {p}")
    formats = [input_format or detect_format(p) for p in paths]
    readers = [get_reader(fmt) for fmt in formats]

    with open_job(config, stream=stream) as job:
        seen = 0
        for run_number, (path, fmt, reader) in enumerate(zip(paths, formats, readers), start=1):
            if 0 <= max_events <= seen:
                break
            job.process_run_header(run_number)
            job.note(f"Reading {fmt}: {path}")
            for event in reader.iter_events(path, run_number=run_number):
                if 0 <= max_events <= seen:
                    break
                seen += 1
                try:
                    job.process_event(event)
                except MissingInputCollection as e:
                    job.skip_event(event, e)
        return job.close()
