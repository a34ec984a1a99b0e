"""ecmcheck: truth-level centre-of-mass energy check for e+e- -> ZH -> qq + X events."""

from __future__ import annotations

__version__ = "0.1.0"

from .aggregate import RunAggregator
from .classify import classify_event
from .config import JobConfig
from .cuts import CutTable
from .errors import (
    CapacityExceeded,
    EcmCheckError,
    MissingInputCollection,
    OutputWriteFailure,
    UnknownStage,
)
from .job import AnalysisJob, close_job, open_job, process_event, process_run_header, run
from .models import EventDerived, FourVector, MCEvent, MCParticle
from .report import Report

__all__ = [
    "__version__",
    "run",
    "open_job",
    "process_event",
    "process_run_header",
    "close_job",
    "AnalysisJob",
    "JobConfig",
    "classify_event",
    "CutTable",
    "RunAggregator",
    "Report",
    "FourVector",
    "MCParticle",
    "MCEvent",
    "EventDerived",
    "EcmCheckError",
    "MissingInputCollection",
    "CapacityExceeded",
    "UnknownStage",
    "OutputWriteFailure",
]
