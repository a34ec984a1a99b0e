from __future__ import annotations

from pathlib import Path

from .hepmc3 import HepMC3Reader
from .lhe import LHEReader
from .parquet import ParquetWriter, read_parquet_summary
from .registry import detect_format, get_reader, get_writer, register
from .root import RootWriter, read_root_summary

register("hepmc3", reader=lambda: HepMC3Reader())
register("lhe", reader=lambda: LHEReader())
register("root", writer=lambda: RootWriter())
register("parquet", writer=lambda: ParquetWriter())


def read_summary(path: str | Path, format: str | None = None) -> dict:
    """Row count and cut table of a file written by an analysis job."""
    if format is None:
        format = detect_format(path)
    if format == "root":
        return read_root_summary(path)
    if format == "parquet":
        return read_parquet_summary(path)
    raise ValueError(f"Not an analysis output format: {format}")


__all__ = ["detect_format", "get_reader", "get_writer", "register", "read_summary"]
