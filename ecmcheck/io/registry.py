from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .reader_base import Reader
from .writer_base import Writer


@dataclass(frozen=True)
class FormatHandlers:
    reader: Optional[Callable[[], Reader]] = None
    writer: Optional[Callable[[], Writer]] = None


_REGISTRY: dict[str, FormatHandlers] = {}

_EXT_MAP = {
    ".lhe": "lhe",
    ".hepmc": "hepmc3",
    ".hepmc3": "hepmc3",
    ".root": "root",
    ".parquet": "parquet",
    ".pq": "parquet",
}


def register(
    fmt: str,
    reader: Optional[Callable[[], Reader]] = None,
    writer: Optional[Callable[[], Writer]] = None,
) -> None:
    _REGISTRY[fmt] = FormatHandlers(reader=reader, writer=writer)


def detect_format(filepath: str | Path) -> str:
    p = Path(filepath)
    suffixes = list(p.suffixes)
    if suffixes and suffixes[-1] == ".gz":
        suffixes = suffixes[:-1]
    if not suffixes:
        raise ValueError(f"Cannot detect format from filename: {p}")
    ext = suffixes[-1].lower()
    fmt = _EXT_MAP.get(ext)
    if fmt is None:
        raise ValueError(f"Unknown file extension '{ext}' in {p}")
    return fmt


def get_reader(fmt: str) -> Reader:
    handlers = _REGISTRY.get(fmt)
    if handlers is None or handlers.reader is None:
        raise ValueError(f"No reader registered for format: {fmt}")
    return handlers.reader()


def get_writer(fmt: str) -> Writer:
    handlers = _REGISTRY.get(fmt)
    if handlers is None or handlers.writer is None:
        raise ValueError(f"No writer registered for format: {fmt}")
    return handlers.writer()
