from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Sequence

from ..cuts import CutTable
from ..errors import OutputWriteFailure
from ..models import EventDerived
from ..schema import HIST_NAME, HIST_TITLE, SCHEMA_ID, TREE_NAME, to_columns
from .writer_base import Writer

logger = logging.getLogger(__name__)


def _require_pyarrow():
    try:
        import pyarrow as pa  # type: ignore
        import pyarrow.parquet as pq  # type: ignore
    except ImportError as e:  # pragma: no cover
        raise ImportError("Parquet output requires 'pyarrow'. Install ecmcheck with its dependencies.") from e
    return pa, pq


_META_PREFIX = "ecmcheck."


def stable_json_dumps(obj: Any) -> str:
    """Deterministic JSON for embedding in key-value metadata."""
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _md_set(md: dict[str, str], key: str, value) -> None:
    md[f"{_META_PREFIX}{key}"] = str(value)


def _md_get(md: dict[str, str], key: str, default=None):
    return md.get(f"{_META_PREFIX}{key}", default)


def _encode_cuts(cuts: CutTable) -> dict[str, str]:
    counts, edges = cuts.histogram()
    md: dict[str, str] = {}
    _md_set(md, "schema", SCHEMA_ID)
    _md_set(md, "tree", TREE_NAME)
    _md_set(md, "hist_name", HIST_NAME)
    _md_set(md, "hist_title", HIST_TITLE)
    _md_set(md, "hist_counts", stable_json_dumps([float(c) for c in counts]))
    _md_set(md, "hist_edges", stable_json_dumps([float(e) for e in edges]))
    _md_set(md, "cut_stages", stable_json_dumps([list(r) for r in cuts.render()]))
    return md


class ParquetWriter(Writer):
    """Writes the per-event table; the cut histogram lives in the schema metadata."""

    def __init__(self) -> None:
        self.path = ""
        self._sink = None
        self._metadata: dict[str, str] = {}

    def open(self, path: str, **kwargs) -> None:
        pa, _pq = _require_pyarrow()
        self.path = str(path)
        self._metadata = {str(k): str(v) for k, v in (kwargs.get("metadata") or {}).items()}
        try:
            self._sink = pa.OSFile(self.path, "wb")
        except OSError as e:
            raise OutputWriteFailure(self.path, str(e)) from e
        logger.debug("opened Parquet output %s", self.path)

    def write(self, rows: Sequence[EventDerived], cuts: CutTable) -> None:
        if self._sink is None:
            raise OutputWriteFailure(self.path, "output is not open")
        pa, pq = _require_pyarrow()
        md = _encode_cuts(cuts)
        md.update(self._metadata)
        table = pa.table(to_columns(rows))
        table = table.replace_schema_metadata(md)
        try:
            pq.write_table(table, self._sink)
        except (OSError, pa.ArrowException) as e:
            raise OutputWriteFailure(self.path, str(e)) from e
        logger.debug("wrote %d rows to %s", len(rows), self.path)

    def close(self) -> None:
        if self._sink is None:
            return
        sink, self._sink = self._sink, None
        try:
            sink.close()
        except OSError as e:
            raise OutputWriteFailure(self.path, str(e)) from e
        logger.debug("closed Parquet output %s", self.path)


def read_parquet_summary(path: str | Path) -> dict:
    """Read back the table length and cut table of a Parquet output file."""
    _pa, pq = _require_pyarrow()
    meta = pq.read_metadata(str(path))
    raw = meta.metadata or {}
    md = {k.decode("utf-8", "replace"): v.decode("utf-8", "replace") for k, v in raw.items()}
    counts = json.loads(_md_get(md, "hist_counts", "[]"))
    stages = json.loads(_md_get(md, "cut_stages", "[]"))
    return {
        "n_rows": int(meta.num_rows),
        "cuts": [(int(o), int(c), str(label)) for o, c, label in stages],
        "capacity": len(counts),
    }
