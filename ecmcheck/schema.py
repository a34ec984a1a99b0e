"""Layout of the persisted output: per-event tree and cut histogram."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

import numpy as np

from .models import EventDerived

TREE_NAME = "hAnl"
HIST_NAME = "hStatAnl"
HIST_TITLE = "Cut Table"
SCHEMA_ID = "ecmcheck.hanl.v1"

INT_COLUMNS = ("nmcp", "norigin", "flvq1mc", "flvq2mc")
VECTOR_COLUMNS = (
    "lrzq1mc",
    "lrzq2mc",
    "lrzZmc",
    "lrzHmc",
    "lrzISR1mc",
    "lrzISR2mc",
    "lrzEcm",
    "lrzqqHisr12",
)
COMPONENTS = ("px", "py", "pz", "e")


def column_names() -> List[str]:
    names = list(INT_COLUMNS)
    for vec in VECTOR_COLUMNS:
        names.extend(f"{vec}_{c}" for c in COMPONENTS)
    return names


def column_dtypes() -> Dict[str, Any]:
    dtypes: Dict[str, Any] = {name: np.dtype(np.int32) for name in INT_COLUMNS}
    for name in column_names():
        dtypes.setdefault(name, np.dtype(np.float64))
    return dtypes


def to_columns(rows: Sequence[EventDerived]) -> Dict[str, np.ndarray]:
    """Turn derived rows into one numpy array per output column.

    An empty ``rows`` yields zero-length arrays with the right dtypes.
    """
    dtypes = column_dtypes()
    flat = [r.to_dict() for r in rows]
    return {
        name: np.asarray([row[name] for row in flat], dtype=dtype)
        for name, dtype in dtypes.items()
    }
