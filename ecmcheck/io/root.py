from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import numpy as np

from ..cuts import CutTable
from ..errors import OutputWriteFailure
from ..models import EventDerived
from ..schema import HIST_NAME, HIST_TITLE, TREE_NAME, column_dtypes, to_columns
from .writer_base import Writer

logger = logging.getLogger(__name__)


def _require_uproot():
    try:
        import uproot  # type: ignore
    except ImportError as e:  # pragma: no cover
        raise ImportError("ROOT output requires 'uproot'. Install ecmcheck with its dependencies.") from e
    return uproot


def cut_histogram(cuts: CutTable):
    """Build the ``hStatAnl`` TH1D: one unit-width bin per ordinal, labelled by stage."""
    uproot = _require_uproot()
    identify = uproot.writing.identify
    counts, edges = cuts.histogram()
    # Underflow and overflow bins stay empty.
    data = np.concatenate([[0.0], counts, [0.0]])
    centres = (edges[:-1] + edges[1:]) / 2.0

    labels = identify.to_THashList([identify.to_TObjString(s) for s in cuts.bin_labels()])
    # TAxis::SetBinLabel keys each label by its 1-based bin number.
    for i, label in enumerate(labels):
        label._bases[0]._members["@fUniqueID"] = i + 1

    xaxis = identify.to_TAxis(
        fName="xaxis",
        fTitle="",
        fNbins=cuts.capacity,
        fXmin=float(edges[0]),
        fXmax=float(edges[-1]),
        fLabels=labels,
    )
    return identify.to_TH1x(
        fName=None,
        fTitle=HIST_TITLE,
        data=data,
        fEntries=float(counts.sum()),
        fTsumw=float(counts.sum()),
        fTsumw2=float(counts.sum()),
        fTsumwx=float((counts * centres).sum()),
        fTsumwx2=float((counts * centres**2).sum()),
        fSumw2=data.copy(),
        fXaxis=xaxis,
    )


class RootWriter(Writer):
    """Writes the ``hAnl`` tree and the ``hStatAnl`` cut histogram with uproot."""

    def __init__(self) -> None:
        self.path = ""
        self._file = None

    def open(self, path: str, **kwargs) -> None:
        uproot = _require_uproot()
        self.path = str(path)
        compression = kwargs.get("compression")
        try:
            if compression is not None:
                self._file = uproot.recreate(self.path, compression=compression)
            else:
                self._file = uproot.recreate(self.path)
        except OSError as e:
            raise OutputWriteFailure(self.path, str(e)) from e
        logger.debug("opened ROOT output %s", self.path)

    def write(self, rows: Sequence[EventDerived], cuts: CutTable) -> None:
        if self._file is None:
            raise OutputWriteFailure(self.path, "output is not open")
        uproot = _require_uproot()
        try:
            tree = self._file.mktree(TREE_NAME, column_dtypes(), title="")
            if rows:
                tree.extend(to_columns(rows))
            self._file[HIST_NAME] = cut_histogram(cuts)
        except (OSError, ValueError, TypeError) as e:
            raise OutputWriteFailure(self.path, str(e)) from e
        logger.debug("wrote %d rows to %s (uproot %s)", len(rows), self.path, uproot.__version__)
    def close(self) -> None:
        if self._file is None:
            return
        f, self._file = self._file, None
        try:
            f.close()
        except OSError as e:
            raise OutputWriteFailure(self.path, str(e)) from e
        logger.debug("closed ROOT output %s", self.path)


def read_root_summary(path: str | Path) -> dict:
    """Read back the tree length and cut table of a ROOT output file.

    Stages are the histogram bins that carry a label.
    """
    uproot = _require_uproot()
    with uproot.open(str(path)) as f:
        n_rows = int(f[TREE_NAME].num_entries)
        hist = f[HIST_NAME]
        counts = hist.values()
        labels = hist.axis().labels() or []
    stages = [(i, int(counts[i]), label) for i, label in enumerate(labels) if label]
    return {"n_rows": n_rows, "cuts": stages, "capacity": len(counts)}
