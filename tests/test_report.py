from __future__ import annotations

import io

from ecmcheck.models import EventDerived
from ecmcheck.report import Report, emit, flavour_counts, format_cut_table


def test_cut_table_layout():
    text = format_cut_table([(0, 17, "No Cuts"), (1, 5, "two quarks")])
    lines = text.splitlines()
    assert "   ID   No.Events    Cut Description" in lines
    row = [ln for ln in lines if ln.endswith(": No Cuts")][0]
    assert row.split() == ["0", "17", ":", "No", "Cuts"]
    second = [ln for ln in lines if ln.endswith(": two quarks")][0]
    # Fixed-width columns: labels line up.
    assert row.index(":") == second.index(":")


def test_flavour_counts_only_use_matched_quarks():
    rows = [
        EventDerived(q1_pdg=5, q1_matched=True),
        EventDerived(q1_pdg=5, q1_matched=True),
        EventDerived(q1_pdg=4, q1_matched=True),
        EventDerived(),
    ]
    assert flavour_counts(rows) == {4: 1, 5: 2}


def test_emit_writes_totals_and_cut_table():
    report = Report(n_events=3, n_runs=1, cuts=[(0, 3, "No Cuts")], output="out.root")
    buf = io.StringIO()
    emit(report, buf)
    text = buf.getvalue()
    assert "processed 3 events in 1 runs" in text
    assert ": No Cuts" in text
    assert "out.root" in text
    assert "skipped" not in text
