from __future__ import annotations

import importlib.util
import json
from pathlib import Path

import pytest

from ecmcheck.cli import main

HAS_UPROOT = importlib.util.find_spec("uproot") is not None
HAS_PYARROW = importlib.util.find_spec("pyarrow") is not None

needs_uproot = pytest.mark.skipif(not HAS_UPROOT, reason="uproot not installed; ROOT output tests skipped")
needs_pyarrow = pytest.mark.skipif(not HAS_PYARROW, reason="pyarrow not installed; parquet output tests skipped")

FIXTURES = Path(__file__).parent / "fixtures"
HEPMC_FILE = FIXTURES / "zh_qq.hepmc"


@needs_uproot
def test_cli_run_and_info(tmp_path: Path, capsys):
    out = tmp_path / "cli.root"
    rc = main(["run", str(HEPMC_FILE), "-o", str(out), "--ecm", "500", "-q", "--json"])
    assert rc == 0
    report = json.loads(capsys.readouterr().out)
    assert report["n_events"] == 3
    assert report["cuts"] == [[0, 3, "No Cuts"]]

    rc = main(["info", str(out), "--json"])
    assert rc == 0
    info = json.loads(capsys.readouterr().out)
    assert info["n_rows"] == 3
    assert info["cuts"] == [[0, 3, "No Cuts"]]


@needs_pyarrow
def test_cli_info_prints_cut_table(tmp_path: Path, capsys):
    out = tmp_path / "cli.parquet"
    assert main(["run", str(HEPMC_FILE), "-o", str(out), "-q", "--stage", "two quarks"]) == 0
    capsys.readouterr()
    assert main(["info", str(out)]) == 0
    text = capsys.readouterr().out
    assert "Events:              3" in text
    assert ": No Cuts" in text
    assert ": two quarks" in text


def test_cli_reports_errors(tmp_path: Path, capsys):
    rc = main(["run", str(tmp_path / "missing.hepmc"), "-o", str(tmp_path / "x.root"), "-q"])
    assert rc == 1
    assert "Error:" in capsys.readouterr().err


def test_cli_rejects_bad_heartbeat(tmp_path: Path, capsys):
    rc = main(["run", str(HEPMC_FILE), "-o", str(tmp_path / "x.root"), "--heartbeat", "0", "-q"])
    assert rc == 1
    assert "heartbeat" in capsys.readouterr().err
