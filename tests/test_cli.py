from pathlib import Path

import pytest

from schedsim.cli import build_parser, main
from schedsim.errors import InvalidArguments


@pytest.fixture
def workload(tmp_path: Path) -> Path:
    p = tmp_path / "procs.csv"
    p.write_text("1,5,0,2\n2,3,1,1\n3,2,2,3\n")
    return p


def test_runs_all_algorithms(workload, capsys):
    assert main([str(workload)]) == 0
    out = capsys.readouterr().out
    for title in ("First-come, first-serve", "Shortest-job-first", "Priority", "Round-robin"):
        assert title in out
    assert "Quantum: 10" in out


def test_plain_single_algorithm(workload, capsys):
    assert main(["--plain", "-a", "rr", "-q", "2", str(workload)]) == 0
    out = capsys.readouterr().out
    assert "Gantt schedule" in out
    assert "First-come" not in out


def test_compare(workload, capsys):
    assert main(["--compare", str(workload)]) == 0
    out = capsys.readouterr().out
    assert "Algorithm comparison" in out
    assert "Round-robin" in out


@pytest.mark.parametrize("argv", [[], ["a.csv", "b.csv"]])
def test_wrong_arity(argv, capsys):
    assert main(argv) == 2
    assert "invalid args" in capsys.readouterr().err


def test_parser_raises_invalid_arguments():
    with pytest.raises(InvalidArguments):
        build_parser().parse_args([])


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.csv")]) == 1
    assert "error opening scheduling file" in capsys.readouterr().err


def test_bad_quantum(workload, capsys):
    assert main(["-a", "rr", "-q", "0", str(workload)]) == 1
    assert "quantum" in capsys.readouterr().err


def test_malformed_workload(tmp_path, capsys):
    p = tmp_path / "bad.csv"
    p.write_text("1,abc,0\n")
    assert main([str(p)]) == 1
    assert "burst_time" in capsys.readouterr().err


def test_non_utf8_workload(tmp_path, capsys):
    p = tmp_path / "bad.csv"
    p.write_bytes(b"1,5,0\n\xff\xfe,3,1\n")
    assert main([str(p)]) == 1
    captured = capsys.readouterr()
    assert "UTF-8" in captured.err
    assert captured.out == ""


def test_compare_labels_first_dispatch_response(workload, capsys, monkeypatch):
    monkeypatch.setenv("COLUMNS", "200")
    assert main(["--compare", str(workload)]) == 0
    assert "Avg response (first dispatch)" in capsys.readouterr().out
