from pathlib import Path

import pytest

from schedsim.errors import MalformedInput
from schedsim.models import Process
from schedsim.workload_io import load_workload, parse_rows


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":0,"burst_time":3,"priority":1},'
                 '{"id":2,"arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[1].pid == 2
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1


def test_load_csv_with_header(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\n1,0,3,1\n2,1,2,\n")
    procs = load_workload(p)
    assert procs[0] == Process(1, arrival_time=0, burst_time=3, priority=1)
    assert procs[1].priority == 0


def test_load_headerless_csv(tmp_path: Path):
    # id, burst, arrival[, priority]
    p = tmp_path / "procs.txt"
    p.write_text("1,5,0,2\n\n2, 9, 1\n")
    procs = load_workload(p)
    assert procs == [
        Process(1, arrival_time=0, burst_time=5, priority=2),
        Process(2, arrival_time=1, burst_time=9, priority=0),
    ]


def test_empty_file_gives_no_processes(tmp_path: Path):
    p = tmp_path / "empty.csv"
    p.write_text("")
    assert load_workload(p) == []


def test_missing_file_raises_oserror(tmp_path: Path):
    with pytest.raises(OSError):
        load_workload(tmp_path / "nope.csv")


@pytest.mark.parametrize(
    "row, message",
    [
        (["1", "5"], "at least 3 fields"),
        (["1", "five", "0"], "burst_time must be an integer"),
        (["1", "0", "0"], "burst_time must be > 0"),
        (["1", "3", "-2"], "arrival_time must be >= 0"),
        (["1", "3", "0", "high"], "priority must be an integer"),
    ],
)
def test_parse_rows_rejects_bad_records(row, message):
    with pytest.raises(MalformedInput, match=message):
        parse_rows([row], source="w.csv")


def test_bad_row_reports_line(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("1,5,0\n2,x,1\n")
    with pytest.raises(MalformedInput, match="line 2"):
        load_workload(p)


def test_json_missing_field(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid": 1, "arrival_time": 0}]')
    with pytest.raises(MalformedInput, match="missing burst_time"):
        load_workload(p)


@pytest.mark.parametrize("text", ["{not json", '{"pid": 1}', '[{"pid": 1, "arrival_time": 0, "burst_time": 1.5}]'])
def test_json_malformed(tmp_path: Path, text):
    p = tmp_path / "w.json"
    p.write_text(text)
    with pytest.raises(MalformedInput):
        load_workload(p)


@pytest.mark.parametrize("name", ["w.csv", "w.json"])
def test_non_utf8_file_is_malformed(tmp_path: Path, name):
    p = tmp_path / name
    p.write_bytes(b"1,5,0\n\xff\xfe,3,1\n")
    with pytest.raises(MalformedInput, match="not valid UTF-8"):
        load_workload(p)


def test_line_numbers_count_blank_lines(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("1,5,0\n\n2,x,1\n")
    with pytest.raises(MalformedInput, match="line 3"):
        load_workload(p)


def test_header_line_numbers_count_blank_lines(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\n\n1,0,3\n\n2,1,zero\n")
    with pytest.raises(MalformedInput, match="line 5"):
        load_workload(p)
