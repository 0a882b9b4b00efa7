from pathlib import Path

import pytest

from procsim.models import Process
from procsim.workload_io import ProcessParseError, load_workload, parse_process


def test_parse_ignores_label_text():
    p = parse_process(["proc", "A", "at", "+3", "bt", "-2"])
    assert (p.name, p.arrival_time, p.burst_time) == ("A", 3, -2)


def test_parse_empty_name_is_kept():
    p = parse_process(["name", "", "arrival", "1", "burst", "2"])
    assert p.name == ""


def test_parse_empty_record_fails_on_arrival():
    with pytest.raises(ProcessParseError) as excinfo:
        parse_process([])
    assert excinfo.value.field == "arrival time"
    assert excinfo.value.token == ""


def test_parse_rejects_non_integer_arrival():
    with pytest.raises(ProcessParseError) as excinfo:
        parse_process("name P1 arrival soon burst 5".split())
    assert excinfo.value.field == "arrival time"
    assert excinfo.value.token == "soon"


@pytest.mark.parametrize("token", ["5.0", "1_000", "0x10", "", " 5"])
def test_parse_rejects_non_decimal_burst(token):
    with pytest.raises(ProcessParseError):
        parse_process(["name", "P1", "arrival", "0", "burst", token])


@pytest.mark.parametrize("token", ["2147483647", "-2147483648"])
def test_parse_accepts_32_bit_bounds(token):
    p = parse_process(["name", "P1", "arrival", token, "burst", "1"])
    assert p.arrival_time == int(token)


@pytest.mark.parametrize("token", ["2147483648", "-2147483649", "99999999999"])
def test_parse_rejects_values_outside_32_bits(token):
    with pytest.raises(ProcessParseError) as excinfo:
        parse_process(["name", "P1", "arrival", "0", "burst", token])
    assert excinfo.value.field == "burst time"


def test_parse_missing_burst_fails():
    with pytest.raises(ProcessParseError):
        parse_process("name P1 arrival 0".split())


def test_parse_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_process("name P1 arrival x burst 1".split())


def test_load_lines(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("# demo\nname A arrival 0 burst 3\n\nname B arrival 1 burst 2\n")
    procs = load_workload(p)
    assert [q.name for q in procs] == ["A", "B"]
    assert isinstance(procs[0], Process)
    assert procs[1].burst_time == 2


def test_load_lines_reports_line_number(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("name A arrival 0 burst 3\nname B arrival one burst 2\n")
    with pytest.raises(ProcessParseError) as excinfo:
        load_workload(p)
    assert excinfo.value.line == 2
    assert "line 2" in str(excinfo.value)


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"name":"A","arrival_time":0,"burst_time":3},'
                 '{"name":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[1].arrival_time == 1
    assert procs[1].time_remaining == 2


def test_load_json_rejects_non_list(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"name":"A"}')
    with pytest.raises(ValueError):
        load_workload(p)


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("name,arrival_time,burst_time\nA,0,3\nB,1,2\n")
    procs = load_workload(p)
    assert procs[0].name == "A"
    assert procs[1].burst_time == 2


def test_load_csv_bad_entry(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("name,arrival_time,burst_time\nA,0,3\nB,zero,3\n")
    with pytest.raises(ProcessParseError) as excinfo:
        load_workload(p)
    assert excinfo.value.field == "arrival time"
    assert excinfo.value.line == 3


def test_load_csv_missing_column(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("name,arrival_time\nA,0\n")
    with pytest.raises(ValueError, match="Invalid process entry"):
        load_workload(p)


@pytest.mark.parametrize("value", ["2.7", "true", '" 5 "', "3000000000"])
def test_load_json_uses_labelled_record_integer_rules(tmp_path: Path, value):
    p = tmp_path / "w.json"
    p.write_text(f'[{{"name":"A","arrival_time":0,"burst_time":{value}}}]')
    with pytest.raises(ProcessParseError):
        load_workload(p)


def test_load_csv_rejects_padded_numbers(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("name,arrival_time,burst_time\nA, 0,3\n")
    with pytest.raises(ProcessParseError):
        load_workload(p)


def test_unsupported_suffix(tmp_path: Path):
    with pytest.raises(ValueError):
        load_workload(tmp_path / "w.yaml")
