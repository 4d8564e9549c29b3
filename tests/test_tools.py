import json

import pytest

from simulator.constants import Status
from simulator.samples import PALINDROME, PALINDROME_INPUTS
from simulator.transition_table import compile_source
from tools import machine_inspect, run_suite


@pytest.fixture
def machine_file(tmp_path):
    path = tmp_path / "palindrome.tm"
    path.write_text(PALINDROME, encoding="utf-8")
    return str(path)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "runtime_config.json"
    path.write_text(json.dumps({"output_directory": str(tmp_path / "logs")}), encoding="utf-8")
    return str(path)


def test_load_machine(machine_file):
    compiled = machine_inspect.load_machine(machine_file)
    assert len(compiled.table) == 18


def test_load_machine_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        machine_inspect.load_machine(str(tmp_path / "missing.tm"))


def test_transition_grid_shape():
    grid = machine_inspect.transition_grid(compile_source(PALINDROME).table)
    # state column plus a, b and blank last
    assert [c.header for c in grid.columns] == ["State", "a", "b", "_"]
    assert grid.row_count == 6


@pytest.mark.parametrize("fmt, expected", [
    ("table", "Transition Table"),
    ("mermaid", "graph LR"),
    ("dot", "digraph"),
])
def test_inspect_formats(machine_file, capsys, fmt, expected):
    assert machine_inspect.main(["--file", machine_file, "--format", fmt]) == 0
    assert expected in capsys.readouterr().out


def test_inspect_writes_dot(machine_file, tmp_path):
    target = tmp_path / "out.dot"
    assert machine_inspect.main(["--file", machine_file, "--format", "dot", "--output", str(target)]) == 0
    assert target.read_text(encoding="utf-8").startswith('digraph "TuringMachine"')


def test_inspect_reports_compile_error(tmp_path, capsys):
    bad = tmp_path / "bad.tm"
    bad.write_text("q0 a/a,R q1\nnot a rule\n", encoding="utf-8")
    assert machine_inspect.main(["--file", str(bad)]) == 1
    assert "Line 2" in capsys.readouterr().out


def test_load_inputs_keeps_empty_lines(tmp_path):
    path = tmp_path / "inputs.txt"
    path.write_text("abba\n\nbab\n", encoding="utf-8")
    assert run_suite.load_inputs(str(path)) == ["abba", "", "bab"]


def test_run_suite_verdicts():
    table = compile_source(PALINDROME).table
    cases = run_suite.run_suite(table, PALINDROME_INPUTS, show_progress=False)
    assert [c.input for c in cases] == PALINDROME_INPUTS
    assert [c.status for c in cases] == [
        Status.ACCEPTED, Status.ACCEPTED, Status.REJECTED, Status.REJECTED,
    ]


def test_run_suite_spans_several_batches():
    table = compile_source(PALINDROME).table
    inputs = PALINDROME_INPUTS * 3
    cases = run_suite.run_suite(table, inputs, show_progress=False, batch_size=5)
    assert [c.id for c in cases] == list(range(1, 13))
    assert [c.status for c in cases] == [
        Status.ACCEPTED, Status.ACCEPTED, Status.REJECTED, Status.REJECTED,
    ] * 3


def test_run_suite_cli_logs_results(machine_file, config_file, tmp_path, capsys):
    inputs = tmp_path / "inputs.txt"
    inputs.write_text("\n".join(PALINDROME_INPUTS) + "\n", encoding="utf-8")

    code = run_suite.main(["--file", machine_file, "--inputs", str(inputs), "--config", config_file, "--json"])
    assert code == 0

    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.startswith("{")]
    assert [line["status"] for line in lines] == ["ACCEPTED", "ACCEPTED", "REJECTED", "REJECTED"]

    log_dir = tmp_path / "logs"
    accepted = list(log_dir.glob("accepted_*.jsonl"))
    rejected = list(log_dir.glob("rejected_*.jsonl"))
    summaries = list(log_dir.glob("turing_*.jsonl"))
    assert len(accepted) == len(rejected) == len(summaries) == 1
    summary = json.loads(summaries[0].read_text(encoding="utf-8").splitlines()[0])
    assert summary["accepted"] == 2
    assert summary["rejected"] == 2


def test_run_suite_cli_compile_error(tmp_path, config_file, capsys):
    bad = tmp_path / "bad.tm"
    bad.write_text("// nothing here\n", encoding="utf-8")
    inputs = tmp_path / "inputs.txt"
    inputs.write_text("a\n", encoding="utf-8")
    assert run_suite.main(["--file", str(bad), "--inputs", str(inputs), "--config", config_file]) == 1
    assert "No valid states" in capsys.readouterr().out
