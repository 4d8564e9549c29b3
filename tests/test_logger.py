import json
import os

from logger.logger import JSONLogger
from simulator.samples import PALINDROME
from simulator.transition_table import compile_source
from simulator.turing_machine import TuringMachine


def read_jsonl(path):
    with open(path, "r", encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


def test_creates_directory_and_dated_log(tmp_path):
    out = tmp_path / "logs"
    logger = JSONLogger(str(out), "run_")
    assert out.is_dir()
    assert os.path.basename(logger.current_log) == f"run_{logger.today}.jsonl"


def test_log_and_log_batch_append(tmp_path):
    logger = JSONLogger(str(tmp_path), "run_")
    logger.log({"n": 1})
    logger.log_batch([{"n": 2}, {"n": 3}])
    assert read_jsonl(logger.current_log) == [{"n": 1}, {"n": 2}, {"n": 3}]


def test_accepted_and_rejected_files(tmp_path):
    logger = JSONLogger(str(tmp_path), "run_")
    logger.log_accepted([{"input": "abba"}])
    logger.log_rejected([{"input": "aabb"}, {"input": "ab"}])
    assert read_jsonl(tmp_path / f"accepted_{logger.today}.jsonl") == [{"input": "abba"}]
    assert len(read_jsonl(tmp_path / f"rejected_{logger.today}.jsonl")) == 2


def test_log_run_records_machine_state(tmp_path):
    machine = TuringMachine(compile_source(PALINDROME).table)
    machine.load_input("aabb")
    machine.run()

    logger = JSONLogger(str(tmp_path), "run_")
    logger.log_run(machine, source="palindrome")
    (entry,) = read_jsonl(logger.current_log)
    assert entry["source"] == "palindrome"
    assert entry["input"] == "aabb"
    assert entry["status"] == "REJECTED"
    assert entry["state"] == "hr"
    assert entry["error"] == "No transition for (hr, b)"
    assert entry["steps"] == machine.step_count


def test_rotate_keeps_prefix(tmp_path):
    logger = JSONLogger(str(tmp_path), "run_")
    logger.rotate()
    assert os.path.basename(logger.current_log).startswith("run_")


def test_rotate_picks_up_new_date(tmp_path):
    logger = JSONLogger(str(tmp_path), "run_")
    logger.today = "2000-01-01"
    logger.current_log = logger._get_log_filename()
    logger.log_summary([{"total": 1}])
    assert read_jsonl(tmp_path / "run_2000-01-01.jsonl") == [{"total": 1}]

    logger.rotate()
    assert logger.today != "2000-01-01"
    logger.log_summary([{"total": 2}])
    assert read_jsonl(logger.current_log) == [{"total": 2}]
