import json
import os
from datetime import datetime, timezone

class JSONLogger:
    def __init__(self, output_directory="logs/", log_file_prefix="turing_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def _get_log_filename(self):
        filename = f"{self.log_file_prefix}{self.today}.jsonl"  # JSON lines format
        return os.path.join(self.output_directory, filename)

    def _log_to_file(self, filename, entries):
        path = os.path.join(self.output_directory, filename)
        with open(path, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry, default=str) + "\n")

    def log(self, entry: dict):
        """Log a single entry to the main run log."""
        with open(self.current_log, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, default=str) + "\n")

    def log_batch(self, entries: list):
        """Log a batch of entries to the main run log."""
        with open(self.current_log, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry, default=str) + "\n")

    def rotate(self):
        """Start a new main log file, picking up a changed UTC date."""
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def log_run(self, machine, source=""):
        """Record how an interactive run ended."""
        self.log({
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "source": source,
            "input": machine.input_string,
            "status": machine.status.value,
            "state": machine.current_state,
            "head": machine.head,
            "steps": machine.step_count,
            "error": machine.last_error,
            "tape": machine.tape_contents()
        })

    def log_summary(self, entries: list):
        """Log suite summaries (totals per verdict) to the main run log."""
        self.log_batch(entries)

    def log_accepted(self, entries: list):
        """Log the test cases a machine accepted."""
        filename = f"accepted_{self.today}.jsonl"
        self._log_to_file(filename, entries)

    def log_rejected(self, entries: list):
        """Log the test cases a machine rejected."""
        filename = f"rejected_{self.today}.jsonl"
        self._log_to_file(filename, entries)
