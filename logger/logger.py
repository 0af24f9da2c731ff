import json
import os
from datetime import datetime, timezone


def run_entry(machine_path, input_string, machine):
    """Build the JSON record of a finished run."""
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "machine": str(machine_path),
        "input": input_string,
        "accepted": machine.accepted,
        "steps": machine.steps,
        "state": machine.state,
        "result": machine.result,
    }


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
                f.write(json.dumps(entry) + "\n")

    def log(self, entry: dict):
        """Log a single run to the main log."""
        with open(self.current_log, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")

    def log_accepted(self, entries: list):
        """Log runs that ended accepted."""
        self._log_to_file(f"accepted_{self.today}.jsonl", entries)

    def log_rejected(self, entries: list):
        """Log runs that ended unaccepted."""
        self._log_to_file(f"rejected_{self.today}.jsonl", entries)

    def log_run(self, entry: dict):
        self.log(entry)
        if entry.get("accepted"):
            self.log_accepted([entry])
        else:
            self.log_rejected([entry])
