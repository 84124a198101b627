"""Action audit logging.

Appends structured JSON entries to the configured log file (by default
~/.snapagent/logs.jsonl). Each entry records one agent action with
timestamp, event, volume and snapshot, so an operator can see what the
orchestrator asked for even though the agent itself keeps no state.
"""

import json
from datetime import datetime


def write_log(log_file, entry):
    """Append an audit entry. No-op when logging is disabled."""
    if not log_file:
        return
    log_file.parent.mkdir(parents=True, exist_ok=True)
    entry["timestamp"] = datetime.now().isoformat()
    with open(log_file, "a") as f:
        f.write(json.dumps(entry) + "\n")


def read_log(log_file):
    """Return all parseable entries, oldest first."""
    if not log_file or not log_file.exists():
        return []
    entries = []
    for line in log_file.read_text().splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            entries.append(json.loads(line))
        except json.JSONDecodeError:
            continue
    return entries
