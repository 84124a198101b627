import json
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

CONFIG_ENV = "SNAPAGENT_CONFIG"
DEFAULT_CONFIG_FILE = Path("/etc/snapagent/config.json")
DEFAULT_LOG_FILE = Path.home() / ".snapagent" / "logs.jsonl"

DEFAULT_CONFIG = {
    "pattern": ".",
    "backend": "zfs",
    "zfs_command": ["zfs"],
    # "" disables the audit log
    "log_file": str(DEFAULT_LOG_FILE),
}


@dataclass(frozen=True)
class AgentConfig:
    """Settings for one invocation. Built once at startup and passed explicitly."""

    pattern: str = DEFAULT_CONFIG["pattern"]
    backend: str = DEFAULT_CONFIG["backend"]
    zfs_command: tuple = tuple(DEFAULT_CONFIG["zfs_command"])
    log_file: Optional[Path] = DEFAULT_LOG_FILE

    @classmethod
    def from_dict(cls, raw):
        unknown = set(raw) - set(DEFAULT_CONFIG)
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        merged = {**DEFAULT_CONFIG, **raw}

        pattern = merged["pattern"]
        if not isinstance(pattern, str):
            raise ValueError("'pattern' must be a string")
        try:
            re.compile(pattern)
        except re.error as e:
            raise ValueError(f"Invalid 'pattern' {pattern!r}: {e}")

        zfs_command = merged["zfs_command"]
        if not isinstance(zfs_command, list) or not zfs_command or not all(
            isinstance(part, str) and part for part in zfs_command
        ):
            raise ValueError("'zfs_command' must be a non-empty list of strings")

        log_file = merged["log_file"]
        if log_file is not None and not isinstance(log_file, str):
            raise ValueError("'log_file' must be a string")

        return cls(
            pattern=pattern,
            backend=str(merged["backend"]),
            zfs_command=tuple(zfs_command),
            log_file=Path(log_file).expanduser() if log_file else None,
        )


def config_path(path=None):
    """Explicit path, then $SNAPAGENT_CONFIG, then /etc/snapagent/config.json."""
    if path:
        return Path(path)
    if os.environ.get(CONFIG_ENV):
        return Path(os.environ[CONFIG_ENV])
    return DEFAULT_CONFIG_FILE


def load_config(path=None):
    # Merge order: defaults → config file. A missing file means defaults.
    path = config_path(path)
    raw = {}
    if path.exists():
        try:
            raw = json.loads(path.read_text())
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}")
        if not isinstance(raw, dict):
            raise ValueError(f"{path} must contain a JSON object")
    return AgentConfig.from_dict(raw)
