"""Snapshot naming scheme.

The orchestrator keeps no state of its own between calls; these names are the
protocol. Two suffix grammars are managed by the agent:

    snapagent-full-<digits>    one per full backup, keyed by timestamp
    snapagent-incremental      the single, overwritten incremental point

Every other snapshot suffix belongs to someone else and is never mutated.
"""

import re

from snapagent.errors import ArgumentError

FULL_PREFIX = "snapagent-full-"
INCREMENTAL_MARKER = "snapagent-incremental"

_TIMESTAMP_RE = re.compile(r"[0-9]+")
_FULL_RE = re.compile(re.escape(FULL_PREFIX) + r"([0-9]+)")


def validate_volume(volume):
    if not volume:
        raise ArgumentError("A volume is required.")
    if "@" in volume:
        raise ArgumentError(f"Volume must not name a snapshot: {volume!r}")
    if volume.startswith("-"):
        raise ArgumentError(f"Volume must not start with '-': {volume!r}")
    return volume


def validate_timestamp(timestamp):
    timestamp = str(timestamp) if timestamp is not None else ""
    if not _TIMESTAMP_RE.fullmatch(timestamp):
        raise ArgumentError(f"Timestamp must be one or more digits, got {timestamp!r}")
    return timestamp


def full_marker(timestamp):
    """Suffix for the full backup taken at timestamp."""
    return FULL_PREFIX + validate_timestamp(timestamp)


def parse_suffix(suffix):
    """Classify a suffix. Returns ("full", timestamp), ("incremental", None) or None."""
    if suffix == INCREMENTAL_MARKER:
        return ("incremental", None)
    match = _FULL_RE.fullmatch(suffix or "")
    if match:
        return ("full", match.group(1))
    return None


def validate_suffix(suffix):
    """Accept exactly the two managed grammars. Anything else is an ArgumentError."""
    if parse_suffix(suffix) is None:
        raise ArgumentError(
            f"Refusing to touch unmanaged snapshot {suffix!r}. "
            f"Expected {INCREMENTAL_MARKER!r} or {FULL_PREFIX}<digits>."
        )
    return suffix


def snapshot_name(volume, suffix):
    return f"{volume}@{suffix}"


def split_name(name):
    """Split a `zfs list` row into (volume, suffix). Suffix is None for a bare volume."""
    volume, sep, suffix = name.partition("@")
    return volume, (suffix if sep else None)
