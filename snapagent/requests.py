"""The closed set of actions an orchestrator can ask for, and the one place they run."""

from dataclasses import dataclass
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from snapagent.backup import run_full, run_incremental
from snapagent.cleanup import run_delete
from snapagent.discovery import discover, format_listing
from snapagent.log import write_log
from snapagent.naming import INCREMENTAL_MARKER, full_marker
from snapagent.restore import run_restore


@dataclass(frozen=True)
class ListRequest:
    pass


@dataclass(frozen=True)
class FullRequest:
    volume: str
    timestamp: str


@dataclass(frozen=True)
class IncrementalRequest:
    volume: str
    base: str


@dataclass(frozen=True)
class RestoreRequest:
    volume: str
    legacy_base: Optional[str] = None


@dataclass(frozen=True)
class DeleteRequest:
    volume: str
    suffix: str


def dispatch(request, store, config, console=None):
    """Run one request against the store. Returns the process exit status.

    Transfer actions are written to the audit log once the child exits. A
    failed log write is reported on `console` (stderr by default) and ignored.
    """
    if isinstance(request, ListRequest):
        for line in format_listing(discover(store, config.pattern)):
            click.echo(line)
        return 0

    if isinstance(request, FullRequest):
        status = run_full(store, request.volume, request.timestamp)
        _audit(config, console, "full", request.volume, full_marker(request.timestamp), status)
        return status

    if isinstance(request, IncrementalRequest):
        status = run_incremental(store, request.volume, request.base)
        _audit(config, console, "incremental", request.volume, INCREMENTAL_MARKER, status,
               base=full_marker(request.base))
        return status

    if isinstance(request, RestoreRequest):
        status = run_restore(store, request.volume, request.legacy_base)
        base = full_marker(request.legacy_base) if request.legacy_base is not None else None
        _audit(config, console, "restore", request.volume, base, status)
        return status

    if isinstance(request, DeleteRequest):
        status = run_delete(store, request.volume, request.suffix)
        _audit(config, console, "delete", request.volume, request.suffix, status)
        return status

    raise TypeError(f"Unknown request: {request!r}")


def _audit(config, console, event, volume, snapshot, status, **extra):
    # The child has already exited; a log failure must not change its status.
    try:
        write_log(config.log_file, {
            "event": event,
            "volume": volume,
            "snapshot": snapshot,
            "status": status,
            **extra,
        })
    except OSError as e:
        (console or Console(stderr=True)).print(
            f"[yellow]Warning: could not write audit log {escape(str(config.log_file))}: "
            f"{escape(str(e))}[/yellow]",
            highlight=False,
        )
