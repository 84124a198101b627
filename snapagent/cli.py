from datetime import datetime

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from snapagent.config import CONFIG_ENV, load_config
from snapagent.errors import ExternalCommandError
from snapagent.log import read_log
from snapagent.requests import (
    DeleteRequest,
    FullRequest,
    IncrementalRequest,
    ListRequest,
    RestoreRequest,
    dispatch,
)
from snapagent.store import create_store

# stdout carries the send stream and the listing; everything else goes here.
err_console = Console(stderr=True)


@click.group()
@click.version_option(version="0.1.0")
@click.option("--config", "config_file", envvar=CONFIG_ENV, default=None,
              type=click.Path(dir_okay=False),
              help="JSON config file. Default: /etc/snapagent/config.json")
@click.pass_context
def main(ctx, config_file):
    """snapagent: snapshot backup agent, run once per action by a backup orchestrator."""
    ctx.obj = config_file


@main.command("list")
@click.pass_obj
def list_cmd(config_file):
    """List matching volumes and their snapshots: `name [s1,s2,...]`."""
    _run(config_file, ListRequest())


@main.command()
@click.argument("volume")
@click.argument("timestamp")
@click.pass_obj
def full(config_file, volume, timestamp):
    """Snapshot VOLUME as a full backup at TIMESTAMP and stream it to stdout."""
    _run(config_file, FullRequest(volume, timestamp))


@main.command()
@click.argument("volume")
@click.argument("base")
@click.pass_obj
def incremental(config_file, volume, base):
    """Stream the delta from the full backup at BASE to a fresh incremental snapshot."""
    _run(config_file, IncrementalRequest(volume, base))


@main.command()
@click.argument("volume")
@click.option("--legacy-base", default=None, metavar="TIMESTAMP",
              help="Unmount VOLUME and roll it back to this full backup before receiving.")
@click.pass_obj
def restore(config_file, volume, legacy_base):
    """Receive a backup stream from stdin into VOLUME."""
    _run(config_file, RestoreRequest(volume, legacy_base))


@main.command()
@click.argument("volume")
@click.argument("suffix")
@click.pass_obj
def delete(config_file, volume, suffix):
    """Destroy VOLUME@SUFFIX. Only snapshots created by snapagent are accepted."""
    _run(config_file, DeleteRequest(volume, suffix))


@main.command()
@click.option("-n", "--limit", default=20, help="Number of log entries to show.")
@click.pass_obj
def logs(config_file, limit):
    """Show the action audit log."""
    console = Console()
    try:
        config = load_config(config_file)
    except ValueError as e:
        _fail(e)

    entries = read_log(config.log_file)
    if not entries:
        console.print("[dim]No logs found.[/dim]")
        return

    table = Table(title="Agent Log")
    table.add_column("Time", style="dim")
    table.add_column("Event", style="bold")
    table.add_column("Volume")
    table.add_column("Snapshot", style="cyan")
    table.add_column("Status", style="bold")

    for entry in (entries[-limit:] if limit > 0 else []):
        ts = entry.get("timestamp", "")
        if ts:
            try:
                ts = datetime.fromisoformat(ts).strftime("%m-%d %H:%M")
            except ValueError:
                pass
        status = entry.get("status")
        status_style = {0: "[green]ok[/green]", None: ""}.get(status, f"[red]{status}[/red]")
        table.add_row(
            ts,
            entry.get("event", ""),
            entry.get("volume", ""),
            entry.get("snapshot") or "",
            status_style,
        )

    console.print(table)


def _run(config_file, request):
    """Load config, run the request and exit with its status."""
    try:
        config = load_config(config_file)
        store = create_store(config, console=err_console)
        status = dispatch(request, store, config, console=err_console)
    except (ValueError, ExternalCommandError) as e:
        _fail(e)
    if status:
        # negative status: child killed by a signal
        raise SystemExit(status if status > 0 else 1)


def _fail(error):
    err_console.print(f"[red]Error:[/red] {escape(str(error))}", highlight=False)
    raise SystemExit(1)
