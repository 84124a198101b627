import shlex
import subprocess

from rich.console import Console

from snapagent.errors import ExternalCommandError
from snapagent.store.base import VolumeStore

LIST_TYPES = "filesystem,volume,snapshot"


class ZfsStore(VolumeStore):
    """VolumeStore backed by the `zfs` command-line tool.

    Every command is an argument vector; names are never interpolated into a
    shell string.
    """

    def __init__(self, zfs_command=("zfs",), console=None):
        self.zfs_command = list(zfs_command)
        self.console = console or Console(stderr=True)

    def list_names(self):
        cmd = self._cmd("list", "-H", "-o", "name", "-t", LIST_TYPES)
        result = self._capture(cmd)
        if result.returncode != 0:
            raise ExternalCommandError(cmd, result.returncode, result.stderr)
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def exists(self, name):
        kind = "snapshot" if "@" in name else "filesystem,volume"
        result = self._capture(self._cmd("list", "-H", "-o", "name", "-t", kind, name))
        return result.returncode == 0

    def snapshot(self, name):
        return self._run(self._cmd("snapshot", name))

    def destroy(self, name):
        return self._run(self._cmd("destroy", name))

    def unmount(self, volume):
        return self._run(self._cmd("unmount", volume))

    def rollback(self, name):
        return self._run(self._cmd("rollback", "-r", name))

    def send(self, name, base=None):
        if base:
            return self._spawn(self._cmd("send", "-i", base, name))
        return self._spawn(self._cmd("send", name))

    def receive(self, volume):
        return self._spawn(self._cmd("receive", volume))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _cmd(self, *args):
        return self.zfs_command + list(args)

    def _capture(self, cmd):
        try:
            return subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise ExternalCommandError(cmd, 127, str(e)) from e

    def _run(self, cmd):
        """Run a metadata command to completion. stdout is kept off the data stream."""
        result = self._capture(cmd)
        if result.returncode != 0:
            self.console.print(
                f"{shlex.join(cmd)} exited {result.returncode}: {result.stderr.strip()}",
                markup=False,
                highlight=False,
            )
        return result.returncode

    def _spawn(self, cmd):
        """Run a transfer command with this process's stdin/stdout/stderr."""
        try:
            return subprocess.run(cmd).returncode
        except FileNotFoundError as e:
            raise ExternalCommandError(cmd, 127, str(e)) from e
