import shlex


class ArgumentError(ValueError):
    """Invalid volume, timestamp or snapshot suffix. Raised before any command runs."""


class ExternalCommandError(RuntimeError):
    """A storage command exited non-zero where its output was needed."""

    def __init__(self, cmd, returncode, stderr=""):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr or ""
        super().__init__(
            f"{shlex.join(self.cmd)} exited {returncode}: {self.stderr.strip()}"
        )
