import pytest

from snapagent.config import AgentConfig
from snapagent.store.base import VolumeStore


class FakeStore(VolumeStore):
    """Records every call in order. Snapshots live in `names`, like `zfs list` rows."""

    def __init__(self, names=(), statuses=None):
        self.names = list(names)
        self.calls = []
        self.statuses = statuses or {}

    def list_names(self):
        self.calls.append(("list",))
        return list(self.names)

    def exists(self, name):
        self.calls.append(("exists", name))
        return name in self.names

    def snapshot(self, name):
        self.calls.append(("snapshot", name))
        status = self.statuses.get("snapshot", 0)
        if status == 0:
            self.names.append(name)
        return status

    def destroy(self, name):
        self.calls.append(("destroy", name))
        if name not in self.names:
            return 1
        self.names.remove(name)
        return 0

    def unmount(self, volume):
        self.calls.append(("unmount", volume))
        return 0

    def rollback(self, name):
        self.calls.append(("rollback", name))
        return 0

    def send(self, name, base=None):
        self.calls.append(("send", name, base))
        if name not in self.names or (base and base not in self.names):
            return 1
        return 0

    def receive(self, volume):
        self.calls.append(("receive", volume))
        return self.statuses.get("receive", 0)

    def ops(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def config(tmp_path):
    return AgentConfig(pattern=".", log_file=tmp_path / "logs.jsonl")
