from abc import ABC, abstractmethod


class VolumeStore(ABC):
    """Base interface for the storage command surface.

    Implementations: ZfsStore.

    Metadata calls (snapshot, destroy, unmount, rollback) run to completion
    and return the command's exit status without raising; their stdout never
    reaches ours. Transfer calls (send, receive) hand stdin/stdout straight
    to a child process and return its exit status.
    """

    @abstractmethod
    def list_names(self):
        """Return every volume and snapshot name as `volume` or `volume@suffix`."""
        pass

    @abstractmethod
    def exists(self, name):
        """True if the volume or snapshot `name` exists."""
        pass

    @abstractmethod
    def snapshot(self, name):
        pass

    @abstractmethod
    def destroy(self, name):
        pass

    @abstractmethod
    def unmount(self, volume):
        pass

    @abstractmethod
    def rollback(self, name):
        """Roll the volume back to snapshot `name`, discarding newer snapshots."""
        pass

    @abstractmethod
    def send(self, name, base=None):
        """Stream snapshot `name` to stdout, as a delta from `base` if given."""
        pass

    @abstractmethod
    def receive(self, volume):
        """Apply a stream read from stdin to `volume`."""
        pass
