from snapagent.store.zfs import ZfsStore


def create_store(config, console=None):
    """Create a volume store from config.

    Config fields:
        backend: "zfs" (the only backend)
        zfs_command: argv prefix for the zfs tool, e.g. ["sudo", "zfs"]
    """
    if config.backend == "zfs":
        return ZfsStore(config.zfs_command, console=console)

    raise ValueError(f"Unknown store backend: {config.backend!r}. Use 'zfs'.")
