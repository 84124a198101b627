from snapagent.naming import (
    INCREMENTAL_MARKER,
    full_marker,
    snapshot_name,
    validate_timestamp,
    validate_volume,
)


def run_full(store, volume, timestamp):
    """Snapshot volume@full-<timestamp>, then stream that snapshot to stdout.

    The snapshot step's status is not checked; if it failed, `zfs send`
    fails on the missing snapshot and its status is returned.
    """
    validate_volume(volume)
    name = snapshot_name(volume, full_marker(timestamp))
    store.snapshot(name)
    return store.send(name)


def run_incremental(store, volume, base):
    """Replace volume@incremental and stream its delta from volume@full-<base>.

    The base snapshot is not looked up first; a missing base is reported by
    `zfs send` itself.
    """
    validate_volume(volume)
    base_name = snapshot_name(volume, full_marker(validate_timestamp(base)))
    name = snapshot_name(volume, INCREMENTAL_MARKER)

    if store.exists(name):
        store.destroy(name)
    store.snapshot(name)
    return store.send(name, base=base_name)
