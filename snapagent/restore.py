from snapagent.naming import full_marker, snapshot_name, validate_volume


def run_restore(store, volume, legacy_base=None):
    """Receive a stream from stdin into volume.

    With legacy_base, the volume is first unmounted and rolled back to its
    full-<legacy_base> snapshot. A previous receive can leave the destination
    mounted and modified (atime and the like), which makes the next
    incremental receive fail. Both steps finish before stdin is touched.
    """
    validate_volume(volume)
    if legacy_base is not None:
        base_name = snapshot_name(volume, full_marker(legacy_base))
        store.unmount(volume)
        store.rollback(base_name)
    return store.receive(volume)
