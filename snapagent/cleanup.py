from snapagent.naming import snapshot_name, validate_suffix, validate_volume


def run_delete(store, volume, suffix):
    # The suffix whitelist is the only thing standing between this call and
    # a user's own snapshots.
    validate_volume(volume)
    validate_suffix(suffix)
    return store.destroy(snapshot_name(volume, suffix))
