import re

from snapagent.naming import split_name


def discover(store, pattern):
    """Group the store's flat listing by volume and keep volumes matching pattern.

    The pattern is searched (unanchored) against the volume name only.
    Returns [(volume, [suffix, ...]), ...] sorted by volume; suffixes stay in
    the order the store listed them.
    """
    regex = re.compile(pattern)
    volumes = {}
    for name in store.list_names():
        volume, suffix = split_name(name)
        suffixes = volumes.setdefault(volume, [])
        if suffix is not None:
            suffixes.append(suffix)

    return [
        (volume, volumes[volume])
        for volume in sorted(volumes)
        if regex.search(volume)
    ]


def format_listing(volumes):
    """One `name [s1,s2]` line per volume."""
    return [f"{volume} [{','.join(suffixes)}]" for volume, suffixes in volumes]
