from __future__ import annotations

import os
import stat

from ctr_telemetry.errors import PartialWalkFailure
from ctr_telemetry.models.filesystem import DirectoryUsage


def compute_usage(root: str) -> DirectoryUsage:
    """Sum lstat sizes and count every entry under root, root included.

    Symlinks count with their own size and are never followed. The walk
    stops at the first entry it cannot read and raises PartialWalkFailure.
    """
    total = 0
    count = 0

    current = root
    try:
        st = os.lstat(root)
        total += st.st_size
        count += 1
        if not stat.S_ISDIR(st.st_mode):
            return DirectoryUsage(path=root, total_bytes=total, entry_count=count)

        pending = [root]
        while pending:
            current = pending.pop()
            with os.scandir(current) as it:
                for entry in it:
                    current = entry.path
                    est = entry.stat(follow_symlinks=False)
                    total += est.st_size
                    count += 1
                    if entry.is_dir(follow_symlinks=False):
                        pending.append(entry.path)
    except OSError as e:
        raise PartialWalkFailure(current, total, count, e) from e

    return DirectoryUsage(path=root, total_bytes=total, entry_count=count)
