"""Config file candidates for local (disk/ISO) boot, in syslinux search order."""

from typing import List

# http://wiki.syslinux.org/wiki/index.php?title=Config
PROBE_DIRS = (
    "boot/isolinux",
    "isolinux",
    "boot/syslinux",
    "syslinux",
    "",
)
PROBE_FILES = (
    "isolinux.cfg",
    "syslinux.cfg",
)


def probe_candidates() -> List[str]:
    """Relative config paths to try, directory-major."""
    candidates = []
    for d in PROBE_DIRS:
        for name in PROBE_FILES:
            candidates.append(f"{d}/{name}" if d else name)
    return candidates
