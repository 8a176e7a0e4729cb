from __future__ import annotations
import os
import logging
from dataclasses import dataclass
from typing import Optional
import psutil

logger = logging.getLogger("preflight")

@dataclass
class VolumeUsage:
    mountpoint: str
    total: int
    used: int
    free: int
    percent: float

def _mountpoint(path: str) -> str:
    p = os.path.abspath(path)
    while not os.path.ismount(p):
        parent = os.path.dirname(p)
        if parent == p:
            break
        p = parent
    return p

def volume_usage(path: str) -> Optional[VolumeUsage]:
    """Capacity of the filesystem holding ``path``, or None if psutil can't tell."""
    try:
        u = psutil.disk_usage(os.path.abspath(path))
    except OSError as e:
        logger.debug("disk usage unavailable for %s: %s", path, e)
        return None
    return VolumeUsage(
        mountpoint=_mountpoint(path),
        total=int(u.total),
        used=int(u.used),
        free=int(u.free),
        percent=float(u.percent),
    )
