from __future__ import annotations
import os
import time
import logging
import stat as statmod
from typing import Callable, Iterator, List, NamedTuple, Optional
from .models import NO_EXTENSION, ScanResult

logger = logging.getLogger("preflight")

FILE = "file"
DIR = "dir"
OTHER = "other"

PROGRESS_INTERVAL = 0.10

ProgressCb = Callable[[str, int, int, int], None]  # (current_path, files, dirs, bytes_scanned)


class ScanError(Exception):
    """Scan could not be performed for the given root."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class NotFound(ScanError):
    pass


class NotADirectory(ScanError):
    pass


class ScanAborted(ScanError):
    pass


class Entry(NamedTuple):
    kind: str
    path: str
    name: str
    size: int = 0


def extension_label(name: str) -> str:
    i = name.rfind(".")
    if i < 0:
        return NO_EXTENSION
    return name[i:]

def _list_dir(path: str) -> List[os.DirEntry]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda e: e.name)

def iter_entries(root: str) -> Iterator[Entry]:
    """Yield every reachable entry below ``root`` in depth-first pre-order.

    Entries whose metadata can't be read are dropped, and a directory that
    can't be listed is yielded but not descended into. Only a failure to list
    ``root`` itself raises (``ScanAborted``).
    """
    try:
        top = _list_dir(root)
    except OSError as e:
        raise ScanAborted(root, e.strerror or str(e)) from e

    stack = [iter(top)]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        try:
            st = entry.stat(follow_symlinks=False)
        except OSError as e:
            logger.debug("skipping %s: %s", entry.path, e)
            continue

        mode = st.st_mode
        if statmod.S_ISDIR(mode):
            yield Entry(DIR, entry.path, entry.name)
            try:
                children = _list_dir(entry.path)
            except OSError as e:
                logger.debug("not descending into %s: %s", entry.path, e)
                continue
            stack.append(iter(children))
        elif statmod.S_ISREG(mode):
            yield Entry(FILE, entry.path, entry.name, int(st.st_size))
        else:
            # symlinks, sockets, devices, fifos
            yield Entry(OTHER, entry.path, entry.name)

def accumulate(result: ScanResult, entry: Entry) -> ScanResult:
    if entry.kind == FILE:
        result.total_files += 1
        result.total_size += entry.size
        # first file is recorded even at 0 bytes; later ones must be strictly larger
        if entry.size > result.largest_file_size or not result.largest_file_path:
            result.largest_file_size = entry.size
            result.largest_file_path = entry.path
        ext = extension_label(entry.name)
        result.file_types[ext] = result.file_types.get(ext, 0) + 1
    elif entry.kind == DIR:
        result.total_directories += 1
    return result

def scan(root: str, progress: Optional[ProgressCb] = None) -> ScanResult:
    """Measure the tree under ``root`` without touching it.

    Raises ``NotFound`` or ``NotADirectory`` before any traversal happens and
    ``ScanAborted`` if the root can't be listed. Everything below the root is
    best effort.
    """
    t0 = time.time()
    if not os.path.exists(root):
        raise NotFound(root, "no such file or directory")
    if not os.path.isdir(root):
        raise NotADirectory(root, "not a directory")

    result = ScanResult(root=root)

    last_emit = 0.0
    for entry in iter_entries(root):
        accumulate(result, entry)
        if progress:
            now = time.time()
            if now - last_emit >= PROGRESS_INTERVAL:
                last_emit = now
                progress(entry.path, result.total_files, result.total_directories, result.total_size)

    result.elapsed_sec = time.time() - t0
    logger.debug("scanned %s: %d files, %d dirs, %d bytes in %.2fs",
                 root, result.total_files, result.total_directories,
                 result.total_size, result.elapsed_sec)
    return result
