import logging
import os
from pathlib import Path

log = logging.getLogger(__name__)


def _log_walk_error(error):
    log.error("Error encountered while walking dir: %s", error)


def _is_displayable(path):
    """False for paths that don't decode cleanly (surrogate-escaped bytes)."""
    try:
        str(path).encode("utf-8")
    except UnicodeEncodeError:
        log.error("Entry path could not convert to a string: %r", os.fsencode(path))
        return False
    return True


def walk_entries(root_path, recurse=False):
    """
    Yields every file and directory under root_path (the root itself excluded).

    Entries are sorted by name within a directory. When recursing, a directory's
    contents are yielded before the directory, so renaming in yield order never
    invalidates a path that is still to come. Symlinks are not followed.
    Entries whose path is not valid UTF-8 are logged and skipped.
    """
    root = Path(root_path)

    if not recurse:
        log.debug("Shallow walk of %s", root)
        try:
            with os.scandir(root) as it:
                names = sorted(entry.name for entry in it)
        except OSError as e:
            _log_walk_error(e)
            return
        for name in names:
            path = root / name
            if _is_displayable(path):
                yield path
        return

    log.debug("Recursive walk of %s", root)
    for dirpath, dirnames, filenames in os.walk(root, topdown=False, onerror=_log_walk_error):
        for name in sorted(dirnames + filenames):
            path = Path(dirpath) / name
            if _is_displayable(path):
                yield path
