"""Filesystem probes used by the resolver.

os.path.isfile() and friends report any OSError as False, which would turn an
unreadable directory into a silent "not found". These helpers
stat directly and only treat genuine nonexistence as a miss.
"""

import errno
import os
import stat
from pathlib import Path

from .errors import ResolutionIOError

# errno values meaning "nothing is there" rather than "something went wrong"
MISSING_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR, errno.ELOOP, errno.ENAMETOOLONG})


def _stat(path: Path) -> os.stat_result | None:
    try:
        return os.stat(path)
    except OSError as e:
        if e.errno in MISSING_ERRNOS:
            return None
        raise ResolutionIOError(path, e) from e


def is_file(path: Path) -> bool:
    """True if path (following symlinks) is an existing regular file."""
    st = _stat(path)
    return st is not None and stat.S_ISREG(st.st_mode)


def is_dir(path: Path) -> bool:
    """True if path (following symlinks) is an existing directory."""
    st = _stat(path)
    return st is not None and stat.S_ISDIR(st.st_mode)


def normalize(path: Path | str) -> Path:
    """Make a path absolute and collapse "." / ".." / duplicate separators lexically."""
    return Path(os.path.normpath(os.path.abspath(path)))


def real_path(path: Path | str) -> Path:
    """Replace every symlink component with its target."""
    return Path(os.path.realpath(path))
