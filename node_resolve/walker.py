"""Dependency directory walker.

Bare specifiers are looked up in <dir>/node_modules for every directory from
the base directory up to the filesystem root. The nearest match wins.
"""

import logging
from pathlib import Path

from . import filesystem
from .candidates import candidate_path
from .candidates import probe
from .context import ResolutionContext
from .errors import NotFoundError
from .specifier import is_directory_request

logger = logging.getLogger(__name__)


def node_modules_paths(basedir: Path, module_directory: str = "node_modules") -> list[Path]:
    """Dependency directories to search, nearest first.

    Example:
        >>> node_modules_paths(Path("/a/b"))
        [PosixPath('/a/b/node_modules'), PosixPath('/a/node_modules'), PosixPath('/node_modules')]
    """
    directory = filesystem.normalize(basedir)
    return [d / module_directory for d in (directory, *directory.parents)]


def resolve_bare(specifier: str, context: ResolutionContext) -> Path:
    """Resolve a package specifier ("pkg" or "pkg/sub/path") by ascending from the base directory.

    Raises:
        NotFoundError: No ancestor's dependency directory holds a match
    """
    basedir = candidate_path(context.base_directory(), context)
    searched = []
    directory_only = is_directory_request(specifier)

    for modules_dir in node_modules_paths(basedir, context.module_directory):
        searched.append(modules_dir)
        if not filesystem.is_dir(modules_dir):
            continue

        found = probe(modules_dir / specifier, context, directory_only)
        if found is not None:
            logger.debug(f"[resolve:bare] {specifier} -> {found}", extra={"event": "resolve:bare"})
            return found

    raise NotFoundError(specifier, basedir, searched)
