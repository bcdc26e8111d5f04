"""Path candidate resolution.

Turns a filesystem path with no assumed extension into an existing file.

Resolution order (first match wins):
1. The path itself, if it is a regular file
2. The path + each configured extension
3. package.json main fields of the directory, each tried as a file and then
   as an index directory (the target's own package.json is never read)
4. <directory>/index + each configured extension
"""

import logging
from pathlib import Path

from . import filesystem
from .context import ResolutionContext
from .errors import InvalidManifestError
from .errors import NotFoundError
from .manifest import load_manifest
from .manifest import main_entries

logger = logging.getLogger(__name__)


def candidate_path(path: Path | str, context: ResolutionContext) -> Path:
    """Absolute form of a path as the probes should see it.

    Lexically normalized when symlinks are preserved, fully dereferenced otherwise.
    """
    if context.preserve_symlinks:
        return filesystem.normalize(path)
    return filesystem.real_path(path)


def resolve_candidate(path: Path | str, context: ResolutionContext, directory_only: bool = False) -> Path:
    """Resolve a path as a file, then as a directory.

    With directory_only the file and extension candidates are skipped.

    Raises:
        NotFoundError: No file matched
        ResolutionIOError: Filesystem failure other than a missing path
        InvalidManifestError: Malformed package.json with strict_manifests enabled
    """
    candidate = candidate_path(path, context)
    found = probe(candidate, context, directory_only)
    if found is None:
        raise NotFoundError(str(path))
    return found


def probe(candidate: Path, context: ResolutionContext, directory_only: bool = False) -> Path | None:
    """Like resolve_candidate, but returns None on a miss."""
    found = None if directory_only else resolve_as_file(candidate, context.extensions)
    if found is None and filesystem.is_dir(candidate):
        found = resolve_as_directory(candidate, context)

    if found is None:
        return None
    if not context.preserve_symlinks:
        found = filesystem.real_path(found)
    logger.debug(f"[resolve:candidate] {candidate} -> {found}", extra={"event": "resolve:candidate"})
    return found


def resolve_as_file(path: Path, extensions: tuple[str, ...]) -> Path | None:
    """Return path if it is a file, otherwise the first path + extension that is."""
    if filesystem.is_file(path):
        return path

    for ext in extensions:
        ext_path = Path(f"{path}{ext}")
        if filesystem.is_file(ext_path):
            return ext_path

    return None


def resolve_index(directory: Path, extensions: tuple[str, ...]) -> Path | None:
    """Return the first directory/index + extension that is a file."""
    for ext in extensions:
        index_path = directory / f"index{ext}"
        if filesystem.is_file(index_path):
            return index_path

    return None


def resolve_as_directory(directory: Path, context: ResolutionContext) -> Path | None:
    """Resolve a directory through its package.json, falling back to its index file."""
    for entry in _entry_points(directory, context):
        target = directory / entry
        found = resolve_as_file(target, context.extensions) or resolve_index(target, context.extensions)
        if found is not None:
            return found
        logger.debug(f"[resolve:main] {directory}: entry '{entry}' does not resolve", extra={"event": "resolve:main"})

    return resolve_index(directory, context.extensions)


def _entry_points(directory: Path, context: ResolutionContext) -> list[str]:
    try:
        manifest = load_manifest(directory)
    except InvalidManifestError as e:
        if context.strict_manifests:
            raise
        logger.debug(f"[manifest] treating as absent: {e}", extra={"event": "manifest:invalid"})
        return []

    if manifest is None:
        return []
    return main_entries(manifest, context.main_fields)
