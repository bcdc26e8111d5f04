"""package.json reading.

Manifests are decoded on demand and never cached: each directory resolution
re-reads the file so the result always reflects what is on disk.
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from . import filesystem
from .errors import InvalidManifestError
from .errors import ResolutionIOError

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"


def load_manifest(directory: Path) -> dict[str, Any] | None:
    """Read and decode the package.json of a directory.

    Args:
        directory: Package directory

    Returns:
        Decoded manifest object, or None if the directory has no package.json

    Raises:
        InvalidManifestError: File is not UTF-8 JSON or not a JSON object
        ResolutionIOError: File exists but could not be read
    """
    manifest_path = directory / MANIFEST_NAME
    if not filesystem.is_file(manifest_path):
        return None

    try:
        raw = manifest_path.read_bytes()
    except OSError as e:
        raise ResolutionIOError(manifest_path, e) from e

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidManifestError(manifest_path, str(e)) from e

    if not isinstance(data, dict):
        raise InvalidManifestError(manifest_path, f"expected an object, got {type(data).__name__}")

    return data


def main_entries(manifest: dict[str, Any], fields: Iterable[str]) -> list[str]:
    """Entry points declared by a manifest, in field order.

    Only non-empty string values count; objects such as a "browser" map are skipped.
    """
    entries = []
    for field in fields:
        value = manifest.get(field)
        if isinstance(value, str) and value:
            entries.append(value)
        elif value is not None:
            logger.debug(f"[manifest] ignoring empty or non-string '{field}' field", extra={"event": "manifest:skip"})
    return entries
