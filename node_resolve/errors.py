"""Resolution errors.

Every failure raised by the resolver derives from ResolutionError so callers
can catch the whole family at once:
- NotFoundError: no candidate produced an existing file
- ResolutionIOError: a filesystem operation failed for another reason
- InvalidManifestError: package.json could not be decoded (strict mode only)
- InvalidSpecifierError: the specifier itself is unusable
"""

from __future__ import annotations

from pathlib import Path


class ResolutionError(Exception):
    """Base class for module resolution failures."""


class NotFoundError(ResolutionError):
    """Raised when a specifier does not resolve to an existing file."""

    def __init__(self, specifier: str, basedir: Path | None = None, searched: list[Path] | None = None):
        self.specifier = specifier
        self.basedir = basedir
        self.searched = list(searched or [])
        super().__init__(self._format())

    def _format(self) -> str:
        message = f"Cannot find module '{self.specifier}'"
        if self.basedir is not None:
            message += f" from '{self.basedir}'"
        if self.searched:
            lines = "\n".join(f"  - {path}" for path in self.searched)
            message += f"\n\nSearched:\n{lines}"
        return message


class ResolutionIOError(ResolutionError):
    """Raised when the filesystem fails for a reason other than a missing path."""

    def __init__(self, path: Path, error: OSError):
        self.path = path
        self.error = error
        super().__init__(f"I/O error while probing {path}: {error}")


class InvalidManifestError(ResolutionError):
    """Raised when a package.json exists but cannot be decoded into an object."""

    def __init__(self, manifest_path: Path, reason: str):
        self.manifest_path = manifest_path
        self.reason = reason
        super().__init__(f"Invalid package manifest {manifest_path}: {reason}")


class InvalidSpecifierError(ResolutionError, ValueError):
    """Raised for specifiers that cannot be resolved at all."""

    def __init__(self, specifier: str, reason: str):
        self.specifier = specifier
        super().__init__(f"Invalid specifier {specifier!r}: {reason}")
