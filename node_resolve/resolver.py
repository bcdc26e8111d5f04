"""Module resolution entry point.

Resolves require()/import specifiers the way Node.js does:
1. Core modules ("fs", "events") resolve to themselves without touching disk
2. Absolute and relative paths are probed as a file, then as a directory
3. Bare package names are searched in node_modules, walking up from basedir
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from . import filesystem
from .candidates import resolve_candidate
from .context import ResolutionContext
from .errors import NotFoundError
from .specifier import SpecifierKind
from .specifier import classify
from .specifier import is_directory_request
from .walker import resolve_bare

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedModule:
    """Outcome of a successful resolution.

    Attributes:
        specifier: The specifier that was resolved
        kind: How the specifier was classified
        path: Absolute, normalized file path; None for core modules
    """

    specifier: str
    kind: SpecifierKind
    path: Path | None = None

    @property
    def is_core(self) -> bool:
        """True when the runtime provides the module itself and there is no file."""
        return self.kind is SpecifierKind.CORE

    def __str__(self) -> str:
        return self.specifier if self.path is None else str(self.path)


class Resolver:
    """Resolves specifiers against one ResolutionContext.

    Holds no state besides the (immutable) context, so one instance can serve
    many threads.
    """

    def __init__(self, context: ResolutionContext | None = None):
        self.context = context or ResolutionContext()

    def resolve(self, specifier: str) -> ResolvedModule:
        """Resolve a require() argument.

        Raises:
            NotFoundError: Specifier does not name an existing file
            ResolutionIOError: Filesystem failure other than a missing path
            InvalidManifestError: Malformed package.json with strict_manifests enabled
            InvalidSpecifierError: Empty specifier or one containing a NUL byte
        """
        kind = classify(specifier)

        if kind is SpecifierKind.CORE:
            logger.debug(f"[resolve:core] {specifier}", extra={"event": "resolve:core"})
            return ResolvedModule(specifier, kind)

        if kind is SpecifierKind.BARE:
            path = resolve_bare(specifier, self.context)
        else:
            path = self._resolve_path(specifier, kind)

        return ResolvedModule(specifier, kind, filesystem.normalize(path))

    def _resolve_path(self, specifier: str, kind: SpecifierKind) -> Path:
        if kind is SpecifierKind.ABSOLUTE:
            target = Path(specifier)
            basedir = None
        else:
            basedir = self.context.base_directory()
            target = Path(os.path.join(basedir, specifier))

        try:
            return resolve_candidate(target, self.context, is_directory_request(specifier))
        except NotFoundError:
            raise NotFoundError(specifier, basedir) from None

    def __repr__(self) -> str:
        return f"Resolver(basedir={self.context.basedir}, extensions={list(self.context.extensions)})"


def resolve(specifier: str, context: ResolutionContext | None = None) -> ResolvedModule:
    """Resolve a specifier relative to context.basedir (default: the current working directory).

    Example:
        >>> resolve("./lib").path
        PosixPath('/path/to/cwd/lib/index.js')
    """
    return Resolver(context).resolve(specifier)


def resolve_from(specifier: str, basedir: str | Path) -> ResolvedModule:
    """Resolve a specifier relative to basedir with default options."""
    return Resolver(ResolutionContext().with_basedir(basedir)).resolve(specifier)
