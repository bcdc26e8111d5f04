"""Node.js-style module resolution.

Resolves require()/import specifiers to absolute file paths without running
any code:

    from node_resolve import resolve_from

    resolve_from("lodash/get", "/project/src").path
    # → /project/node_modules/lodash/get.js
"""

from .builtins import BUILTINS
from .builtins import is_core_module
from .context import ResolutionContext
from .errors import InvalidManifestError
from .errors import InvalidSpecifierError
from .errors import NotFoundError
from .errors import ResolutionError
from .errors import ResolutionIOError
from .resolver import ResolvedModule
from .resolver import Resolver
from .resolver import resolve
from .resolver import resolve_from
from .specifier import SpecifierKind
from .specifier import classify
from .walker import node_modules_paths

__all__ = [
    "BUILTINS",
    "InvalidManifestError",
    "InvalidSpecifierError",
    "NotFoundError",
    "ResolutionContext",
    "ResolutionError",
    "ResolutionIOError",
    "ResolvedModule",
    "Resolver",
    "SpecifierKind",
    "classify",
    "is_core_module",
    "node_modules_paths",
    "resolve",
    "resolve_from",
]
