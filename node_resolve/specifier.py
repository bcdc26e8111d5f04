"""Specifier classification.

Decides which branch of the resolution algorithm handles a specifier:
- CORE: a runtime built-in, resolved by identity
- ABSOLUTE: a filesystem path from the root
- RELATIVE: a path from the base directory ("./x", "../x", ".", "..")
- BARE: a package name with an optional subpath ("lodash", "lodash/get")
"""

import os
from enum import Enum

from .builtins import is_core_module
from .errors import InvalidSpecifierError

RELATIVE_PREFIXES = ("./", "../")


class SpecifierKind(str, Enum):
    """Category of a module specifier."""

    CORE = "core"
    ABSOLUTE = "absolute"
    RELATIVE = "relative"
    BARE = "bare"


def classify(specifier: str) -> SpecifierKind:
    """Classify a specifier without touching the filesystem.

    Core names are checked first so a same-named file can never shadow them.

    Raises:
        InvalidSpecifierError: Specifier is empty or contains a NUL byte
    """
    if not specifier:
        raise InvalidSpecifierError(specifier, "specifier must be a non-empty string")
    if "\x00" in specifier:
        raise InvalidSpecifierError(specifier, "specifier must not contain NUL")

    if is_core_module(specifier):
        return SpecifierKind.CORE
    if os.path.isabs(specifier):
        return SpecifierKind.ABSOLUTE
    if specifier.startswith(RELATIVE_PREFIXES) or specifier in (".", ".."):
        return SpecifierKind.RELATIVE
    return SpecifierKind.BARE


def is_directory_request(specifier: str) -> bool:
    """True for specifiers that can only name a directory ("./lib/", "pkg/", ".", "..").

    Such specifiers skip the file and extension candidates.
    """
    return specifier in (".", "..") or specifier.endswith(("/", "/.", "/.."))
