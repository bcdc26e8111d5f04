"""Resolver configuration.

ResolutionContext is an immutable value: every builder method returns a new
context, so a single instance can be shared freely between threads.

Usage:
    context = ResolutionContext().with_basedir("/project").with_extensions(["js", "mjs"])
    resolve("lodash", context)
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator

from .filesystem import normalize

DEFAULT_EXTENSIONS = (".js", ".json", ".node")
DEFAULT_MAIN_FIELDS = ("main",)
DEFAULT_MODULE_DIRECTORY = "node_modules"


class ResolutionContext(BaseModel):
    """Options for one or many resolutions."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    basedir: Path | None = Field(None, description="Directory relative specifiers start from (default: cwd)")
    extensions: tuple[str, ...] = Field(DEFAULT_EXTENSIONS, description="Extensions tried in order")
    main_fields: tuple[str, ...] = Field(DEFAULT_MAIN_FIELDS, description="package.json entry fields, in order")
    preserve_symlinks: bool = Field(True, description="Keep symlink components instead of resolving them")
    module_directory: str = Field(DEFAULT_MODULE_DIRECTORY, description="Dependency directory name")
    strict_manifests: bool = Field(False, description="Raise on malformed package.json instead of ignoring it")

    @field_validator("extensions")
    @classmethod
    def dotted_extensions(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("at least one extension is required")
        if any(not ext or ext == "." for ext in value):
            raise ValueError("extensions must be non-empty")
        return tuple(ext if ext.startswith(".") else f".{ext}" for ext in value)

    @field_validator("main_fields")
    @classmethod
    def non_empty_main_fields(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value or any(not name for name in value):
            raise ValueError("main_fields must be a non-empty list of field names")
        return value

    @field_validator("module_directory")
    @classmethod
    def single_directory_name(cls, value: str) -> str:
        if not value or "/" in value or os.sep in value or value in (".", ".."):
            raise ValueError(f"module_directory must be a single directory name, got {value!r}")
        return value

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> ResolutionContext:
        """Build a context from a settings dictionary.

        Settings format:
        ```yaml
        basedir: ./src
        extensions: [.js, .mjs, .json]
        main_fields: [module, main]
        preserve_symlinks: false
        module_directory: node_modules
        strict_manifests: false
        ```

        Args:
            settings: Mapping of ResolutionContext field names to values

        Raises:
            pydantic.ValidationError: Unknown key or invalid value
        """
        return cls.model_validate(dict(settings))

    def _replace(self, **changes: Any) -> ResolutionContext:
        return self.model_validate({**self.model_dump(), **changes})

    def with_basedir(self, basedir: str | Path) -> ResolutionContext:
        """Create a new context with a different base directory."""
        return self._replace(basedir=Path(basedir))

    def with_extensions(self, extensions: Iterable[str]) -> ResolutionContext:
        """Create a new context with a different extension list ("js" becomes ".js")."""
        return self._replace(extensions=tuple(extensions))

    def with_main_fields(self, main_fields: Iterable[str]) -> ResolutionContext:
        """Create a new context trying these package.json fields in order."""
        return self._replace(main_fields=tuple(main_fields))

    def with_preserve_symlinks(self, preserve_symlinks: bool) -> ResolutionContext:
        return self._replace(preserve_symlinks=preserve_symlinks)

    def with_module_directory(self, module_directory: str) -> ResolutionContext:
        return self._replace(module_directory=module_directory)

    def with_strict_manifests(self, strict_manifests: bool) -> ResolutionContext:
        return self._replace(strict_manifests=strict_manifests)

    def base_directory(self) -> Path:
        """Absolute, normalized base directory; the cwd when none is configured."""
        return normalize(self.basedir if self.basedir is not None else Path.cwd())
