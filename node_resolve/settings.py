"""Resolver settings files.

Scope-aware YAML settings. Each file may carry a `resolve:` section whose keys
are ResolutionContext fields:

```yaml
resolve:
  extensions: [.js, .mjs, .json]
  main_fields: [module, main]
  preserve_symlinks: false
```

Scope priority (most specific wins):
1. project (.node-resolve/settings.yaml under the cwd)
2. global (~/.node-resolve/settings.yaml)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from typing import Literal

import yaml

from .context import ResolutionContext

logger = logging.getLogger(__name__)

Scope = Literal["project", "global"]

SETTINGS_SECTION = "resolve"


@dataclass
class SettingsPaths:
    """Standard paths for settings files."""

    global_settings: Path
    project_settings: Path

    @classmethod
    def default(cls) -> SettingsPaths:
        return cls(
            global_settings=Path.home() / ".node-resolve" / "settings.yaml",
            project_settings=Path.cwd() / ".node-resolve" / "settings.yaml",
        )


class ResolverSettings:
    """Loads resolver options from the global and project settings files.

    Usage:
        context = ResolverSettings().context()
        resolve("lodash", context)
    """

    def __init__(self, paths: SettingsPaths | None = None) -> None:
        self.paths = paths or SettingsPaths.default()

    def get_merged_settings(self) -> dict[str, Any]:
        """Merge the `resolve:` sections of all scopes, project over global."""
        result: dict[str, Any] = {}
        for scope in ("global", "project"):
            result = _deep_merge(result, self._read_scope(scope))
        return result

    def context(self) -> ResolutionContext:
        """Build a ResolutionContext from the merged settings.

        Raises:
            pydantic.ValidationError: Unknown key or invalid value in a settings file
        """
        return ResolutionContext.from_settings(self.get_merged_settings())

    def _get_scope_path(self, scope: Scope) -> Path:
        return {
            "project": self.paths.project_settings,
            "global": self.paths.global_settings,
        }[scope]

    def _read_scope(self, scope: Scope) -> dict[str, Any]:
        """Read the `resolve:` section of one scope.

        A relative basedir is taken from the directory holding `.node-resolve/`.
        """
        path = self._get_scope_path(scope)
        if not path.exists():
            return {}

        try:
            with open(path, encoding="utf-8") as f:
                content = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Skipping unreadable settings file {path}: {e}")
            return {}

        section = content.get(SETTINGS_SECTION) if isinstance(content, dict) else None
        if not isinstance(section, dict):
            return {}

        basedir = section.get("basedir")
        if isinstance(basedir, str) and not Path(basedir).is_absolute():
            section["basedir"] = str(path.parent.parent / basedir)
        return section


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dicts, overlay wins."""
    result = base.copy()
    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def get_settings() -> ResolverSettings:
    """Get a settings instance with default paths."""
    return ResolverSettings()
