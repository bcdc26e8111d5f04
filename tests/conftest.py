"""Shared fixtures for node_resolve tests."""

import json
from pathlib import Path

import pytest


@pytest.fixture
def make_tree(tmp_path: Path):
    """
    Build a directory layout under tmp_path.

    Keys are paths relative to tmp_path. Values are:
    - str: file text
    - dict: written as JSON (package.json manifests)
    - None: an empty directory

    Returns the tmp_path root.
    """

    def _make(layout: dict[str, str | dict | None]) -> Path:
        for rel, content in layout.items():
            path = tmp_path / rel
            if content is None:
                path.mkdir(parents=True, exist_ok=True)
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, dict):
                path.write_text(json.dumps(content))
            else:
                path.write_text(content)
        return tmp_path

    return _make
