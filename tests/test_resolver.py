"""End-to-end tests for resolve() / resolve_from()."""

import errno
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from node_resolve import InvalidSpecifierError
from node_resolve import NotFoundError
from node_resolve import ResolutionContext
from node_resolve import ResolutionError
from node_resolve import ResolutionIOError
from node_resolve import Resolver
from node_resolve import SpecifierKind
from node_resolve import resolve
from node_resolve import resolve_from


@pytest.mark.parametrize("name", ["fs", "events", "stream", "path"])
def test_core_modules_skip_filesystem(name, monkeypatch, tmp_path):
    def forbidden(*args, **kwargs):
        raise AssertionError("core modules must not touch the filesystem")

    monkeypatch.setattr("node_resolve.filesystem.os.stat", forbidden)
    monkeypatch.setattr("node_resolve.filesystem.os.path.realpath", forbidden)

    result = resolve_from(name, tmp_path)

    assert result.is_core
    assert result.kind is SpecifierKind.CORE
    assert result.path is None
    assert str(result) == name


def test_relative_appends_extension(make_tree):
    root = make_tree({"a.js": ""})

    result = resolve_from("./a", root)

    assert result.kind is SpecifierKind.RELATIVE
    assert result.path == root / "a.js"
    assert not result.is_core


def test_relative_path_is_normalized(make_tree):
    root = make_tree({"lib/a.js": "", "src": None})
    assert resolve_from("../lib/./a", root / "src").path == root / "lib" / "a.js"


def test_dot_resolves_directory_index(make_tree):
    root = make_tree({"pkg/index.js": "", "pkg/src": None})

    assert resolve_from(".", root / "pkg").path == root / "pkg" / "index.js"
    assert resolve_from("..", root / "pkg" / "src").path == root / "pkg" / "index.js"


def test_bare_uses_package_main(make_tree):
    root = make_tree(
        {
            "node_modules/pkg/package.json": {"main": "lib/index.js"},
            "node_modules/pkg/lib/index.js": "",
        }
    )
    assert resolve_from("pkg", root).path == root / "node_modules" / "pkg" / "lib" / "index.js"


def test_bare_falls_back_to_index(make_tree):
    root = make_tree({"node_modules/pkg/index.js": ""})
    assert resolve_from("pkg", root).path == root / "node_modules" / "pkg" / "index.js"


def test_bare_ascends_one_level(make_tree):
    root = make_tree({"base": None, "node_modules/pkg/index.js": ""})
    assert resolve_from("pkg", root / "base").path == root / "node_modules" / "pkg" / "index.js"


def test_absolute_specifier_is_fixed_point(make_tree):
    root = make_tree({"extensions/js-file.js": ""})

    first = resolve(str(root / "extensions" / "js-file")).path
    assert first == root / "extensions" / "js-file.js"

    second = resolve(str(first))
    assert second.kind is SpecifierKind.ABSOLUTE
    assert second.path == first


def test_absolute_specifier_ignores_basedir(make_tree):
    root = make_tree({"target.js": "", "elsewhere": None})
    assert resolve_from(str(root / "target"), root / "elsewhere").path == root / "target.js"


def test_extension_order(make_tree):
    root = make_tree({"a.js": "", "a.json": ""})
    context = ResolutionContext().with_basedir(root)

    assert resolve("./a", context).path == root / "a.js"
    assert resolve("./a", context.with_extensions([".json", ".js"])).path == root / "a.json"


def test_default_basedir_is_cwd(make_tree, monkeypatch):
    root = make_tree({"node_modules/pkg.js": ""})
    monkeypatch.chdir(root)

    assert resolve("pkg").path == root / "node_modules" / "pkg.js"
    assert resolve("./node_modules/pkg").path == root / "node_modules" / "pkg.js"


@pytest.fixture
def linked_tree(make_tree):
    """app/node_modules/pkg is a symlink to store/pkg."""
    root = make_tree({"store/pkg/index.js": "linked", "app/node_modules": None})
    (root / "app" / "node_modules" / "pkg").symlink_to(root / "store" / "pkg", target_is_directory=True)
    return root


def test_preserve_symlinks_keeps_link(linked_tree):
    context = ResolutionContext().with_basedir(linked_tree / "app")

    path = resolve("pkg", context).path

    assert path == linked_tree / "app" / "node_modules" / "pkg" / "index.js"
    assert path.read_text() == "linked"


def test_resolve_symlinks_returns_real_path(linked_tree):
    context = ResolutionContext().with_basedir(linked_tree / "app").with_preserve_symlinks(False)

    path = resolve("pkg", context).path

    assert path == Path(os.path.realpath(linked_tree / "store" / "pkg" / "index.js"))
    assert path.read_text() == "linked"


def test_resolve_symlinks_for_relative_specifier(linked_tree):
    context = ResolutionContext().with_basedir(linked_tree / "app").with_preserve_symlinks(False)
    path = resolve("./node_modules/pkg/index", context).path
    assert path == Path(os.path.realpath(linked_tree / "store" / "pkg" / "index.js"))


def test_symlinked_file_resolved(make_tree):
    root = make_tree({"real.js": "content"})
    (root / "alias.js").symlink_to(root / "real.js")
    context = ResolutionContext().with_basedir(root)

    assert resolve("./alias", context).path == root / "alias.js"
    resolved = resolve("./alias", context.with_preserve_symlinks(False)).path
    assert resolved == Path(os.path.realpath(root / "real.js"))


def test_bare_not_found(tmp_path):
    with pytest.raises(NotFoundError) as exc_info:
        resolve_from("no-such-package-9c2e", tmp_path)

    assert exc_info.value.specifier == "no-such-package-9c2e"
    assert exc_info.value.searched


def test_relative_not_found_reports_specifier(tmp_path):
    with pytest.raises(NotFoundError) as exc_info:
        resolve_from("./missing", tmp_path)

    assert exc_info.value.specifier == "./missing"
    assert exc_info.value.basedir == tmp_path
    assert "./missing" in str(exc_info.value)


def test_trailing_slash_skips_file_candidates(make_tree):
    root = make_tree({"a.js": ""})

    with pytest.raises(NotFoundError) as exc_info:
        resolve_from("./a/", root)

    assert exc_info.value.specifier == "./a/"


def test_trailing_slash_prefers_directory_over_sibling_file(make_tree):
    root = make_tree({"a.js": "", "a/index.js": ""})

    assert resolve_from("./a", root).path == root / "a.js"
    assert resolve_from("./a/", root).path == root / "a" / "index.js"


def test_nul_byte_in_specifier_rejected(tmp_path):
    with pytest.raises(InvalidSpecifierError):
        resolve_from("./a\x00b", tmp_path)

    # Raised before any stat(), and part of the library's error family
    with pytest.raises(ResolutionError):
        resolve_from("pkg\x00", tmp_path)


def test_io_error_is_distinct_from_not_found(make_tree, monkeypatch):
    root = make_tree({"node_modules/pkg/index.js": ""})
    real_stat = os.stat

    def fake_stat(path, *args, **kwargs):
        if str(path).startswith(str(root / "node_modules" / "pkg")):
            raise PermissionError(errno.EACCES, "Permission denied", str(path))
        return real_stat(path, *args, **kwargs)

    monkeypatch.setattr("node_resolve.filesystem.os.stat", fake_stat)

    with pytest.raises(ResolutionIOError):
        resolve_from("pkg", root)


def test_shared_context_across_threads(make_tree):
    root = make_tree({f"node_modules/pkg{i}/index.js": "" for i in range(8)})
    resolver = Resolver(ResolutionContext().with_basedir(root))

    with ThreadPoolExecutor(max_workers=4) as pool:
        paths = list(pool.map(lambda i: resolver.resolve(f"pkg{i}").path, range(8)))

    assert paths == [root / "node_modules" / f"pkg{i}" / "index.js" for i in range(8)]
