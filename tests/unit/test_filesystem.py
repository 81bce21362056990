from pathlib import Path

import os

import pytest

from comment_density.core.errors import FileReadError, PathNotFound
from comment_density.utils.filesystem import (
    ensure_is_directory,
    ensure_path_exists,
    is_binary_file,
    read_lines,
    validate_root,
    walk_files,
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fs_tree(tmp_path: Path) -> Path:
    """
    Create a fake filesystem tree for walking.
    """
    root = tmp_path / "tree"
    (root / "src" / "deep").mkdir(parents=True)
    (root / "node_modules").mkdir()

    (root / "README.md").write_text("hello\n", encoding="utf-8")
    (root / "src" / "main.c").write_text("int main;\n", encoding="utf-8")
    (root / "src" / "deep" / "util.h").write_text("int x;\n", encoding="utf-8")
    (root / "node_modules" / "dep.js").write_text("x\n", encoding="utf-8")
    return root


# =============================================================================
# Validation
# =============================================================================

def test_ensure_path_exists(tmp_path: Path):
    ensure_path_exists(tmp_path)
    with pytest.raises(PathNotFound):
        ensure_path_exists(tmp_path / "missing")


def test_ensure_is_directory(fs_tree: Path):
    ensure_is_directory(fs_tree)
    with pytest.raises(PathNotFound):
        ensure_is_directory(fs_tree / "README.md")


def test_validate_root(fs_tree: Path):
    validate_root(fs_tree)
    with pytest.raises(PathNotFound):
        validate_root(fs_tree / "nope")


# =============================================================================
# Walking
# =============================================================================

def test_walk_files_yields_every_file(fs_tree: Path):
    found = {p.relative_to(fs_tree).as_posix() for p in walk_files(fs_tree)}
    assert found == {
        "README.md",
        "src/main.c",
        "src/deep/util.h",
        "node_modules/dep.js",
    }


def test_walk_files_prunes_excluded_dirs(fs_tree: Path):
    found = {p.name for p in walk_files(fs_tree, exclude_dirs=["node_modules", "deep"])}
    assert found == {"README.md", "main.c"}


def test_walk_files_order_is_stable(fs_tree: Path):
    assert list(walk_files(fs_tree)) == list(walk_files(fs_tree))


# =============================================================================
# Reading
# =============================================================================

def test_is_binary_file(tmp_path: Path):
    text = tmp_path / "a.txt"
    text.write_text("plain", encoding="utf-8")
    blob = tmp_path / "b.bin"
    blob.write_bytes(b"ab\x00cd")
    assert is_binary_file(text) is False
    assert is_binary_file(blob) is True


def test_read_lines_keeps_blank_lines(tmp_path: Path):
    path = tmp_path / "a.c"
    path.write_text("a\n\n  \nb\n", encoding="utf-8")
    assert read_lines(path) == ["a", "", "  ", "b"]


def test_read_lines_strips_byte_order_mark(tmp_path: Path):
    path = tmp_path / "bom.c"
    path.write_bytes(b"\xef\xbb\xbf// first\n")
    assert read_lines(path) == ["// first"]


def test_read_lines_with_other_encoding(tmp_path: Path):
    path = tmp_path / "latin.c"
    path.write_bytes(b"// caf\xe9\n")
    assert read_lines(path, encoding="latin-1") == ["// café"]


def test_read_lines_missing_file(tmp_path: Path):
    with pytest.raises(FileReadError):
        read_lines(tmp_path / "missing.c")


# =============================================================================
# Unlistable directories
# =============================================================================

def _deny_listing(monkeypatch, target: Path) -> None:
    real_scandir = os.scandir
    denied = target.resolve()

    def scandir(path="."):
        if Path(path).resolve() == denied:
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)


def test_walk_files_raises_on_unlistable_subdirectory(fs_tree: Path, monkeypatch):
    _deny_listing(monkeypatch, fs_tree / "src" / "deep")
    with pytest.raises(FileReadError, match="deep"):
        list(walk_files(fs_tree.resolve()))


def test_walk_files_raises_on_unlistable_root(fs_tree: Path, monkeypatch):
    _deny_listing(monkeypatch, fs_tree)
    with pytest.raises(PathNotFound):
        list(walk_files(fs_tree.resolve()))


def test_walk_files_skips_pruned_unlistable_directory(fs_tree: Path, monkeypatch):
    _deny_listing(monkeypatch, fs_tree / "node_modules")
    found = {p.name for p in walk_files(fs_tree.resolve(), exclude_dirs=["node_modules"])}
    assert "dep.js" not in found
