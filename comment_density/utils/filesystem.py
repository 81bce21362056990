"""
Filesystem Utilities

Path validation, directory walking and line reading used by the scanner.
Reads are strict: a file that cannot be decoded is an error, never an
empty file.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from comment_density.core.errors import FileReadError, PathNotFound

DEFAULT_ENCODING = "utf-8-sig"


# =============================================================================
# Path validation
# =============================================================================

def ensure_path_exists(path: Path) -> None:
    """
    Ensure that a given path exists.

    Raises:
        PathNotFound if path does not exist
    """
    if not path.exists():
        raise PathNotFound(f"Directory not found: {path}")


def ensure_is_directory(path: Path) -> None:
    """
    Ensure that a given path is a directory.

    Raises:
        PathNotFound if path is not a directory
    """
    if not path.is_dir():
        raise PathNotFound(f"Path is not a directory: {path}")


def validate_root(path: Path) -> None:
    ensure_path_exists(path)
    ensure_is_directory(path)


# =============================================================================
# Directory walking
# =============================================================================

def walk_files(
    root: Path,
    *,
    exclude_dirs: Optional[Iterable[str]] = None,
) -> Iterator[Path]:
    """
    Recursively walk a directory tree, yielding every regular file.

    Args:
        root: Root directory to walk
        exclude_dirs: Directory names whose subtrees are pruned

    Yields:
        Path objects for files, in a stable (sorted) order

    Raises:
        PathNotFound if root cannot be listed, FileReadError if a
        subdirectory cannot be listed
    """
    excluded = set(exclude_dirs or ())

    def _on_error(exc: OSError) -> None:
        if exc.filename is not None and Path(exc.filename) == Path(root):
            raise PathNotFound(f"Directory is not readable: {root}") from exc
        raise FileReadError(f"Cannot list directory {exc.filename}: {exc}") from exc

    for current_root, dirs, files in os.walk(root, onerror=_on_error):
        root_path = Path(current_root)

        # Modify dirs in-place to control recursion
        dirs[:] = sorted(d for d in dirs if d not in excluded)

        for f in sorted(files):
            yield root_path / f


# =============================================================================
# File reading
# =============================================================================

def is_binary_file(path: Path, sample_size: int = 1024) -> bool:
    """
    Heuristically determine whether a file is binary.

    This reads a small sample of the file and looks for null bytes.
    """
    with path.open("rb") as handle:
        chunk = handle.read(sample_size)
        return b"\x00" in chunk


def read_lines(path: Path, *, encoding: str = DEFAULT_ENCODING) -> List[str]:
    """
    Read a text file as a list of lines without their line endings.

    Lines end at "\\n", "\\r\\n" or "\\r"; a final line ending does not
    produce an extra empty line.

    Raises:
        FileReadError if the file is missing, unreadable, binary or
        cannot be decoded with the given encoding
    """
    try:
        if is_binary_file(path):
            raise FileReadError(f"File appears to be binary: {path}")

        with path.open("r", encoding=encoding, newline=None) as handle:
            return [line.rstrip("\n") for line in handle]

    except FileReadError:
        raise
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(f"Failed to read file {path}: {exc}") from exc
