from pathlib import Path
from typing import Iterable, Sequence

from comment_density.analyzers.density.models import LanguageRule
from comment_density.utils.filesystem import validate_root
from .file_index import index_files
from .models import ScanResult


def scan_repository(
    path: str,
    rules: Sequence[LanguageRule],
    exclude_dirs: Iterable[str] = (),
) -> ScanResult:
    root = Path(path).resolve()
    validate_root(root)

    files = index_files(root, rules, exclude_dirs)
    return ScanResult(files=files)
