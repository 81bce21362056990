from dataclasses import dataclass
from pathlib import Path
from typing import List

from comment_density.analyzers.density.models import LanguageRule


@dataclass
class FileEntry:
    path: Path
    rule: LanguageRule


@dataclass
class ScanResult:
    files: List[FileEntry]

    @property
    def total_files(self) -> int:
        return len(self.files)
