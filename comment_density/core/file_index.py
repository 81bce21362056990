import logging
from pathlib import Path
from typing import Iterable, List, Sequence

from comment_density.analyzers.density.exclusions import select_rule
from comment_density.analyzers.density.models import LanguageRule
from comment_density.utils.filesystem import walk_files
from .models import FileEntry

logger = logging.getLogger("comment_density.file_index")


def index_files(
    root: Path,
    rules: Sequence[LanguageRule],
    exclude_dirs: Iterable[str] = (),
) -> List[FileEntry]:
    entries = []
    for p in walk_files(root, exclude_dirs=exclude_dirs):
        rule = select_rule(p, rules)
        if rule is None:
            continue
        entries.append(FileEntry(path=p, rule=rule))

    logger.debug("Selected %d files under %s", len(entries), root)
    return entries
