from pathlib import Path
from typing import Optional, Sequence

from .models import LanguageRule


def file_extension(path: Path) -> str:
    """Lowercase extension; a dotfile such as ".bashrc" is its own extension."""
    name = path.name
    if name.startswith(".") and name.count(".") == 1:
        return name.lower()
    return path.suffix.lower()


def is_ignored(path: Path, rules: Sequence[LanguageRule]) -> bool:
    """True when any rule lists the file's extension in ignore_extensions."""
    suffix = file_extension(path)
    return any(rule.ignores_extension(suffix) for rule in rules)


def select_rule(path: Path, rules: Sequence[LanguageRule]) -> Optional[LanguageRule]:
    """First rule, in configured order, whose file_extensions match the file."""
    if is_ignored(path, rules):
        return None

    suffix = file_extension(path)
    for rule in rules:
        if rule.matches_extension(suffix):
            return rule
    return None
