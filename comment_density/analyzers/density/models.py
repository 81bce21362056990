from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class LanguageRule:
    """How to recognize comments for one class of files."""
    name: str
    single_line_comment: str
    file_extensions: Tuple[str, ...] = ()
    ignore_extensions: Tuple[str, ...] = ()
    multi_line_comment_start: Optional[str] = None
    multi_line_comment_end: Optional[str] = None
    ignore_patterns: Tuple[str, ...] = ()
    density_threshold: Optional[float] = None
    method_specific_comments: Tuple[str, ...] = ()

    def matches_extension(self, suffix: str) -> bool:
        return suffix.lower() in self.file_extensions

    def ignores_extension(self, suffix: str) -> bool:
        return suffix.lower() in self.ignore_extensions


@dataclass
class FileCounts:
    path: str
    rule_name: str
    total_lines: int
    comment_lines: int
    method_specific_lines: int


@dataclass
class DensityAggregate:
    files: List[FileCounts] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def total_lines(self) -> int:
        return sum(f.total_lines for f in self.files)

    @property
    def comment_lines(self) -> int:
        return sum(f.comment_lines for f in self.files)

    @property
    def method_specific_lines(self) -> int:
        return sum(f.method_specific_lines for f in self.files)

    @property
    def density(self) -> float:
        # comment and method-specific lines are summed even when they overlap
        total = self.total_lines
        if total == 0:
            return 0.0
        return (self.comment_lines + self.method_specific_lines) / total * 100

    def by_rule(self) -> Dict[str, "DensityAggregate"]:
        grouped: Dict[str, DensityAggregate] = {}
        for f in self.files:
            grouped.setdefault(f.rule_name, DensityAggregate()).files.append(f)
        return grouped

    def as_dict(self) -> Dict[str, Any]:
        return {
            "files": self.total_files,
            "total_lines": self.total_lines,
            "comment_lines": self.comment_lines,
            "method_specific_lines": self.method_specific_lines,
            "density": self.density,
        }


@dataclass(frozen=True)
class ThresholdResult:
    rule: LanguageRule
    exceeded: bool
