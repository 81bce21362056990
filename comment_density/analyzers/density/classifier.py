from dataclasses import dataclass
from enum import Enum

from .models import LanguageRule


class LineKind(Enum):
    IGNORED = "ignored"
    COMMENT = "comment"
    CODE = "code"


@dataclass(frozen=True)
class LineClassification:
    kind: LineKind
    method_specific: int = 0

    @property
    def is_comment(self) -> bool:
        return self.kind is LineKind.COMMENT


IGNORED_LINE = LineClassification(LineKind.IGNORED)


class LineClassifier:
    """
    Classifies the trimmed lines of one file, in order.

    The only state is whether a block comment is open. It belongs to a
    single file: create a new classifier (or call reset) per file.
    """

    def __init__(self, rule: LanguageRule) -> None:
        self.rule = rule
        self.in_multi_line_comment = False

    def reset(self) -> None:
        self.in_multi_line_comment = False

    def classify(self, line: str) -> LineClassification:
        rule = self.rule

        if any(line.startswith(pattern) for pattern in rule.ignore_patterns):
            return IGNORED_LINE

        if rule.single_line_comment and line.startswith(rule.single_line_comment):
            kind = LineKind.COMMENT
        elif rule.multi_line_comment_start and line.startswith(rule.multi_line_comment_start):
            # a block opened and closed on the same line still leaves it open
            self.in_multi_line_comment = True
            kind = LineKind.COMMENT
        elif rule.multi_line_comment_end and line.endswith(rule.multi_line_comment_end):
            self.in_multi_line_comment = False
            kind = LineKind.COMMENT
        elif self.in_multi_line_comment:
            kind = LineKind.COMMENT
        else:
            kind = LineKind.CODE

        method_specific = sum(
            1 for marker in rule.method_specific_comments if marker in line
        )
        return LineClassification(kind, method_specific)
