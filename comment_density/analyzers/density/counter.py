import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from comment_density.core.models import FileEntry
from comment_density.core.scanner import scan_repository
from comment_density.utils.filesystem import DEFAULT_ENCODING, read_lines
from .classifier import LineClassifier
from .models import DensityAggregate, FileCounts, LanguageRule

logger = logging.getLogger("comment_density.counter")


def scan_file(
    path: Path,
    rule: LanguageRule,
    encoding: str = DEFAULT_ENCODING,
) -> FileCounts:
    lines = read_lines(path, encoding=encoding)
    classifier = LineClassifier(rule)
    comment = method_specific = 0

    for line in lines:
        result = classifier.classify(line.strip())
        if result.is_comment:
            comment += 1
        method_specific += result.method_specific

    return FileCounts(
        path=str(path),
        rule_name=rule.name,
        total_lines=len(lines),
        comment_lines=comment,
        method_specific_lines=method_specific,
    )


def count_files(
    entries: Sequence[FileEntry],
    max_workers: Optional[int] = None,
    encoding: str = DEFAULT_ENCODING,
) -> DensityAggregate:
    """Scan every entry on a thread pool and fold the per-file counts.

    Results are kept in input order, so the aggregate does not depend on
    which worker finishes first. The first failed scan cancels whatever
    has not started yet and is re-raised.
    """
    if not entries:
        return DensityAggregate()

    results: List[FileCounts] = [None] * len(entries)  # type: ignore[list-item]

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {
            pool.submit(scan_file, entry.path, entry.rule, encoding): i
            for i, entry in enumerate(entries)
        }
        try:
            for future in as_completed(futures):
                results[futures[future]] = future.result()
        except Exception:
            for future in futures:
                future.cancel()
            raise

    return DensityAggregate(files=results)


def count_directory(
    root: Path,
    rules: Sequence[LanguageRule],
    *,
    max_workers: Optional[int] = None,
    exclude_dirs: Iterable[str] = (),
    encoding: str = DEFAULT_ENCODING,
) -> DensityAggregate:
    scan = scan_repository(str(root), rules, exclude_dirs)
    logger.info("Scanning %d files under %s", scan.total_files, root)

    agg = count_files(scan.files, max_workers=max_workers, encoding=encoding)
    logger.info(
        "Counted %d lines, %d comment lines, %d method-specific lines",
        agg.total_lines,
        agg.comment_lines,
        agg.method_specific_lines,
    )
    return agg


def aggregate(
    root: Path,
    rules: Sequence[LanguageRule],
    *,
    max_workers: Optional[int] = None,
    exclude_dirs: Iterable[str] = (),
) -> float:
    """Overall comment density percentage for every matching file under root."""
    return count_directory(
        root, rules, max_workers=max_workers, exclude_dirs=exclude_dirs
    ).density
