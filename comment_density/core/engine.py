"""
Comment Density Engine

Public entry point of the analysis. Validates the run configuration and
the directory, scans every matching file, and checks the overall score
against each rule's density threshold.

Errors are logged and propagate to the caller; a run either covers every
selected file or produces no score at all.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from comment_density.analyzers.density.counter import count_directory
from comment_density.analyzers.density.models import (
    DensityAggregate,
    LanguageRule,
    ThresholdResult,
)
from comment_density.analyzers.density.report import build_report, render_text
from comment_density.utils.filesystem import DEFAULT_ENCODING, validate_root
from .errors import CommentDensityError, ConfigInvalid


# =============================================================================
# Logging
# =============================================================================

LOGGER_NAME = "comment_density.engine"
logger = logging.getLogger(LOGGER_NAME)


# =============================================================================
# Enumerations
# =============================================================================

class AnalysisState(Enum):
    CREATED = "created"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class OutputFormat(Enum):
    JSON = "json"
    TEXT = "text"


# =============================================================================
# Configuration & Models
# =============================================================================

@dataclass
class EngineConfiguration:
    max_workers: Optional[int] = None
    exclude_dirs: Tuple[str, ...] = ()
    encoding: str = DEFAULT_ENCODING
    output_format: OutputFormat = OutputFormat.TEXT

    def validate(self) -> List[str]:
        errors: List[str] = []

        if self.max_workers is not None and self.max_workers <= 0:
            errors.append("max_workers must be greater than zero")

        if not self.encoding:
            errors.append("encoding must not be empty")

        if not isinstance(self.output_format, OutputFormat):
            errors.append("output_format must be OutputFormat enum")

        return errors


@dataclass
class DensityResult:
    root: str
    rules: List[LanguageRule]
    aggregate: DensityAggregate
    thresholds: List[ThresholdResult] = field(default_factory=list)
    duration_seconds: Optional[float] = None

    @property
    def density(self) -> float:
        return self.aggregate.density

    @property
    def exceeded(self) -> List[ThresholdResult]:
        return [t for t in self.thresholds if t.exceeded]

    def to_dict(self) -> Dict[str, Any]:
        return build_report(self)


# =============================================================================
# Threshold evaluation
# =============================================================================

def evaluate_thresholds(
    density: float,
    rules: Sequence[LanguageRule],
) -> List[ThresholdResult]:
    """
    Compare the overall density against every rule's threshold.

    Rules without a threshold are reported as not exceeded.
    """
    return [
        ThresholdResult(
            rule=rule,
            exceeded=rule.density_threshold is not None
            and density > rule.density_threshold,
        )
        for rule in rules
    ]


# =============================================================================
# Core Engine
# =============================================================================

class CommentDensityEngine:
    """
    Runs one comment density analysis over a directory.
    """

    def __init__(
        self,
        root: str,
        rules: Sequence[LanguageRule],
        config: Optional[EngineConfiguration] = None,
    ) -> None:
        self.root = Path(root).resolve()
        self.rules = list(rules)
        self.config = config or EngineConfiguration()
        self.state = AnalysisState.CREATED

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def run(self) -> DensityResult:
        start = time.time()
        try:
            self._initialize()
            self.state = AnalysisState.RUNNING

            agg = count_directory(
                self.root,
                self.rules,
                max_workers=self.config.max_workers,
                exclude_dirs=self.config.exclude_dirs,
                encoding=self.config.encoding,
            )
        except CommentDensityError as exc:
            self.state = AnalysisState.FAILED
            logger.error("Analysis of %s failed: %s", self.root, exc)
            raise
        except Exception:
            self.state = AnalysisState.FAILED
            logger.exception("Analysis of %s failed unexpectedly", self.root)
            raise

        result = DensityResult(
            root=str(self.root),
            rules=self.rules,
            aggregate=agg,
            thresholds=evaluate_thresholds(agg.density, self.rules),
            duration_seconds=time.time() - start,
        )
        self.state = AnalysisState.COMPLETED

        for t in result.exceeded:
            logger.info(
                "Comments density %.2f%% exceeds threshold of %s%% for %s",
                result.density,
                t.rule.density_threshold,
                t.rule.name,
            )

        return result

    def export(self, result: DensityResult) -> str:
        if self.config.output_format == OutputFormat.JSON:
            return json.dumps(result.to_dict(), indent=2)
        return render_text(result)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _initialize(self) -> None:
        config_errors = self.config.validate()
        if config_errors:
            raise ConfigInvalid(
                "Invalid engine configuration: " + "; ".join(config_errors)
            )

        if not self.rules:
            raise ConfigInvalid("Invalid or empty configuration: no languages defined")

        validate_root(self.root)
        logger.debug("Analyzing %s with %d rules", self.root, len(self.rules))


def analyze(
    root: str,
    rules: Sequence[LanguageRule],
    config: Optional[EngineConfiguration] = None,
) -> DensityResult:
    """
    Compute the overall comment density of root and evaluate thresholds.

    Raises:
        ConfigInvalid, PathNotFound, FileReadError
    """
    return CommentDensityEngine(root, rules, config).run()
