from pathlib import Path
from typing import Iterable, Optional

from comment_density.core.config import load_config
from comment_density.core.engine import (
    CommentDensityEngine,
    DensityResult,
    EngineConfiguration,
    OutputFormat,
)

def build_engine(
    path: str,
    config_path: str,
    workers: Optional[int] = None,
    exclude_dirs: Iterable[str] = (),
    as_json: bool = False,
) -> CommentDensityEngine:
    rules = load_config(Path(config_path))
    config = EngineConfiguration(
        max_workers=workers,
        exclude_dirs=tuple(exclude_dirs),
        output_format=OutputFormat.JSON if as_json else OutputFormat.TEXT,
    )
    return CommentDensityEngine(path, rules, config)

def run_analysis(path: str, config_path: str, **options) -> DensityResult:
    return build_engine(path, config_path, **options).run()
