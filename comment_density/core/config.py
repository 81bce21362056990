"""
Rule Configuration Loading

Reads the list of language rules from a JSON or TOML document. The
document is either a list of rule objects or an object holding them
under "languages":

    {"languages": [{"name": "csharp", "fileExtensions": [".cs"],
                    "singleLineComment": "//"}]}

Field names are camelCase and case-sensitive. Unknown fields are ignored.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from comment_density.analyzers.density.models import LanguageRule
from .errors import ConfigInvalid

LOGGER_NAME = "comment_density.config"
logger = logging.getLogger(LOGGER_NAME)


# =============================================================================
# Field schema
# =============================================================================

REQUIRED_STRING_FIELDS = ("name", "singleLineComment")
OPTIONAL_STRING_FIELDS = ("multiLineCommentStart", "multiLineCommentEnd")
LIST_FIELDS = (
    "fileExtensions",
    "ignoreExtensions",
    "ignorePatterns",
    "methodSpecificComments",
)
KNOWN_FIELDS = set(REQUIRED_STRING_FIELDS + OPTIONAL_STRING_FIELDS + LIST_FIELDS) | {
    "densityThreshold",
}


# =============================================================================
# Parsing
# =============================================================================

def _string_list(record: Dict[str, Any], key: str, where: str) -> Tuple[str, ...]:
    value = record.get(key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigInvalid(f"{where}: '{key}' must be a list of strings")
    return tuple(value)


def _optional_string(record: Dict[str, Any], key: str, where: str) -> Optional[str]:
    value = record.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigInvalid(f"{where}: '{key}' must be a string")
    return value


def _threshold(record: Dict[str, Any], where: str) -> Optional[float]:
    value = record.get("densityThreshold")
    if value is None:
        return None
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigInvalid(f"{where}: 'densityThreshold' must be a number")
    return float(value)


def parse_rule(record: Any, index: int = 0) -> LanguageRule:
    """
    Build one LanguageRule from a decoded configuration record.

    Raises:
        ConfigInvalid if a required field is missing or a field has the
        wrong type
    """
    where = f"languages[{index}]"
    if not isinstance(record, dict):
        raise ConfigInvalid(f"{where}: expected an object")

    for key in REQUIRED_STRING_FIELDS:
        if not isinstance(record.get(key), str):
            raise ConfigInvalid(f"{where}: '{key}' is required and must be a string")

    unknown = sorted(set(record) - KNOWN_FIELDS)
    if unknown:
        logger.debug("%s: ignoring unknown fields %s", where, ", ".join(unknown))

    return LanguageRule(
        name=record["name"],
        single_line_comment=record["singleLineComment"],
        file_extensions=tuple(e.lower() for e in _string_list(record, "fileExtensions", where)),
        ignore_extensions=tuple(e.lower() for e in _string_list(record, "ignoreExtensions", where)),
        multi_line_comment_start=_optional_string(record, "multiLineCommentStart", where),
        multi_line_comment_end=_optional_string(record, "multiLineCommentEnd", where),
        ignore_patterns=_string_list(record, "ignorePatterns", where),
        density_threshold=_threshold(record, where),
        method_specific_comments=_string_list(record, "methodSpecificComments", where),
    )


def parse_rules(data: Any) -> List[LanguageRule]:
    """
    Build the ordered rule list from a decoded configuration document.
    """
    if isinstance(data, dict):
        data = data.get("languages")

    if not isinstance(data, list):
        raise ConfigInvalid("Configuration must contain a list of languages")

    if not data:
        raise ConfigInvalid("Invalid or empty configuration: no languages defined")

    return [parse_rule(record, i) for i, record in enumerate(data)]


def load_config(path: Path) -> List[LanguageRule]:
    """
    Load language rules from a .json or .toml file.

    Raises:
        ConfigInvalid if the file is missing, unparsable or holds no rules
    """
    if not path.is_file():
        raise ConfigInvalid(f"Config file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8-sig")
        if path.suffix.lower() == ".toml":
            data = tomllib.loads(text)
        else:
            data = json.loads(text)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigInvalid(f"Cannot parse config file {path}: {exc}") from exc

    rules = parse_rules(data)
    logger.info("Loaded %d language rules from %s", len(rules), path)
    return rules
