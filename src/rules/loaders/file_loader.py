"""
File-based input loaders.

Reads the changed-file list, the approval rules document and the list of
approving reviewers produced by the CI job that invokes the gate.
"""

import json
from pathlib import Path
from typing import Any

import structlog
import yaml

from src.core.errors import InputFileError, RulesParseError

logger = structlog.get_logger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def _read_text(source: str | Path) -> str:
    try:
        return Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("input_file_unreadable", path=str(source), error=str(e))
        raise InputFileError(f"Cannot read input file '{source}': {e}") from e


def _read_lines(source: str | Path) -> list[str]:
    """Split a newline-delimited file into its non-empty lines, preserving order."""
    lines = [line.removesuffix("\r") for line in _read_text(source).split("\n")]
    return [line for line in lines if line]


def load_changed_files(source: str | Path) -> list[str]:
    """
    Load the paths changed by the pull request.

    Args:
        source: Path to a newline-delimited file of changed paths

    Returns:
        Changed paths in file order, empty lines dropped

    Raises:
        InputFileError: If the file cannot be read
    """
    changed_files = _read_lines(source)
    logger.info("changed_files_loaded", path=str(source), count=len(changed_files))
    return changed_files


def load_approved_reviewers(source: str | Path) -> list[str]:
    """Load the usernames that approved the pull request, one per line."""
    approved_reviewers = _read_lines(source)
    logger.info("approved_reviewers_loaded", path=str(source), reviewers=approved_reviewers)
    return approved_reviewers


def load_approval_rules(source: str | Path) -> dict[str, list[str]]:
    """
    Load the mapping of path prefix to required owners.

    JSON is the canonical format; files ending in .yaml or .yml are read as
    YAML. Key order is preserved in both cases.

    Args:
        source: Path to the rules document

    Returns:
        Ordered mapping of path prefix to owner identifiers

    Raises:
        InputFileError: If the file cannot be read
        RulesParseError: If the document is not a mapping of strings to lists of strings
    """
    content = _read_text(source)
    path = Path(source)

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            rules_data = yaml.safe_load(content)
        else:
            rules_data = json.loads(content) if content.strip() else None
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        logger.error("approval_rules_parse_failed", path=str(source), error=str(e))
        raise RulesParseError(f"Malformed approval rules in '{source}': {e}") from e

    if rules_data is None:
        logger.warning("approval_rules_empty", path=str(source))
        return {}

    rules = _validate_rules(rules_data, source)
    logger.info("approval_rules_loaded", path=str(source), prefixes=list(rules))
    return rules


def _validate_rules(rules_data: Any, source: str | Path) -> dict[str, list[str]]:
    if not isinstance(rules_data, dict):
        raise RulesParseError(
            f"Approval rules in '{source}' must be a mapping of path prefix to owners, "
            f"got {type(rules_data).__name__}"
        )

    rules: dict[str, list[str]] = {}
    for prefix, owners in rules_data.items():
        if not isinstance(prefix, str):
            raise RulesParseError(f"Rule key {prefix!r} in '{source}' is not a string")
        if not isinstance(owners, list) or not all(isinstance(owner, str) for owner in owners):
            raise RulesParseError(f"Owners for prefix '{prefix}' in '{source}' must be a list of strings")
        rules[prefix] = list(owners)

    return rules
