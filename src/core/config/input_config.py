"""
Input file configuration.
"""

from dataclasses import dataclass


@dataclass
class InputConfig:
    """Locations of the files the gate reads."""

    changed_files_path: str = "changed_files.txt"
    approval_rules_path: str = ".github/approval_rules.json"
    approved_reviewers_path: str = "approved_reviewers.txt"
