"""
Rule loaders package.

This package contains the loaders that read the gate's inputs from disk.
"""

from src.rules.loaders.file_loader import (
    load_approval_rules,
    load_approved_reviewers,
    load_changed_files,
)

__all__ = [
    "load_approval_rules",
    "load_approved_reviewers",
    "load_changed_files",
]
