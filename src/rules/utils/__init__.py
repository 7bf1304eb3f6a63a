"""
Rule evaluation utilities.

This package contains the helpers used to turn path-prefix approval rules
into the set of owners a pull request needs approval from.
"""

from src.rules.utils.owners import (
    get_required_owners,
    is_team_reference,
    normalize_usernames,
    team_slug,
)

__all__ = [
    "get_required_owners",
    "is_team_reference",
    "normalize_usernames",
    "team_slug",
]
