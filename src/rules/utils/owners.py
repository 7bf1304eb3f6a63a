"""
Owner resolution utilities for path-prefix approval rules.

Approval rules map a path prefix to the owners whose approval is required
when a changed file starts with that prefix. Owners are either plain
usernames or team references of the form ``team/<slug>``.
"""

from collections.abc import Iterable, Mapping, Sequence

import structlog

logger = structlog.get_logger(__name__)

TEAM_PREFIX = "team/"


def get_required_owners(changed_files: Sequence[str], approval_rules: Mapping[str, Sequence[str]]) -> list[str]:
    """
    Collect the owners of every rule whose prefix matches a changed file.

    Rules are visited in mapping order and prefixes are matched literally
    and case-sensitively.

    Args:
        changed_files: Paths changed by the pull request
        approval_rules: Mapping of path prefix to owner identifiers

    Returns:
        Unique owners in first-seen order; empty when no rule matches
    """
    seen: set[str] = set()
    required_owners: list[str] = []

    for prefix, owners in approval_rules.items():
        logger.info("processing_rule", prefix=prefix, owners=list(owners))

        matched_files = [file_path for file_path in changed_files if file_path.startswith(prefix)]
        if not matched_files:
            logger.info("rule_not_matched", prefix=prefix)
            continue

        logger.info("rule_matched", prefix=prefix, matched_files=matched_files)
        for owner in owners:
            if owner not in seen:
                seen.add(owner)
                required_owners.append(owner)

    return required_owners


def normalize_usernames(usernames: Iterable[str]) -> list[str]:
    """Lower-case usernames so comparisons are case-insensitive."""
    return [name.lower() for name in usernames]


def is_team_reference(owner: str) -> bool:
    return owner.lower().startswith(TEAM_PREFIX)


def team_slug(owner: str) -> str:
    """Strip the leading ``team/`` from a team reference."""
    return owner[len(TEAM_PREFIX) :] if is_team_reference(owner) else owner
