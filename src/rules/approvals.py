"""Approval verification for required code owners.

Checks every required owner against the reviewers who approved a pull
request. Team owners are resolved to their members through an injectable
team fetcher so the check can run without network access.
"""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

import structlog

from src.core.errors import TeamFetchError
from src.core.models import ApprovalReport, OwnerCheck, TeamMember
from src.integrations.github.api import get_team_members
from src.rules.utils.owners import is_team_reference, normalize_usernames, team_slug

logger = structlog.get_logger(__name__)

TeamFetcher = Callable[[str, str, str], Awaitable[Sequence[TeamMember | Mapping[str, Any]]]]


def _member_login(member: TeamMember | Mapping[str, Any]) -> str:
    if isinstance(member, TeamMember):
        return member.login
    return member["login"]


async def _check_team(
    owner: str,
    approved: list[str],
    org: str,
    token: str,
    team_fetcher: TeamFetcher,
) -> OwnerCheck:
    slug = team_slug(owner)
    try:
        members = await team_fetcher(org, slug, token)
        member_logins = set(normalize_usernames(_member_login(member) for member in members))
    except TeamFetchError as e:
        logger.error("team_check_failed", team=slug, org=org, error=str(e))
        return OwnerCheck(owner=owner, is_team=True, satisfied=False, error=str(e))
    except Exception as e:
        logger.exception("team_check_failed", team=slug, org=org, error=str(e))
        return OwnerCheck(owner=owner, is_team=True, satisfied=False, error=f"{type(e).__name__}: {e}")

    approved_members = [reviewer for reviewer in approved if reviewer in member_logins]

    if approved_members:
        logger.info("team_approved", team=slug, approved_by=approved_members)
    else:
        logger.warning("team_not_approved", team=slug, members=len(member_logins))

    return OwnerCheck(owner=owner, is_team=True, satisfied=bool(approved_members), approved_by=approved_members)


def _check_user(owner: str, approved: list[str]) -> OwnerCheck:
    if owner in approved:
        logger.info("user_approved", user=owner)
        return OwnerCheck(owner=owner, satisfied=True, approved_by=[owner])

    logger.warning("user_not_approved", user=owner)
    return OwnerCheck(owner=owner, satisfied=False)


async def evaluate_approvals(
    required_owners: Sequence[str],
    approved_reviewers: Sequence[str],
    org: str,
    token: str,
    team_fetcher: TeamFetcher = get_team_members,
) -> ApprovalReport:
    """
    Check every required owner and collect the individual verdicts.

    A user owner is satisfied when that user approved. A team owner is
    satisfied when at least one team member approved. Owners are compared
    case-insensitively, so each distinct owner is checked once. A failed team
    lookup, whatever the error, marks that team unsatisfied without stopping
    the remaining checks.

    Args:
        required_owners: Owner identifiers, usernames or ``team/<slug>``
        approved_reviewers: Usernames that approved the pull request
        org: GitHub organization that owns the teams
        token: GitHub token handed to the team fetcher
        team_fetcher: Coroutine function returning the members of a team

    Returns:
        ApprovalReport with one OwnerCheck per required owner
    """
    approved = normalize_usernames(approved_reviewers)
    # Owners differing only in case collapse into one check.
    owners = list(dict.fromkeys(normalize_usernames(required_owners)))
    report = ApprovalReport(required_owners=owners)

    # Teams are resolved one after another and every owner is checked.
    for owner in owners:
        if is_team_reference(owner):
            check = await _check_team(owner, approved, org, token, team_fetcher)
        else:
            check = _check_user(owner, approved)
        report.checks.append(check)

    return report


async def check_approvals(
    required_owners: Sequence[str],
    approved_reviewers: Sequence[str],
    org: str,
    token: str,
    team_fetcher: TeamFetcher = get_team_members,
) -> bool:
    """Return True when every required owner has approved."""
    report = await evaluate_approvals(required_owners, approved_reviewers, org, token, team_fetcher)
    return report.approved
