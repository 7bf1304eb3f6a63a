import asyncio
import sys
from functools import partial

import click
import structlog

from src.core.config import Config
from src.core.errors import ConfigError, InputFileError, RulesParseError
from src.core.utils.logging import configure_logging, log_operation
from src.integrations.github.api import get_team_members
from src.rules.approvals import evaluate_approvals
from src.rules.loaders.file_loader import load_approval_rules, load_approved_reviewers, load_changed_files
from src.rules.utils.owners import get_required_owners

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


async def run(cfg: Config) -> int:
    """
    Run the approval gate once and return the process exit code.

    Exits 0 when no owner is required or every required owner approved,
    1 on invalid configuration, unreadable or malformed inputs, or
    missing approvals.
    """
    try:
        cfg.validate()
    except ConfigError as e:
        logger.error("invalid_configuration", errors=e.errors)
        return EXIT_FAILURE

    try:
        changed_files = load_changed_files(cfg.inputs.changed_files_path)
        approval_rules = load_approval_rules(cfg.inputs.approval_rules_path)
        approved_reviewers = load_approved_reviewers(cfg.inputs.approved_reviewers_path)
    except (InputFileError, RulesParseError) as e:
        logger.error("input_load_failed", error=str(e))
        return EXIT_FAILURE

    required_owners = get_required_owners(changed_files, approval_rules)
    if not required_owners:
        logger.info("no_approval_rules_matched", changed_files=len(changed_files))
        return EXIT_OK

    logger.info("required_owners_resolved", owners=required_owners)

    team_fetcher = partial(get_team_members, github_config=cfg.github)
    async with log_operation(
        "approval_check",
        subject_ids={"repo": cfg.github.repository, "pr": cfg.github.pr_number},
    ):
        report = await evaluate_approvals(
            required_owners,
            approved_reviewers,
            cfg.org,
            cfg.github.token,
            team_fetcher=team_fetcher,
        )

    if not report.approved:
        logger.error("required_approvals_missing", missing_owners=report.missing_owners)
        return EXIT_FAILURE

    logger.info("all_required_owners_approved", owners=report.required_owners)
    return EXIT_OK


@click.command()
@click.option("--changed-files", "changed_files_path", default=None, help="Newline-delimited list of changed paths.")
@click.option(
    "--approval-rules", "approval_rules_path", default=None, help="Path prefix to owners document (JSON or YAML)."
)
@click.option(
    "--approved-reviewers", "approved_reviewers_path", default=None, help="Newline-delimited list of approving users."
)
@click.option("--log-level", default=None, help="Override LOG_LEVEL.")
def main(
    changed_files_path: str | None,
    approval_rules_path: str | None,
    approved_reviewers_path: str | None,
    log_level: str | None,
) -> None:
    """Fail unless every code owner required by the changed paths approved the pull request."""
    cfg = Config()
    if changed_files_path:
        cfg.inputs.changed_files_path = changed_files_path
    if approval_rules_path:
        cfg.inputs.approval_rules_path = approval_rules_path
    if approved_reviewers_path:
        cfg.inputs.approved_reviewers_path = approved_reviewers_path
    if log_level:
        cfg.logging.level = log_level

    configure_logging(cfg.logging.level, cfg.logging.format)
    sys.exit(asyncio.run(run(cfg)))


if __name__ == "__main__":
    main()
