"""
Main configuration class that composes all configs.
"""

import os

from dotenv import load_dotenv

from src.core.config.github_config import GitHubConfig
from src.core.config.input_config import InputConfig
from src.core.config.logging_config import LoggingConfig
from src.core.errors import ConfigError

# Load environment variables from a .env file
load_dotenv()

DEFAULT_TEAM_MAX_PAGES = 100


class Config:
    """Main configuration class."""

    def __init__(self) -> None:
        try:
            team_max_pages = int(os.getenv("GITHUB_TEAM_MAX_PAGES", str(DEFAULT_TEAM_MAX_PAGES)))
        except ValueError:
            # Fallback to the default bound if the variable is not a number
            team_max_pages = DEFAULT_TEAM_MAX_PAGES

        self.github = GitHubConfig(
            token=os.getenv("GH_TOKEN", ""),
            repository=os.getenv("GITHUB_REPOSITORY", ""),
            pr_number=os.getenv("PR_NUMBER", ""),
            api_base_url=os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/"),
            user_agent=os.getenv("GITHUB_USER_AGENT", "approval-gate"),
            team_max_pages=team_max_pages,
        )

        self.inputs = InputConfig(
            changed_files_path=os.getenv("CHANGED_FILES_PATH", "changed_files.txt"),
            approval_rules_path=os.getenv("APPROVAL_RULES_PATH", ".github/approval_rules.json"),
            approved_reviewers_path=os.getenv("APPROVED_REVIEWERS_PATH", "approved_reviewers.txt"),
        )

        self.logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format=os.getenv("LOG_FORMAT", "console"),
        )

    @property
    def org(self) -> str:
        """The organization part of GITHUB_REPOSITORY (e.g., 'owner' in 'owner/repo')."""
        return self.github.repository.split("/", 1)[0]

    @property
    def repo(self) -> str:
        """The repository part of GITHUB_REPOSITORY."""
        parts = self.github.repository.split("/", 1)
        return parts[1] if len(parts) > 1 else ""

    def validate(self) -> bool:
        """Validate configuration."""
        errors = []

        if not self.github.token:
            errors.append("GH_TOKEN is required")

        repository = self.github.repository
        if not repository or "/" not in repository or not self.org or not self.repo:
            errors.append("GITHUB_REPOSITORY is required and must look like 'org/repo'")

        if not self.github.pr_number:
            errors.append("PR_NUMBER is required")

        if self.github.team_max_pages < 1:
            errors.append("GITHUB_TEAM_MAX_PAGES must be a positive integer")

        if errors:
            raise ConfigError(errors)

        return True


# Global config instance
config = Config()
