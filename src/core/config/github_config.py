"""
GitHub configuration.
"""

from dataclasses import dataclass


@dataclass
class GitHubConfig:
    """GitHub configuration."""

    token: str
    repository: str
    pr_number: str
    api_base_url: str = "https://api.github.com"
    user_agent: str = "approval-gate"
    team_max_pages: int = 100
