"""
GitHub API adapter.

This package provides integrations for GitHub API interactions.
"""

from src.integrations.github.api import GitHubClient, get_team_members

__all__ = [
    "GitHubClient",
    "get_team_members",
]
