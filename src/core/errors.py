"""
Core error classes for the approval gate.
"""


class ApprovalGateError(Exception):
    """Base class for every error raised by the approval gate."""

    pass


class ConfigError(ApprovalGateError):
    """Raised when required environment configuration is missing or malformed."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Configuration errors: {', '.join(errors)}")


class InputFileError(ApprovalGateError, OSError):
    """Raised when an input file cannot be read."""

    pass


class RulesParseError(ApprovalGateError, ValueError):
    """Raised when the approval rules document is malformed."""

    pass


class TeamFetchError(ApprovalGateError):
    """Raised when team membership could not be resolved."""

    def __init__(self, team_slug: str, message: str) -> None:
        self.team_slug = team_slug
        super().__init__(message)


class TransportError(TeamFetchError):
    """Raised when the request to the GitHub API fails below the HTTP layer."""

    pass


class RemoteFetchError(TeamFetchError):
    """Raised when the GitHub API answers with a non-success status."""

    def __init__(self, team_slug: str, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(team_slug, f"Failed to fetch members of team '{team_slug}': HTTP {status_code}")


class PageLimitExceededError(TeamFetchError):
    """Raised when a team keeps returning full pages past the configured page limit."""

    def __init__(self, team_slug: str, max_pages: int) -> None:
        self.max_pages = max_pages
        super().__init__(team_slug, f"Members of team '{team_slug}' exceed the limit of {max_pages} pages")
