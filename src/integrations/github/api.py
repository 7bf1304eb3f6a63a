import httpx
import structlog

from src.core.config import config
from src.core.config.github_config import GitHubConfig
from src.core.errors import PageLimitExceededError, RemoteFetchError, TransportError
from src.core.models import TeamMember

logger = structlog.get_logger(__name__)

TEAM_MEMBERS_PAGE_SIZE = 100


class GitHubClient:
    """
    A client for the parts of the GitHub REST API the approval gate needs.

    Requests are made one at a time and never retried: a single failure
    aborts the lookup it belongs to.
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        user_agent: str = "approval-gate",
        max_pages: int = 100,
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.max_pages = max(1, max_pages)
        self.headers = {
            "Authorization": f"token {self.token}",
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": user_agent,
        }

    async def get_team_members(self, org: str, team_slug: str) -> list[TeamMember]:
        """
        Fetch every member of an organization team.

        Pages of TEAM_MEMBERS_PAGE_SIZE entries are requested in order until a
        page comes back short.

        Raises:
            RemoteFetchError: If GitHub answers with a non-success status or a
                body that is not a list of members.
            PageLimitExceededError: If the team has more than max_pages full pages.
            TransportError: If the URL is invalid or the request fails before a
                response is received.
        """
        url = f"{self.base_url}/orgs/{org}/teams/{team_slug}/members"
        members: list[TeamMember] = []

        async with httpx.AsyncClient(headers=self.headers) as client:
            # One page past the limit is requested to tell a full last page from an oversized team.
            for page in range(1, self.max_pages + 2):
                params = {"per_page": TEAM_MEMBERS_PAGE_SIZE, "page": page}
                try:
                    response = await client.get(url, params=params)
                except (httpx.RequestError, httpx.InvalidURL) as e:
                    logger.error("team_members_request_error", org=org, team=team_slug, page=page, error=str(e))
                    raise TransportError(team_slug, f"Error fetching members of team '{team_slug}': {e}") from e

                if not response.is_success:
                    logger.error(
                        "team_members_fetch_failed",
                        org=org,
                        team=team_slug,
                        status_code=response.status_code,
                        response_body=response.text,
                    )
                    raise RemoteFetchError(team_slug, response.status_code, response.text)

                data = self._parse_page(team_slug, response)
                members.extend(data)

                if page > self.max_pages and data:
                    break

                if len(data) < TEAM_MEMBERS_PAGE_SIZE:
                    logger.info("team_members_fetched", org=org, team=team_slug, count=len(members), pages=page)
                    return members

        logger.error("team_members_page_limit_exceeded", org=org, team=team_slug, max_pages=self.max_pages)
        raise PageLimitExceededError(team_slug, self.max_pages)

    @staticmethod
    def _parse_page(team_slug: str, response: httpx.Response) -> list[TeamMember]:
        try:
            data = response.json()
            if not isinstance(data, list):
                raise ValueError(f"Expected a list from GitHub API, got {type(data).__name__}")
            return [TeamMember.model_validate(item) for item in data]
        except ValueError as e:
            # pydantic's ValidationError is a ValueError as well
            raise RemoteFetchError(team_slug, response.status_code, response.text) from e


async def get_team_members(
    org: str, team_slug: str, token: str, github_config: GitHubConfig | None = None
) -> list[TeamMember]:
    """Fetch team members using the configured API endpoint."""
    github_config = github_config or config.github
    client = GitHubClient(
        token,
        base_url=github_config.api_base_url,
        user_agent=github_config.user_agent,
        max_pages=github_config.team_max_pages,
    )
    return await client.get_team_members(org, team_slug)
