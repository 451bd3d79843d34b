"""
GitHub API integration service for fetching repository and star data.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

import httpx

from profile_readme.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


@dataclass
class GitHubRepositoryData:
    """Data class for GitHub repository information."""
    github_id: int
    name: str
    full_name: str
    description: Optional[str]
    url: str
    homepage: Optional[str]
    language: Optional[str]
    stars_count: int
    forks_count: int
    open_issues_count: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    pushed_at: Optional[datetime] = None


class GitHubAPIError(Exception):
    """Custom exception for GitHub API errors."""

    def __init__(self, message: str, status_code: int = 500, github_error: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.github_error = github_error
        super().__init__(self.message)


class _RetryableError(Exception):
    def __init__(self, error: GitHubAPIError):
        self.error = error
        super().__init__(error.message)


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def parse_repository_data(data: Dict[str, Any]) -> GitHubRepositoryData:
    """
    Parse a GitHub API repository object into GitHubRepositoryData.

    Works for both ``/repos/{owner}/{repo}`` responses and the items of
    ``/users/{user}/starred``.

    Raises:
        GitHubAPIError: If required fields are missing or malformed
    """
    try:
        return GitHubRepositoryData(
            github_id=data["id"],
            name=data["name"],
            full_name=data["full_name"],
            description=data.get("description") or None,
            url=data["html_url"],
            homepage=data.get("homepage") or None,
            language=data.get("language"),
            stars_count=data.get("stargazers_count", 0),
            forks_count=data.get("forks_count", 0),
            open_issues_count=data.get("open_issues_count", 0),
            created_at=datetime.fromisoformat(data["created_at"].replace("Z", "+00:00")),
            updated_at=_parse_timestamp(data.get("updated_at")),
            pushed_at=_parse_timestamp(data.get("pushed_at")),
        )
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        logger.error(f"Error parsing GitHub repository data: {e}")
        raise GitHubAPIError(
            "Failed to parse GitHub repository data",
            status_code=502,
            github_error="parse_error"
        )


class GitHubService:
    """Service for interacting with the GitHub REST API."""

    def __init__(self, config: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        config = config or default_settings
        self.api_url = config.GITHUB_API_URL
        self.token = config.GITHUB_TOKEN
        self.timeout = config.TIMEOUT_SECONDS
        self.max_retries = config.MAX_RETRIES
        self.retry_delay = config.RETRY_DELAY_SECONDS

        # Setup headers for GitHub API
        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": config.USER_AGENT,
        }

        if self.token:
            self.headers["Authorization"] = f"token {self.token}"
        else:
            logger.warning("GitHub token not configured - API rate limits will be lower")

        self.client = httpx.AsyncClient(
            base_url=self.api_url,
            headers=self.headers,
            timeout=self.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET ``path`` and return the decoded JSON body.

        Timeouts, network errors, 5xx, 429 and rate-limited 403 responses are
        retried up to ``max_retries`` times, ``retry_delay`` seconds apart.

        Raises:
            GitHubAPIError: If the request fails for good
        """
        attempt = 0
        while True:
            try:
                return await self._send(path, params)
            except _RetryableError as e:
                if attempt >= self.max_retries:
                    logger.error(f"Giving up on {path} after {attempt + 1} attempts: {e.error.message}")
                    raise e.error
                attempt += 1
                logger.warning(f"Request to {path} failed ({e.error.message}), retry attempt #{attempt}")
                await asyncio.sleep(self.retry_delay)

    async def _send(self, path: str, params: Optional[Dict[str, Any]]) -> Any:
        try:
            response = await self.client.get(path, params=params)
        except httpx.TimeoutException:
            raise _RetryableError(GitHubAPIError(
                "GitHub API request timed out",
                status_code=504,
                github_error="timeout"
            ))
        except httpx.RequestError as e:
            raise _RetryableError(GitHubAPIError(
                f"Failed to connect to GitHub API: {e}",
                status_code=502,
                github_error="network_error"
            ))

        if response.status_code == 200:
            try:
                return response.json()
            except ValueError:
                logger.error(f"Invalid JSON from GitHub API for {path}")
                raise GitHubAPIError(
                    "Invalid JSON from GitHub API",
                    status_code=502,
                    github_error="parse_error"
                )

        error_data = self._error_body(response)
        message = error_data.get("message", f"HTTP {response.status_code}")

        if response.status_code == 404:
            raise GitHubAPIError(
                f"{path} not found or is private",
                status_code=404,
                github_error="repository_not_found"
            )
        if response.status_code == 429 or (
            response.status_code == 403 and "rate limit" in message.lower()
        ):
            remaining = response.headers.get("X-RateLimit-Remaining", "0")
            reset_time = response.headers.get("X-RateLimit-Reset", "unknown")
            logger.warning(
                f"GitHub API rate limit exceeded. "
                f"Remaining: {remaining}, Reset: {reset_time}"
            )
            raise _RetryableError(GitHubAPIError(
                "GitHub API rate limit exceeded. Please try again later.",
                status_code=429,
                github_error="rate_limit_exceeded"
            ))
        if response.status_code == 403:
            raise GitHubAPIError(
                f"Access forbidden to {path}",
                status_code=403,
                github_error="access_forbidden"
            )

        error = GitHubAPIError(
            f"GitHub API error: {message}",
            status_code=502,
            github_error="api_error"
        )
        if response.status_code >= 500:
            raise _RetryableError(error)
        logger.error(f"GitHub API error for {path}: {message}")
        raise error

    @staticmethod
    def _error_body(response: httpx.Response) -> Dict[str, Any]:
        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    async def get_repository_info(self, full_name: str) -> GitHubRepositoryData:
        """
        Fetch repository information from GitHub API.

        Args:
            full_name: Repository name in ``owner/repo`` form

        Returns:
            GitHubRepositoryData: Parsed repository information
        """
        data = await self._request(f"/repos/{full_name}")
        return parse_repository_data(data)

    async def get_repositories(self, full_names: Iterable[str]) -> List[GitHubRepositoryData]:
        """Fetch several repositories concurrently, preserving input order."""
        names = list(full_names)
        if not names:
            return []
        logger.info(f"Fetching {len(names)} repositories")
        return list(await asyncio.gather(*(self.get_repository_info(name) for name in names)))

    async def get_starred(self, username: str) -> List[GitHubRepositoryData]:
        """
        Fetch the first page of repositories starred by ``username``.

        GitHub returns them most recently starred first.
        """
        logger.info(f"Fetching starred repositories for {username}")
        data = await self._request(f"/users/{username}/starred")
        if not isinstance(data, list):
            raise GitHubAPIError(
                "Unexpected response for starred repositories",
                status_code=502,
                github_error="parse_error"
            )
        stars = [parse_repository_data(item) for item in data]
        logger.info(f"Fetched {len(stars)} starred repositories for {username}")
        return stars
