import aiohttp
import logging
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
RELEASES_PAGE_SIZE = 100
MAX_RELEASE_PAGES = 10
REQUEST_TIMEOUT = aiohttp.ClientTimeout(total=60, connect=10)

RATE_LIMITED_STATUSES = {403, 429}


class GitHubRateLimitError(Exception):
    """Raised by the REST client when GitHub rejects a request for quota reasons."""

    def __init__(self, status: int, reset_at: Optional[datetime] = None, retry_after: Optional[int] = None):
        self.status = status
        self.reset_at = reset_at
        self.retry_after = retry_after
        super().__init__(f"GitHub rate limit hit (HTTP {status}).")


class GitHubRestClient:
    """
    Client for the GitHub REST API endpoints used to resolve addons.
    Handles request headers and detection of rate limiting; everything else
    (retries, caching) is left to the caller.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        product_name: str = "WowUp-Client",
        product_version: str = "0.0.0",
        api_url: str = DEFAULT_API_URL,
        timeout: aiohttp.ClientTimeout = REQUEST_TIMEOUT,
    ):
        self.headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": f"{product_name}/{product_version}",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    @staticmethod
    def _rate_limit_error(response: aiohttp.ClientResponse) -> Optional[GitHubRateLimitError]:
        """Returns the rate limit error described by a response, if any."""
        if response.status not in RATE_LIMITED_STATUSES:
            return None

        remaining = response.headers.get("X-RateLimit-Remaining")
        retry_after = response.headers.get("Retry-After")
        if response.status == 403 and remaining != "0" and retry_after is None:
            return None

        reset_header = response.headers.get("X-RateLimit-Reset")
        reset_at = None
        if reset_header and reset_header.isdigit():
            reset_at = datetime.fromtimestamp(int(reset_header), tz=timezone.utc)

        return GitHubRateLimitError(
            status=response.status,
            reset_at=reset_at,
            retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
        )

    async def _get_json(
        self,
        session: aiohttp.ClientSession,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = f"{self.api_url}{path}"
        async with session.get(url, params=params, headers=self.headers, timeout=self.timeout) as response:
            rate_limit_error = self._rate_limit_error(response)
            if rate_limit_error is not None:
                logger.warning(f"Rate limited by GitHub on {path} (HTTP {response.status}).")
                raise rate_limit_error

            response.raise_for_status()
            return await response.json()

    async def list_releases(self, session: aiohttp.ClientSession, owner: str, name: str) -> List[Dict[str, Any]]:
        """
        Fetches every release of a repository, following page numbers until a
        short page is returned.

        Returns:
            The raw release objects in the order GitHub lists them.
        """
        releases: List[Dict[str, Any]] = []
        for page in range(1, MAX_RELEASE_PAGES + 1):
            batch = await self._get_json(
                session,
                f"/repos/{owner}/{name}/releases",
                params={"per_page": RELEASES_PAGE_SIZE, "page": page},
            )
            releases.extend(batch)
            if len(batch) < RELEASES_PAGE_SIZE:
                break

        logger.debug(f"Fetched {len(releases)} releases for {owner}/{name}.")
        return releases

    async def get_repository(self, session: aiohttp.ClientSession, owner: str, name: str) -> Dict[str, Any]:
        return await self._get_json(session, f"/repos/{owner}/{name}")
