import functools
import logging
from typing import Awaitable, Callable, List, TypeVar

import aiohttp

from addon_provider.domain.exceptions import RateLimitExceededException
from addon_provider.domain.models import Release, Repository, RepositoryName
from addon_provider.infrastructure.acl import GitHubTranslator
from addon_provider.infrastructure.github_client import GitHubRateLimitError, GitHubRestClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


def translate_rate_limit(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """Re-raises the client's rate limit error as RateLimitExceededException. Nothing is retried."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> T:
        try:
            return await func(*args, **kwargs)
        except GitHubRateLimitError as e:
            raise RateLimitExceededException(cause=e, reset_at=e.reset_at) from e

    return wrapper


class ForgeGateway:
    """
    Call boundary to the forge: lists releases and fetches repository
    metadata, returning domain models.
    """

    def __init__(self, client: GitHubRestClient):
        self.client = client

    @translate_rate_limit
    async def list_releases(self, session: aiohttp.ClientSession, repository_name: RepositoryName) -> List[Release]:
        raw_releases = await self.client.list_releases(session, repository_name.owner, repository_name.name)
        return [GitHubTranslator.to_release(raw) for raw in raw_releases if raw]

    @translate_rate_limit
    async def get_repository(self, session: aiohttp.ClientSession, repository_name: RepositoryName) -> Repository:
        raw_repository = await self.client.get_repository(session, repository_name.owner, repository_name.name)
        return GitHubTranslator.to_repository(raw_repository)
