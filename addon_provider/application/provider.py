import asyncio
import logging
from typing import Any, Callable, Iterable, List, Optional, Protocol

import aiohttp

from addon_provider.application.assembler import ResultAssembler
from addon_provider.domain.exceptions import (
    InvalidIdentifierException,
    NoReleaseFoundException,
    OperationNotSupportedException,
)
from addon_provider.domain.identifiers import is_forge_uri, parse_identifier, parse_source_uri
from addon_provider.domain.models import (
    AddonSearchResult,
    AddonSearchResultFile,
    ChannelType,
    PotentialAddon,
    RepositoryName,
    ResolvedVersion,
    WowClientType,
)
from addon_provider.domain.selection import (
    get_channel_type,
    get_latest_release,
    get_latest_releases_by_channel,
    get_valid_asset,
)
from addon_provider.infrastructure.gateway import ForgeGateway

logger = logging.getLogger(__name__)

PROVIDER_NAME = "GitHub"
# Limit concurrent connections to the forge during batch resolution
CONNECTOR_LIMIT = 10
DEFAULT_MAX_CONCURRENCY = 5


class AddonProvider(Protocol):
    """Contract every addon source implements. The host picks a provider by is_valid_addon_uri."""

    name: str

    def is_valid_addon_uri(self, addon_uri: str) -> bool: ...

    async def get_by_id(self, addon_id: str, client_type: WowClientType) -> Optional[AddonSearchResult]: ...

    async def search_by_uri(self, addon_uri: str, client_type: WowClientType) -> PotentialAddon: ...

    async def get_all(self, client_type: WowClientType, addon_ids: Iterable[str]) -> List[AddonSearchResult]: ...


def _default_session_factory() -> aiohttp.ClientSession:
    return aiohttp.ClientSession(connector=aiohttp.TCPConnector(limit=CONNECTOR_LIMIT))


class GitHubAddonProvider:
    """
    Resolves addons hosted as GitHub repositories into installable release
    assets. Every call fetches fresh data; nothing is cached between calls.
    """

    name = PROVIDER_NAME

    def __init__(
        self,
        gateway: ForgeGateway,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        session_factory: Callable[[], Any] = _default_session_factory,
    ):
        self.gateway = gateway
        self.max_concurrency = max_concurrency
        self.session_factory = session_factory
        self.assembler = ResultAssembler(provider_name=self.name)

    def is_valid_addon_uri(self, addon_uri: str) -> bool:
        return is_forge_uri(addon_uri)

    async def get_by_id(self, addon_id: str, client_type: WowClientType) -> Optional[AddonSearchResult]:
        """
        Resolves an addon id to a search result with a single installable file.

        Returns:
            None when the repository has no release with a compatible asset.
        """
        repository_name = parse_identifier(addon_id)
        async with self.session_factory() as session:
            return await self._get_by_name(session, repository_name, client_type)

    async def search_by_uri(self, addon_uri: str, client_type: WowClientType) -> PotentialAddon:
        """
        Resolves a repository URL to an addon preview.

        Raises:
            InvalidUrlException: If the URL path is not /{owner}/{name}.
            NoReleaseFoundException: If no release has a compatible asset.
            RateLimitExceededException: If GitHub refused the request for quota reasons.
        """
        repository_name = parse_source_uri(addon_uri)
        async with self.session_factory() as session:
            latest_version = await self._try_get_latest_version(session, repository_name, client_type)

        if latest_version is None:
            raise NoReleaseFoundException(f"No compatible release found for {addon_uri}")

        return self.assembler.to_potential_addon(repository_name, latest_version)

    async def get_all(self, client_type: WowClientType, addon_ids: Iterable[str]) -> List[AddonSearchResult]:
        """
        Resolves many addon ids concurrently. Unresolvable ids are skipped and
        the remaining results keep input order. A rate limit aborts the batch.
        """
        addon_ids = list(addon_ids)
        if not addon_ids:
            return []

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def resolve(addon_id: str) -> Optional[AddonSearchResult]:
            try:
                repository_name = parse_identifier(addon_id)
            except InvalidIdentifierException as e:
                logger.warning(f"Skipping addon: {e}")
                return None

            async with semaphore:
                result = await self._get_by_name(session, repository_name, client_type)
            if result is None:
                logger.warning(f"Skipping {addon_id}: no compatible release found.")
            return result

        async with self.session_factory() as session:
            tasks = [asyncio.ensure_future(resolve(addon_id)) for addon_id in addon_ids]
            try:
                results = await asyncio.gather(*tasks)
            except Exception:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

        search_results = [result for result in results if result is not None]
        logger.info(f"Resolved {len(search_results)}/{len(addon_ids)} addons from {self.name}.")
        return search_results

    async def get_channel_files(self, addon_id: str, client_type: WowClientType) -> List[AddonSearchResultFile]:
        """Returns one installable file per channel, for channels whose latest release has a compatible asset."""
        repository_name = parse_identifier(addon_id)
        async with self.session_factory() as session:
            releases = await self.gateway.list_releases(session, repository_name)
            latest_by_channel = get_latest_releases_by_channel(releases)

            candidates = []
            for channel, release in latest_by_channel.items():
                asset = get_valid_asset(release, client_type)
                if asset is not None:
                    candidates.append((channel, release, asset))
            if not candidates:
                return []

            repository = await self.gateway.get_repository(session, repository_name)

        return [
            self.assembler.to_search_result_file(
                ResolvedVersion(release=release, asset=asset, repository=repository, channel_type=channel)
            )
            for channel, release, asset in candidates
        ]

    async def get_featured_addons(self, client_type: WowClientType) -> List[PotentialAddon]:
        return []

    async def search(self, query: str, client_type: WowClientType) -> List[PotentialAddon]:
        return []

    async def search_by_name(
        self,
        addon_name: str,
        folder_name: str,
        client_type: WowClientType,
        name_override: Optional[str] = None,
    ) -> List[AddonSearchResult]:
        return []

    async def scan(self, client_type: WowClientType, channel_type: ChannelType, addon_folders: Iterable[Any]) -> None:
        return None

    def on_post_install(self, addon: Any) -> None:
        raise OperationNotSupportedException(f"{self.name} provider has no post-install step.")

    async def _get_by_name(
        self,
        session: aiohttp.ClientSession,
        repository_name: RepositoryName,
        client_type: WowClientType,
    ) -> Optional[AddonSearchResult]:
        latest_version = await self._try_get_latest_version(session, repository_name, client_type)
        if latest_version is None:
            return None
        return self.assembler.to_search_result(repository_name, latest_version)

    async def _try_get_latest_version(
        self,
        session: aiohttp.ClientSession,
        repository_name: RepositoryName,
        client_type: WowClientType,
    ) -> Optional[ResolvedVersion]:
        releases = await self.gateway.list_releases(session, repository_name)
        latest_release = get_latest_release(releases)
        if latest_release is None:
            logger.debug(f"No published release for {repository_name.owner}/{repository_name.name}.")
            return None

        asset = get_valid_asset(latest_release, client_type)
        if asset is None:
            return None

        repository = await self.gateway.get_repository(session, repository_name)
        return ResolvedVersion(
            release=latest_release,
            asset=asset,
            repository=repository,
            channel_type=get_channel_type(latest_release),
        )
