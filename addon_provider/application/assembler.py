from addon_provider.domain.identifiers import to_identifier
from addon_provider.domain.models import (
    AddonSearchResult,
    AddonSearchResultFile,
    PotentialAddon,
    RepositoryName,
    ResolvedVersion,
)


class ResultAssembler:
    """
    Projects a ResolvedVersion into the shapes the host application consumes.

    The external URL is always the repository page and the file version is
    always the release tag.
    """

    def __init__(self, provider_name: str):
        self.provider_name = provider_name

    @staticmethod
    def to_search_result_file(resolved: ResolvedVersion) -> AddonSearchResultFile:
        return AddonSearchResultFile(
            channel_type=resolved.channel_type,
            download_url=resolved.asset.browser_download_url,
            folders=[resolved.repository.display_name],
            game_version="",
            version=resolved.release.tag_name,
            release_date=resolved.asset.created_at,
        )

    def to_potential_addon(self, repository_name: RepositoryName, resolved: ResolvedVersion) -> PotentialAddon:
        return PotentialAddon(
            author=resolved.repository.owner.login,
            download_count=resolved.asset.download_count,
            external_id=to_identifier(repository_name),
            external_url=resolved.repository.html_url,
            name=repository_name.name,
            provider_name=self.provider_name,
            thumbnail_url=resolved.repository.owner.avatar_url,
        )

    def to_search_result(self, repository_name: RepositoryName, resolved: ResolvedVersion) -> AddonSearchResult:
        return AddonSearchResult(
            author=resolved.repository.owner.login,
            external_id=to_identifier(repository_name),
            external_url=resolved.repository.html_url,
            name=repository_name.name,
            provider_name=self.provider_name,
            thumbnail_url=resolved.repository.owner.avatar_url,
            files=[self.to_search_result_file(resolved)],
        )
