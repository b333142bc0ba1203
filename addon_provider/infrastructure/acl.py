from datetime import datetime
from typing import Any, Dict, Optional
from addon_provider.domain.models import Release, ReleaseAsset, Repository, RepositoryOwner


def _parse_timestamp(raw_date: Optional[str]) -> Optional[datetime]:
    if not raw_date:
        return None
    return datetime.fromisoformat(raw_date.replace("Z", "+00:00"))


class GitHubTranslator:
    """
    Anti-corruption layer that translates raw GitHub REST JSON responses into domain models.
    """

    @staticmethod
    def to_asset(raw_asset: Dict[str, Any]) -> ReleaseAsset:
        created_at = _parse_timestamp(raw_asset.get('created_at'))
        if created_at is None:
            raise ValueError("created_at is required to build ReleaseAsset.")

        return ReleaseAsset(
            name=raw_asset.get('name', ''),
            content_type=raw_asset.get('content_type', ''),
            browser_download_url=raw_asset.get('browser_download_url', ''),
            url=raw_asset.get('url', ''),
            download_count=raw_asset.get('download_count', 0),
            created_at=created_at,
        )

    @staticmethod
    def to_release(raw_release: Dict[str, Any]) -> Release:
        """
        Transforms a raw GitHub release object into a Release.

        Args:
            raw_release (Dict[str, Any]): One element of the list-releases response.

        Returns:
            Release: The domain model, with its assets in the order GitHub listed them.
        """
        return Release(
            tag_name=raw_release.get('tag_name', ''),
            draft=raw_release.get('draft', False),
            prerelease=raw_release.get('prerelease', False),
            # Drafts have no publish date
            published_at=_parse_timestamp(raw_release.get('published_at')),
            html_url=raw_release.get('html_url', ''),
            url=raw_release.get('url', ''),
            assets=[GitHubTranslator.to_asset(asset) for asset in raw_release.get('assets') or []],
        )

    @staticmethod
    def to_repository(raw_repository: Dict[str, Any]) -> Repository:
        owner_data = raw_repository.get('owner') or {}

        return Repository(
            name=raw_repository.get('name', ''),
            html_url=raw_repository.get('html_url', ''),
            owner=RepositoryOwner(
                login=owner_data.get('login', ''),
                avatar_url=owner_data.get('avatar_url', ''),
            ),
        )
