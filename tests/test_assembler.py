import unittest
from datetime import datetime, timezone

from addon_provider.application.assembler import ResultAssembler
from addon_provider.domain.models import (
    ChannelType,
    Release,
    ReleaseAsset,
    Repository,
    RepositoryName,
    RepositoryOwner,
    ResolvedVersion,
)


class TestResultAssembler(unittest.TestCase):
    def setUp(self) -> None:
        asset = ReleaseAsset(
            name="Addon-1.2.0.zip",
            content_type="application/zip",
            browser_download_url="https://github.com/octocat/addon/releases/download/v1.2.0/Addon-1.2.0.zip",
            url="https://api.github.com/repos/octocat/addon/releases/assets/1",
            download_count=99,
            created_at=datetime(2024, 3, 4, tzinfo=timezone.utc),
        )
        self.resolved = ResolvedVersion(
            release=Release(
                tag_name="v1.2.0",
                url="https://api.github.com/repos/octocat/addon/releases/1",
                assets=[asset],
            ),
            asset=asset,
            repository=Repository(
                name="addon",
                html_url="https://github.com/octocat/addon",
                owner=RepositoryOwner(login="octocat", avatar_url="https://avatars.example/octocat"),
            ),
            channel_type=ChannelType.STABLE,
        )
        self.repository_name = RepositoryName(owner="octocat", name="addon")
        self.assembler = ResultAssembler(provider_name="GitHub")

    def test_version_is_release_tag_and_url_is_repository(self) -> None:
        result = self.assembler.to_search_result(self.repository_name, self.resolved)

        self.assertEqual(result.external_url, "https://github.com/octocat/addon")
        self.assertEqual(result.files[0].version, "v1.2.0")
        self.assertEqual(result.files[0].channel_type, ChannelType.STABLE)

    def test_preview_uses_same_external_url(self) -> None:
        preview = self.assembler.to_potential_addon(self.repository_name, self.resolved)

        self.assertEqual(preview.external_url, "https://github.com/octocat/addon")
        self.assertEqual(preview.download_count, 99)
        self.assertEqual(preview.provider_name, "GitHub")
