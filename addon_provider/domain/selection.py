"""
Release and asset selection.

Releases are reduced to the most recently published non-draft one (globally or
per channel). Assets of the chosen release are then filtered by content type,
the "-nolib" marker and classic/non-classic naming, and the first survivor in
forge order wins.
"""
import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from addon_provider.domain.models import ChannelType, Release, ReleaseAsset, WowClientType

logger = logging.getLogger(__name__)

RELEASE_CONTENT_TYPES = ("application/x-zip-compressed", "application/zip")
NOLIB_MARKER = "-nolib"
CLASSIC_SUFFIX = "-classic.zip"

_UNPUBLISHED = datetime.min.replace(tzinfo=timezone.utc)


def get_channel_type(release: Release) -> ChannelType:
    """Alpha wins over beta when a tag mentions both."""
    tag = release.tag_name.lower()
    if "alpha" in tag:
        return ChannelType.ALPHA
    if "beta" in tag:
        return ChannelType.BETA
    return ChannelType.STABLE


def filter_published(releases: Iterable[Release]) -> List[Release]:
    return [release for release in releases if not release.draft]


def _published_key(release: Release) -> datetime:
    published_at = release.published_at
    if published_at is None:
        return _UNPUBLISHED
    if published_at.tzinfo is None:
        return published_at.replace(tzinfo=timezone.utc)
    return published_at


def get_latest_release(releases: Iterable[Release]) -> Optional[Release]:
    """
    Returns the most recently published non-draft release of any channel, or
    None when there is none. On equal timestamps the earlier listed release wins.
    """
    candidates = filter_published(releases)
    if not candidates:
        return None
    return max(candidates, key=_published_key)


def get_latest_releases_by_channel(releases: Iterable[Release]) -> Dict[ChannelType, Release]:
    """
    Returns the most recently published non-draft release for each channel
    that has one, keyed in Stable, Beta, Alpha order.
    """
    latest: Dict[ChannelType, Release] = {}
    for release in filter_published(releases):
        channel = get_channel_type(release)
        current = latest.get(channel)
        if current is None or _published_key(release) > _published_key(current):
            latest[channel] = release

    return {channel: latest[channel] for channel in ChannelType if channel in latest}


def is_valid_content_type(asset: ReleaseAsset) -> bool:
    return asset.content_type in RELEASE_CONTENT_TYPES


def is_not_nolib(asset: ReleaseAsset) -> bool:
    return NOLIB_MARKER not in asset.name.lower()


def is_classic_asset(asset: ReleaseAsset) -> bool:
    return asset.name.endswith(CLASSIC_SUFFIX)


def is_valid_client_type(client_type: WowClientType, asset: ReleaseAsset) -> bool:
    return is_classic_asset(asset) == client_type.is_classic


def get_valid_asset(release: Release, client_type: WowClientType) -> Optional[ReleaseAsset]:
    """Returns the first asset in listed order that is installable for client_type."""
    for asset in release.assets:
        if is_valid_content_type(asset) and is_not_nolib(asset) and is_valid_client_type(client_type, asset):
            return asset

    logger.debug(f"No {client_type.value} asset found in release {release.tag_name}.")
    return None
