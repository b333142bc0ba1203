"""
Conversions between repository names, addon ids ("/{owner}/{name}") and
browsable forge URLs.
"""
import posixpath
from urllib.parse import urlparse

from addon_provider.domain.exceptions import InvalidIdentifierException, InvalidUrlException
from addon_provider.domain.models import RepositoryName

FORGE_DOMAIN = "github.com"


def to_identifier(repository_name: RepositoryName) -> str:
    return f"/{repository_name.owner}/{repository_name.name}"


def parse_identifier(addon_id: str) -> RepositoryName:
    """
    Parses an addon id of the form "/{owner}/{name}".

    Raises:
        InvalidIdentifierException: If the id is not exactly a leading slash
            followed by two non-empty segments.
    """
    parts = addon_id.split("/")
    if len(parts) != 3 or parts[0] != "":
        raise InvalidIdentifierException(f"Invalid addon id: {addon_id!r}")

    result = RepositoryName.create(parts[1], parts[2])
    if not result.is_valid:
        raise InvalidIdentifierException(f"Invalid addon id: {addon_id!r}. {result.error}")
    return result.value


def parse_source_uri(uri: str) -> RepositoryName:
    """
    Extracts the owner/name pair from a repository URL such as
    https://github.com/owner/name. The path must be exactly two segments and
    the last one must not carry a file extension.
    """
    repo_path = urlparse(uri).path
    _, extension = posixpath.splitext(repo_path)
    parts = repo_path.split("/")
    if not repo_path or extension or len(parts) != 3 or parts[0] != "":
        raise InvalidUrlException(uri)

    result = RepositoryName.create(parts[1], parts[2])
    if not result.is_valid:
        raise InvalidUrlException(uri)
    return result.value


def extract_display_name(addon_id: str) -> str:
    """Returns the repository segment, used as addon name and folder name."""
    return parse_identifier(addon_id).name


def is_forge_uri(uri: str, domain: str = FORGE_DOMAIN) -> bool:
    host = urlparse(uri).hostname
    return bool(host) and host.endswith(domain)
