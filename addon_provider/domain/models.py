from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict, ValidationError


class ChannelType(str, Enum):
    STABLE = "stable"
    BETA = "beta"
    ALPHA = "alpha"


class WowClientType(str, Enum):
    RETAIL = "retail"
    RETAIL_PTR = "retail_ptr"
    BETA = "beta"
    CLASSIC = "classic"
    CLASSIC_PTR = "classic_ptr"

    @property
    def is_classic(self) -> bool:
        """Collapses the client flavor to the classic/non-classic split used for asset matching."""
        return self in (WowClientType.CLASSIC, WowClientType.CLASSIC_PTR)


class RepositoryName(BaseModel):
    """
    Immutable owner/name pair identifying a repository on the forge.
    Use `create` to get a tagged result instead of a raised ValidationError.
    """
    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., min_length=1, description="Login of the repository owner")
    name: str = Field(..., min_length=1, description="Name of the repository")

    @classmethod
    def create(cls, owner: str, name: str) -> "RepositoryNameResult":
        try:
            return RepositoryNameResult(value=cls(owner=owner, name=name))
        except ValidationError as e:
            missing = ", ".join(str(err["loc"][0]) for err in e.errors())
            return RepositoryNameResult(error=f"Invalid repository name, missing: {missing}")


class RepositoryNameResult(BaseModel):
    """Either a valid RepositoryName or the reason it could not be built."""
    model_config = ConfigDict(frozen=True)

    value: Optional[RepositoryName] = None
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.value is not None


class ReleaseAsset(BaseModel):
    """Binary artifact attached to a forge release."""
    model_config = ConfigDict(frozen=True)

    name: str
    content_type: str
    browser_download_url: str = Field(..., description="Direct download link")
    url: str = Field("", description="API URL of the asset")
    download_count: int = Field(0, ge=0)
    created_at: datetime


class Release(BaseModel):
    """Tagged version of a repository as reported by the forge."""
    model_config = ConfigDict(frozen=True)

    tag_name: str
    draft: bool = False
    prerelease: bool = False
    published_at: Optional[datetime] = None
    html_url: str = ""
    url: str = ""
    assets: List[ReleaseAsset] = Field(default_factory=list)


class RepositoryOwner(BaseModel):
    model_config = ConfigDict(frozen=True)

    login: str
    avatar_url: str = ""


class Repository(BaseModel):
    """Repository metadata used to decorate resolved addons."""
    model_config = ConfigDict(frozen=True)

    name: str
    html_url: str
    owner: RepositoryOwner

    @property
    def display_name(self) -> str:
        return self.name


class ResolvedVersion(BaseModel):
    """The release and asset picked for one resolution call."""
    model_config = ConfigDict(frozen=True)

    release: Release
    asset: ReleaseAsset
    repository: Repository
    channel_type: ChannelType


class PotentialAddon(BaseModel):
    """Lightweight preview of an addon that has not been installed yet."""
    model_config = ConfigDict(frozen=True)

    author: str
    download_count: int
    external_id: str
    external_url: str
    name: str
    provider_name: str
    thumbnail_url: str


class AddonSearchResultFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    channel_type: ChannelType
    download_url: str
    folders: List[str]
    game_version: str = ""
    version: str
    release_date: datetime


class AddonSearchResult(BaseModel):
    """Installable addon with the files offered for it."""
    model_config = ConfigDict(frozen=True)

    author: str
    external_id: str
    external_url: str
    name: str
    provider_name: str
    thumbnail_url: str
    files: List[AddonSearchResultFile] = Field(default_factory=list)
