import os
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ConfigDict

from addon_provider.infrastructure.github_client import DEFAULT_API_URL


class ProviderSettings(BaseModel):
    """Runtime settings for the GitHub addon provider, read from the environment."""
    model_config = ConfigDict(frozen=True)

    github_token: Optional[str] = Field(None, description="Optional token; requests are unauthenticated without it")
    product_name: str = "WowUp-Client"
    product_version: str = "0.1.0"
    api_url: str = DEFAULT_API_URL
    request_timeout: float = Field(60.0, gt=0, description="Total seconds allowed per forge request")
    max_concurrency: int = Field(5, ge=1, description="Addons resolved in parallel by a batch call")


def load_settings() -> ProviderSettings:
    # Load environment variables from .env file
    load_dotenv()

    values = {
        "github_token": os.getenv("GITHUB_TOKEN") or None,
        "product_name": os.getenv("ADDON_PROVIDER_PRODUCT_NAME"),
        "product_version": os.getenv("ADDON_PROVIDER_VERSION"),
        "api_url": os.getenv("GITHUB_API_URL"),
        "request_timeout": os.getenv("ADDON_PROVIDER_TIMEOUT"),
        "max_concurrency": os.getenv("ADDON_PROVIDER_MAX_CONCURRENCY"),
    }
    return ProviderSettings(**{key: value for key, value in values.items() if value is not None})
