from datetime import datetime
from typing import Optional


class AddonProviderException(Exception):
    """Base exception for all addon provider errors."""
    pass

class InvalidIdentifierException(AddonProviderException):
    """Raised when an addon id does not decompose into an owner/name pair."""
    pass

class InvalidUrlException(InvalidIdentifierException):
    """Raised when an addon URL path is not exactly /{owner}/{name}."""
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid URL: {url}")

class RateLimitExceededException(AddonProviderException):
    """Raised when the forge reports that the API quota is exhausted."""
    def __init__(self, cause: Optional[BaseException] = None, reset_at: Optional[datetime] = None):
        self.cause = cause
        self.reset_at = reset_at
        message = "GitHub API rate limit exceeded."
        if reset_at is not None:
            message = f"{message} Resets at: {reset_at.isoformat()}"
        super().__init__(message)

class NoReleaseFoundException(AddonProviderException):
    """Raised when no release yields an installable asset for the requested client."""
    pass

class OperationNotSupportedException(AddonProviderException, NotImplementedError):
    """Raised for provider operations this source does not support."""
    pass
