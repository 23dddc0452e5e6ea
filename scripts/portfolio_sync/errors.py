#------------------------------------------------------------
#                          errors.py
#        Exception types raised by the sync pipeline.

from datetime import datetime
from typing import Optional

class PortfolioSyncError(Exception):
    """Base class for errors raised by portfolio_sync."""

class ConfigError(PortfolioSyncError):
    """The config store could not be read or written."""

class GitHubApiError(PortfolioSyncError):

    def __init__(self, status_code: int, reason: str = "", url: str = ""):
        self.status_code = status_code
        self.reason = reason
        self.url = url
        message = f"GitHub API error: {status_code} {reason}".rstrip()
        if url:
            message = f"{message} ({url})"
        super().__init__(message)

class RateLimitError(GitHubApiError):

    def __init__(self, reset_at: Optional[datetime], url: str = ""):
        self.reset_at = reset_at
        super().__init__(403, "rate limit exceeded", url)
        reset_label = reset_at.isoformat() if reset_at else "unknown"
        self.args = (f"Rate limit exceeded. Resets at {reset_label}",)
