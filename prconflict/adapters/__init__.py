"""Git platform adapters."""

from prconflict.adapters.base import (
    GitPlatformAdapter,
    GitPlatformError,
    RateLimitError,
    ReviewThreadPage,
    ThreadStatus,
)
from prconflict.adapters.github import GitHubAdapter

__all__ = [
    "GitHubAdapter",
    "GitPlatformAdapter",
    "GitPlatformError",
    "RateLimitError",
    "ReviewThreadPage",
    "ThreadStatus",
]
