"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod
from typing import Iterator, List, NamedTuple

from prconflict.models import ReviewComment


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    pass


class RateLimitError(GitPlatformError):
    """Raised when the platform reports an exhausted rate limit."""

    def __init__(self, reset_time: int | None = None) -> None:
        super().__init__("GitHub API rate limit exceeded")
        self.reset_time = reset_time


class ThreadStatus(NamedTuple):
    """Resolution flag of one review thread and the ids of its comments."""

    is_resolved: bool
    comment_ids: List[int]


class ReviewThreadPage(NamedTuple):
    """One page of the review-thread listing."""

    threads: List[ThreadStatus]
    has_next_page: bool
    end_cursor: str | None


class GitPlatformAdapter(ABC):
    """Abstract interface for the two views of a pull request review."""

    @abstractmethod
    def iter_review_thread_pages(self, repo: str, pr_number: int) -> Iterator[ReviewThreadPage]:
        """Yield review-thread pages in order, one request per page.

        Raises:
            GitPlatformError: If any page fails
        """
        ...

    @abstractmethod
    def list_pr_review_comments(self, repo: str, pr_number: int) -> List[ReviewComment]:
        """List every review comment on a PR (all pages).

        Raises:
            GitPlatformError: If any page fails
        """
        ...
