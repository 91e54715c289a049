"""Shared test helpers: review comment factory and a fake platform adapter."""

import logging
from datetime import datetime, timedelta
from typing import Iterator, List

import pytest

from prconflict.adapters.base import GitPlatformAdapter, ReviewThreadPage, ThreadStatus
from prconflict.models import ReviewComment

BASE_TIME = datetime(2024, 1, 15, 10, 0)


@pytest.fixture(autouse=True)
def _restore_logger_levels():
    """PRConflictLogging.setup() changes logger levels; undo it per test."""
    names = ("prconflict", "urllib3")
    levels = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


def make_comment(
    comment_id: int,
    path: str | None = "a.py",
    line: int | None = 1,
    minutes: int = 0,
    author: str = "alice",
    body: str = "comment",
) -> ReviewComment:
    return ReviewComment(
        id=comment_id,
        author=author,
        body=body,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        path=path,
        line=line,
    )


class FakeAdapter(GitPlatformAdapter):
    """In-memory adapter: thread pages and a flat comment list."""

    def __init__(self, pages: List[ReviewThreadPage], comments: List[ReviewComment] | None = None) -> None:
        self.pages = pages
        self.comments = comments or []
        self.pages_fetched = 0
        self.comments_fetched = 0

    def iter_review_thread_pages(self, repo: str, pr_number: int) -> Iterator[ReviewThreadPage]:
        for page in self.pages:
            self.pages_fetched += 1
            yield page

    def list_pr_review_comments(self, repo: str, pr_number: int) -> List[ReviewComment]:
        self.comments_fetched += 1
        return list(self.comments)


def page(*threads: ThreadStatus, has_next: bool = False, cursor: str | None = None) -> ReviewThreadPage:
    return ReviewThreadPage(threads=list(threads), has_next_page=has_next, end_cursor=cursor)


def unresolved(*ids: int) -> ThreadStatus:
    return ThreadStatus(is_resolved=False, comment_ids=list(ids))


def resolved(*ids: int) -> ThreadStatus:
    return ThreadStatus(is_resolved=True, comment_ids=list(ids))
