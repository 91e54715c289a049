"""Collect ids of comments that belong to unresolved review threads."""

import logging
from typing import Set

from prconflict.adapters.base import GitPlatformAdapter

logger = logging.getLogger(__name__)


def get_unresolved_comment_ids(adapter: GitPlatformAdapter, repo: str, pr_number: int) -> Set[int]:
    """Return ids of every comment in a thread that is not resolved.

    Pages are consumed one at a time and only the id set is kept. Any failing
    page raises GitPlatformError; there is no partial result.
    """
    ids: Set[int] = set()
    pages = 0
    for page in adapter.iter_review_thread_pages(repo, pr_number):
        pages += 1
        for thread in page.threads:
            if thread.is_resolved:
                continue
            ids.update(thread.comment_ids)
    logger.debug("PR #%s: %s unresolved comment ids over %s page(s)", pr_number, len(ids), pages)
    return ids
