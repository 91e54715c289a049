"""
Annotate a local checkout with the unresolved review threads of a pull request.

1. Ask the resolution view which comment ids belong to unresolved threads.
2. Fetch every review comment and group the unresolved, anchored ones by line.
3. Inject a conflict block per thread, file by file.

Remote failures propagate (GitPlatformError) and stop the run. File errors
are logged per file and do not stop the remaining files.
"""

import logging
from pathlib import Path
from typing import List, TextIO

from pydantic import BaseModel, Field

from prconflict.adapters.base import GitPlatformAdapter
from prconflict.services.aggregator import group_unresolved_comments
from prconflict.services.injector import inject_threads
from prconflict.services.resolver import get_unresolved_comment_ids


class AnnotationSummary(BaseModel):
    """Outcome of one annotation run."""

    unresolved_comments: int = 0
    threads: int = 0
    files_annotated: List[str] = Field(default_factory=list)
    files_failed: List[str] = Field(default_factory=list)


def annotate_pull_request(
    adapter: GitPlatformAdapter,
    repo: str,
    pr_number: int,
    repo_dir: Path | None = None,
    dry_run: bool = False,
    out: TextIO | None = None,
    log: logging.Logger | None = None,
) -> AnnotationSummary:
    """Run resolver, aggregator and injector for one pull request."""
    logger = log or logging.getLogger("prconflict.services.annotate")
    repo_path = Path(repo_dir) if repo_dir is not None else Path.cwd()
    summary = AnnotationSummary()

    unresolved_ids = get_unresolved_comment_ids(adapter, repo, pr_number)
    summary.unresolved_comments = len(unresolved_ids)
    if not unresolved_ids:
        logger.info("PR #%s: all review threads resolved - nothing to do", pr_number)
        return summary

    comments = adapter.list_pr_review_comments(repo, pr_number)
    file_threads = group_unresolved_comments(unresolved_ids, comments)
    if not file_threads:
        logger.info("PR #%s: no unresolved comments align with current lines - finished", pr_number)
        return summary

    for rel_path in sorted(file_threads):
        threads = list(file_threads[rel_path].values())
        summary.threads += len(threads)
        try:
            changed = inject_threads(repo_path / rel_path, threads, dry_run=dry_run, out=out)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("%s: %s", rel_path, e)
            summary.files_failed.append(rel_path)
            continue
        if changed:
            summary.files_annotated.append(rel_path)

    logger.info(
        "PR #%s: %s thread(s) in %s file(s), %s annotated, %s failed",
        pr_number,
        summary.threads,
        len(file_threads),
        len(summary.files_annotated),
        len(summary.files_failed),
    )
    return summary
