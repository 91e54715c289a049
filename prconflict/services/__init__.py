"""Resolution lookup, comment grouping and block injection."""

from prconflict.services.aggregator import group_unresolved_comments
from prconflict.services.annotate import AnnotationSummary, annotate_pull_request
from prconflict.services.injector import (
    apply_threads,
    build_block,
    inject_threads,
    render_dry_run,
    sanitize_body,
)
from prconflict.services.resolver import get_unresolved_comment_ids

__all__ = [
    "AnnotationSummary",
    "annotate_pull_request",
    "apply_threads",
    "build_block",
    "get_unresolved_comment_ids",
    "group_unresolved_comments",
    "inject_threads",
    "render_dry_run",
    "sanitize_body",
]
