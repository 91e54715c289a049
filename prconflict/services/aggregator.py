"""Group unresolved, anchored review comments by file and line."""

from typing import AbstractSet, Dict, Iterable

from prconflict.models import LineThread, ReviewComment


def group_unresolved_comments(
    unresolved_ids: AbstractSet[int],
    comments: Iterable[ReviewComment],
) -> Dict[str, Dict[int, LineThread]]:
    """Map path -> line -> LineThread for comments worth annotating.

    Comments without path or line (outdated) and comments whose id is not in
    unresolved_ids are dropped. Comments in each thread end up ordered by
    creation time; ties keep input order.
    """
    by_file: Dict[str, Dict[int, LineThread]] = {}
    for comment in comments:
        if not comment.is_anchored:
            continue
        if comment.id not in unresolved_ids:
            continue
        lines = by_file.setdefault(comment.path, {})
        thread = lines.get(comment.line)
        if thread is None:
            thread = lines[comment.line] = LineThread(path=comment.path, line=comment.line)
        thread.comments.append(comment)

    for lines in by_file.values():
        for thread in lines.values():
            thread.comments.sort(key=lambda c: c.created_at)
    return by_file
