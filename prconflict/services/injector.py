"""Insert review conflict blocks into source files.

Each unresolved thread becomes a Git-style conflict block wrapped around the
line it is anchored to:

    <<<<<<< REVIEW THREAD (2)
    2024-01-15 10:00 alice: Use a constant here
    2024-01-15 11:30 bob: Agreed
    =======
    <original line>
    >>>>>>> END REVIEW

Threads are spliced in descending line order so that inserting a block never
shifts a line that is still waiting for its own block. Running twice nests
blocks: existing markers are not detected.
"""

import logging
import re
import sys
from pathlib import Path
from typing import Iterable, List, TextIO

from prconflict.models import LineThread, ReviewComment

logger = logging.getLogger(__name__)

BLOCK_START = "<<<<<<< REVIEW THREAD"
BLOCK_SEPARATOR = "======="
BLOCK_END = ">>>>>>> END REVIEW"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"

_LINE_BREAKS_RE = re.compile(r"[\r\n]+")
_MARKER_CHARS_RE = re.compile(r"[<=>]")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_body(body: str) -> str:
    """Flatten a comment body to one line that cannot forge a marker."""
    body = _LINE_BREAKS_RE.sub(" ", body)
    body = _MARKER_CHARS_RE.sub("", body)
    body = _WHITESPACE_RE.sub(" ", body)
    return body.strip()


def format_comment(comment: ReviewComment) -> str:
    ts = comment.created_at.strftime(TIMESTAMP_FORMAT)
    return f"{ts} {comment.author}: {sanitize_body(comment.body)}"


def build_block(comments: List[ReviewComment]) -> List[str]:
    """Opening marker, one line per comment (in given order), separator."""
    lines = [f"{BLOCK_START} ({len(comments)})"]
    lines.extend(format_comment(c) for c in comments)
    lines.append(BLOCK_SEPARATOR)
    return lines


def split_lines(content: str) -> List[str]:
    """Split on LF only; line content (including any CR) is kept verbatim."""
    if not content:
        return []
    lines = content.split("\n")
    if content.endswith("\n"):
        lines.pop()
    return lines


def join_lines(lines: List[str]) -> str:
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def apply_threads(lines: List[str], threads: Iterable[LineThread], path: str = "") -> List[str]:
    """Return a copy of lines with a block spliced around each thread's line.

    A thread whose line is outside the file is skipped with a warning; the
    other threads are still applied.
    """
    result = list(lines)
    for thread in sorted(threads, key=lambda t: t.line, reverse=True):
        idx = thread.line - 1
        if idx < 0 or idx >= len(result):
            logger.warning("%s:%s - line vanished, skipping", path, thread.line)
            continue
        block = build_block(thread.comments)
        result[idx : idx + 1] = block + [result[idx], BLOCK_END]
    return result


def render_dry_run(path: str | Path, lines: List[str], out: TextIO | None = None) -> None:
    """Print lines with 6-wide, 1-based line numbers under a file header."""
    stream = out if out is not None else sys.stdout
    print(f"--- {path} (dry-run)", file=stream)
    for number, line in enumerate(lines, 1):
        print(f"{number:6d} {line}", file=stream)


def inject_threads(
    path: Path,
    threads: Iterable[LineThread],
    dry_run: bool = False,
    out: TextIO | None = None,
) -> bool:
    """Read path, splice blocks for threads, then print (dry run) or overwrite.

    Returns True when at least one block was inserted. The file is written
    only in that case.

    Raises:
        OSError: If the file cannot be read or written
        UnicodeDecodeError: If the file is not UTF-8 text
    """
    path = Path(path)
    with open(path, encoding="utf-8", newline="") as f:
        original = split_lines(f.read())

    annotated = apply_threads(original, threads, path=str(path))
    changed = len(annotated) != len(original)

    if dry_run:
        render_dry_run(path, annotated, out=out)
        return changed

    if changed:
        path.write_text(join_lines(annotated), encoding="utf-8", newline="")
        logger.info("%s: inserted %s line(s)", path, len(annotated) - len(original))
    return changed
