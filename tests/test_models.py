"""Tests for review comment and line thread models."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from prconflict.models import UNKNOWN_AUTHOR, LineThread, ReviewComment, ThreadKey


def test_review_comment_defaults() -> None:
    c = ReviewComment(id=1, created_at=datetime(2024, 1, 1))
    assert c.author == UNKNOWN_AUTHOR
    assert c.body == ""
    assert c.path is None
    assert c.line is None
    assert c.is_anchored is False


def test_review_comment_is_immutable() -> None:
    c = ReviewComment(id=1, created_at=datetime(2024, 1, 1), path="a.py", line=3)
    assert c.is_anchored is True
    with pytest.raises(ValidationError):
        c.line = 4


def test_line_thread_key() -> None:
    thread = LineThread(path="a.py", line=3)
    assert thread.comments == []
    assert thread.key == ThreadKey("a.py", 3)
    assert thread.key.path == "a.py"
