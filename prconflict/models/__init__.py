"""Data models for review comments and line threads (Pydantic)."""

from prconflict.models.line_thread import LineThread, ThreadKey
from prconflict.models.review_comment import UNKNOWN_AUTHOR, ReviewComment

__all__ = ["LineThread", "ReviewComment", "ThreadKey", "UNKNOWN_AUTHOR"]
