"""Line-level comment on a pull request review."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

UNKNOWN_AUTHOR = "unknown"


class ReviewComment(BaseModel):
    """Review comment as reported by the comment listing.

    A comment without path or line is outdated: its anchor no longer maps to
    the current diff.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    author: str = UNKNOWN_AUTHOR
    body: str = ""
    created_at: datetime
    path: str | None = None
    line: int | None = None

    @property
    def is_anchored(self) -> bool:
        return self.path is not None and self.line is not None
