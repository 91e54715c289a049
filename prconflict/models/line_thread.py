"""Comments grouped on one file line."""

from typing import List, NamedTuple

from pydantic import BaseModel, Field

from prconflict.models.review_comment import ReviewComment


class ThreadKey(NamedTuple):
    path: str
    line: int


class LineThread(BaseModel):
    """Unresolved comments anchored to the same (path, line), oldest first."""

    path: str
    line: int
    comments: List[ReviewComment] = Field(default_factory=list)

    @property
    def key(self) -> ThreadKey:
        return ThreadKey(self.path, self.line)
