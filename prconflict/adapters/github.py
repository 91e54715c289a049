"""GitHub API adapter.

Review thread resolution is only exposed through GraphQL v4; comment
positions (path and line) come from the REST pull request comments listing.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterator, List

import requests

from prconflict.adapters.base import (
    GitPlatformAdapter,
    GitPlatformError,
    RateLimitError,
    ReviewThreadPage,
    ThreadStatus,
)
from prconflict.config import parse_repository
from prconflict.models import UNKNOWN_AUTHOR, ReviewComment

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 100

REVIEW_THREADS_QUERY = """
query($owner: String!, $name: String!, $pr: Int!, $cursor: String) {
  repository(owner: $owner, name: $name) {
    pullRequest(number: $pr) {
      reviewThreads(first: 100, after: $cursor) {
        pageInfo { hasNextPage endCursor }
        nodes {
          isResolved
          comments(first: 100) {
            nodes { databaseId }
          }
        }
      }
    }
  }
}
"""


def _parse_iso(s: str) -> datetime:
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _review_comment_from_api(data: Dict[str, Any]) -> ReviewComment:
    user = data.get("user") or {}
    line = data.get("line")
    return ReviewComment(
        id=data["id"],
        author=user.get("login") or UNKNOWN_AUTHOR,
        body=data.get("body") or "",
        created_at=_parse_iso(data["created_at"]),
        path=data.get("path"),
        line=int(line) if line is not None else None,
    )


def _thread_page_from_api(result: Dict[str, Any], repo: str, pr_number: int) -> ReviewThreadPage:
    if not isinstance(result, dict):
        raise GitPlatformError("unexpected GraphQL response: expected an object")
    errors = result.get("errors")
    if errors:
        first = errors[0] if isinstance(errors[0], dict) else {}
        raise GitPlatformError(f"GraphQL error: {first.get('message', errors)}")
    repository = (result.get("data") or {}).get("repository") or {}
    pull = repository.get("pullRequest")
    if not pull:
        raise GitPlatformError(f"Not found: PR #{pr_number} in {repo}")
    threads_data = pull.get("reviewThreads") or {}
    threads: List[ThreadStatus] = []
    for node in threads_data.get("nodes") or []:
        comment_nodes = (node.get("comments") or {}).get("nodes") or []
        ids = [c["databaseId"] for c in comment_nodes if c and c.get("databaseId") is not None]
        threads.append(ThreadStatus(is_resolved=bool(node.get("isResolved")), comment_ids=ids))
    page_info = threads_data.get("pageInfo") or {}
    return ReviewThreadPage(
        threads=threads,
        has_next_page=bool(page_info.get("hasNextPage")),
        end_cursor=page_info.get("endCursor"),
    )


class GitHubAdapter(GitPlatformAdapter):
    """GitHub REST + GraphQL implementation."""

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        graphql_url: str | None = None,
        timeout: int = 30,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._graphql_url = graphql_url or f"{self._api_url}/graphql"
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        if path.startswith("http"):
            url = path
        elif path.startswith("/"):
            url = f"{self._api_url}{path}"
        else:
            url = f"{self._api_url}/{path}"
        logger.debug("%s %s params=%s", method, url, params)
        try:
            resp = self._session.request(method, url, params=params, json=json, timeout=self._timeout)
        except requests.RequestException as e:
            raise GitPlatformError(f"Request failed: {e}") from e
        if resp.status_code in (403, 429) and resp.headers.get("X-RateLimit-Remaining") == "0":
            raise RateLimitError(int(resp.headers.get("X-RateLimit-Reset", 0)))
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except Exception:
                pass
            raise GitPlatformError(f"{resp.status_code}: {msg}")
        return resp

    def _json(self, resp: requests.Response, what: str) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise GitPlatformError(f"invalid JSON from {what}: {e}") from e

    def iter_review_thread_pages(self, repo: str, pr_number: int) -> Iterator[ReviewThreadPage]:
        owner, name = parse_repository(repo)
        variables: Dict[str, Any] = {"owner": owner, "name": name, "pr": pr_number, "cursor": None}
        while True:
            resp = self._request(
                "POST",
                self._graphql_url,
                json={"query": REVIEW_THREADS_QUERY, "variables": variables},
            )
            page = _thread_page_from_api(self._json(resp, "GraphQL reviewThreads"), repo, pr_number)
            yield page
            if not page.has_next_page:
                return
            if not page.end_cursor:
                raise GitPlatformError("GraphQL pageInfo has next page but no end cursor")
            variables["cursor"] = page.end_cursor

    def list_pr_review_comments(self, repo: str, pr_number: int) -> List[ReviewComment]:
        path = f"/repos/{repo}/pulls/{pr_number}/comments"
        comments: List[ReviewComment] = []
        page = 1
        while True:
            params = {"per_page": DEFAULT_PER_PAGE, "page": page}
            data = self._json(self._request("GET", path, params=params), path)
            if data is None:
                data = []
            if not isinstance(data, list):
                raise GitPlatformError(f"unexpected response from {path}: expected a list")
            comments.extend(_review_comment_from_api(d) for d in data)
            if len(data) < DEFAULT_PER_PAGE:
                break
            page += 1
        return comments
