"""GitHub REST API wrapper."""

from __future__ import annotations

import logging
from typing import Any

import backoff
import httpx

from ..config import Config
from ..constants import RATE_LIMIT_MAX_TRIES, RATE_LIMIT_MAX_WAIT_S
from ..context import ActionContext
from .auth import get_github_client

logger = logging.getLogger(__name__)


class GitHubAPIError(RuntimeError):
    """Raised for failed GitHub API requests."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitHubRateLimitedError(GitHubAPIError):
    """Raised when GitHub rejects a request because of rate limiting."""


def _backoff_hdlr(details: dict[str, Any]) -> None:
    logger.warning("GitHub API rate limited, backing off {wait:0.1f} seconds after {tries} tries".format(**details))


def _is_rate_limited(resp: httpx.Response) -> bool:
    if resp.status_code == 429:
        return True
    if resp.status_code == 403:
        return resp.headers.get("x-ratelimit-remaining") == "0" or "retry-after" in resp.headers
    return False


@backoff.on_exception(
    backoff.expo,
    GitHubRateLimitedError,
    max_tries=RATE_LIMIT_MAX_TRIES,
    max_time=RATE_LIMIT_MAX_WAIT_S,
    on_backoff=_backoff_hdlr,
)
def _github_request(
    config: Config,
    context: ActionContext,
    method: str,
    path: str,
    *,
    params: dict[str, object] | None = None,
    json: dict[str, object] | None = None,
) -> Any:
    """Perform an HTTP request against the GitHub API.

    ``path`` is relative to the API root of the current GitHub instance.
    Rate limited responses raise `GitHubRateLimitedError` and are retried
    with exponential backoff; any other non-2xx response raises
    `GitHubAPIError` immediately.
    """
    if not path.startswith("/"):
        raise ValueError(f"Invalid GitHub API path: {path}")
    url = f"{context.api_url.rstrip('/')}{path}"

    try:
        with get_github_client(config) as client:
            resp = client.request(method, url, params=params, json=json)
    except httpx.HTTPError as exc:
        logger.error("GitHub API request failed: %s", exc)
        raise GitHubAPIError(f"GitHub API request failed: {exc}") from exc

    if 200 <= resp.status_code < 300:
        if not resp.content:
            return None
        return resp.json()

    if _is_rate_limited(resp):
        raise GitHubRateLimitedError(
            f"GitHub API rate limit exceeded for {method} {path}", resp.status_code
        )

    logger.error("GitHub API error %s: %s", resp.status_code, resp.text)
    raise GitHubAPIError(f"GitHub API error {resp.status_code}: {resp.text}", resp.status_code)


def _repo_path(context: ActionContext) -> str:
    owner, repo = context.repo
    return f"/repos/{owner}/{repo}"


def find_pull_request(
    config: Config,
    context: ActionContext,
    qualifiers: dict[str, str] | None = None,
) -> dict[str, Any] | None:
    """Return the first open pull request matching the search ``qualifiers``.

    Each qualifier is added to the search query as ``key:"value"``, so a key
    such as ``-base`` negates the match.
    """
    query = f"is:pr is:open repo:{context.repository}"
    for key, value in (qualifiers or {}).items():
        query += f' {key}:"{value}"'

    data = _github_request(config, context, "GET", "/search/issues", params={"q": query})
    items = (data or {}).get("items") or []
    if items:
        return items[0]
    return None


def create_comment(config: Config, context: ActionContext, issue_number: int, body: str) -> dict[str, Any]:
    path = f"{_repo_path(context)}/issues/{issue_number}/comments"
    return _github_request(config, context, "POST", path, json={"body": body})


def create_pull_request(
    config: Config,
    context: ActionContext,
    *,
    title: str,
    head: str,
    base: str,
    body: str,
) -> dict[str, Any]:
    """Open a pull request from ``head`` into ``base`` in the current repository."""
    payload = {"title": title, "head": head, "base": base, "body": body}
    return _github_request(config, context, "POST", f"{_repo_path(context)}/pulls", json=payload)


def close_pull_request(
    config: Config,
    context: ActionContext,
    pull_request: dict[str, Any] | None,
) -> dict[str, Any] | None:
    """Close ``pull_request`` if it is open.  Other inputs are returned unchanged."""
    if not pull_request or pull_request.get("state") != "open":
        return pull_request

    path = f"{_repo_path(context)}/pulls/{pull_request['number']}"
    return _github_request(config, context, "PATCH", path, json={"state": "closed"})


def request_reviewers(
    config: Config,
    context: ActionContext,
    pull_number: int,
    reviewers: list[str],
) -> dict[str, Any]:
    path = f"{_repo_path(context)}/pulls/{pull_number}/requested_reviewers"
    return _github_request(config, context, "POST", path, json={"reviewers": reviewers})
