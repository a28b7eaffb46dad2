"""GitHub API integration."""

from .api import (
    GitHubAPIError,
    GitHubRateLimitedError,
    close_pull_request,
    create_comment,
    create_pull_request,
    find_pull_request,
    request_reviewers,
)
from .auth import get_github_client
from .templates import (
    generate_parent_comment,
    generate_pr_body,
    generate_status_comment,
)

__all__ = [
    "GitHubAPIError",
    "GitHubRateLimitedError",
    "close_pull_request",
    "create_comment",
    "create_pull_request",
    "find_pull_request",
    "generate_parent_comment",
    "generate_pr_body",
    "generate_status_comment",
    "get_github_client",
    "request_reviewers",
]
