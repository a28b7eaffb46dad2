"""Git command helpers and branch naming."""

from .branch_strategy import (
    is_licenses_branch,
    licenses_branch_name,
    local_branch_name,
    user_branch_name,
)
from .repo_ops import (
    checkout,
    commit,
    configure_git,
    current_head,
    delete_branch,
    ensure_branch,
    extra_header_config_without_authorization,
    has_remote_branch,
    has_staged_changes,
    is_tracked,
    merge_theirs,
    push,
    remote_ref,
    stage_paths,
    user_config,
)

__all__ = [
    "checkout",
    "commit",
    "configure_git",
    "current_head",
    "delete_branch",
    "ensure_branch",
    "extra_header_config_without_authorization",
    "has_remote_branch",
    "has_staged_changes",
    "is_licenses_branch",
    "is_tracked",
    "licenses_branch_name",
    "local_branch_name",
    "merge_theirs",
    "push",
    "remote_ref",
    "stage_paths",
    "user_branch_name",
    "user_config",
]
