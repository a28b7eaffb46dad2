"""Branch workflow: stage metadata updates on ``<branch>-licenses`` for review.

Updates are never pushed to the user's branch.  They are committed to the
companion licenses branch and proposed through a pull request into the user
branch, so the status check on the user branch keeps failing until that pull
request is merged.
"""

from __future__ import annotations

import logging
from typing import Any

from ..context import get_branch
from ..git import (
    checkout,
    current_head,
    delete_branch,
    ensure_branch,
    is_licenses_branch,
    licenses_branch_name,
    merge_theirs,
    user_branch_name,
)
from ..github import (
    GitHubAPIError,
    close_pull_request,
    create_comment,
    create_pull_request,
    find_pull_request,
    generate_parent_comment,
    generate_pr_body,
    generate_status_comment,
    request_reviewers,
)
from ..licensed import LicensedOptions, check_status, resolve_command
from ..telemetry import set_output, warning
from .common import StatusCheckError, WorkflowEnv, cache_and_stage, commit_and_push

logger = logging.getLogger(__name__)


def _cleanup(env: WorkflowEnv, user_branch: str, licenses_branch: str) -> None:
    """Close the licenses pull request and delete its branch."""
    pull_request = find_pull_request(
        env.config, env.context, {"head": licenses_branch, "base": user_branch}
    )
    if pull_request:
        logger.info("Closing %s, cached metadata is valid on %s", pull_request.get("html_url"), user_branch)
    close_pull_request(env.config, env.context, pull_request)
    delete_branch(env.runner, licenses_branch)


def _update_licenses_branch(
    env: WorkflowEnv,
    command: list[str],
    options: LicensedOptions,
    user_branch: str,
    licenses_branch: str,
) -> dict[str, object] | None:
    """Cache metadata on the licenses branch and push any changes.

    Returns the ``licensed status`` result on the updated licenses branch,
    or None when nothing changed.
    """
    runner = env.runner
    # restored afterwards, pull_request checkouts have a detached HEAD
    original_head = current_head(runner)
    local_licenses, user_ref = ensure_branch(runner, licenses_branch, user_branch)
    merge_theirs(runner, env.config, user_ref, user_branch)

    status_result = None
    if cache_and_stage(env, command, options):
        commit_and_push(env, local_licenses, licenses_branch)
        status_result = check_status(runner, command, options)

    checkout(runner, original_head)
    return status_result


def _open_pull_request(
    env: WorkflowEnv,
    user_branch: str,
    licenses_branch: str,
    parent_pull_request: dict[str, Any] | None,
) -> dict[str, Any]:
    config, context = env.config, env.context
    branch_url = f"{context.server_url.rstrip('/')}/{context.repository}/tree/{user_branch}"
    body = generate_pr_body(
        user_branch,
        branch_url,
        context.actor,
        parent_pr_url=parent_pull_request["html_url"] if parent_pull_request else None,
        pr_comment=config.pr_comment,
    )
    pull_request = create_pull_request(
        config,
        context,
        title=f"License updates for {user_branch}",
        head=licenses_branch,
        base=user_branch,
        body=body,
    )
    logger.info("Opened %s", pull_request.get("html_url"))

    if context.actor:
        try:
            request_reviewers(config, context, pull_request["number"], [context.actor])
        except GitHubAPIError as exc:
            warning(str(exc))

    return pull_request


def run(env: WorkflowEnv) -> None:
    config, context, runner = env.config, env.context, env.runner

    branch = get_branch(context, config.branch)
    user_branch = user_branch_name(branch)
    licenses_branch = licenses_branch_name(branch)
    set_output("licenses_branch", licenses_branch)
    set_output("user_branch", user_branch)

    command, options = resolve_command(config)

    # pre-check, if status succeeds there is nothing to recache
    if check_status(runner, command, options)["success"]:
        logger.info("Cached metadata is up to date on %s", branch)
        if config.cleanup_on_success and not is_licenses_branch(branch):
            _cleanup(env, user_branch, licenses_branch)
        set_output("licenses_updated", False)
        return

    status_result = None
    if not is_licenses_branch(branch):
        status_result = _update_licenses_branch(env, command, options, user_branch, licenses_branch)
    licenses_updated = status_result is not None
    set_output("licenses_updated", licenses_updated)

    pull_request = find_pull_request(config, context, {"head": licenses_branch, "base": user_branch})
    if licenses_updated:
        parent_pull_request = find_pull_request(
            config, context, {"head": user_branch, "-base": user_branch}
        )

        pr_created = pull_request is None
        if pr_created:
            pull_request = _open_pull_request(env, user_branch, licenses_branch, parent_pull_request)
        set_output("pr_created", pr_created)

        if parent_pull_request:
            create_comment(
                config,
                context,
                parent_pull_request["number"],
                generate_parent_comment(pull_request["html_url"]),
            )

        create_comment(
            config,
            context,
            pull_request["number"],
            generate_status_comment(bool(status_result["success"]), str(status_result["log"])),
        )

    if pull_request:
        set_output("pr_url", pull_request["html_url"])
        set_output("pr_number", pull_request["number"])
        logger.info("Review cached metadata updates for %s in %s", user_branch, pull_request["html_url"])

    # the user branch only passes once the licenses branch has been merged
    raise StatusCheckError()
