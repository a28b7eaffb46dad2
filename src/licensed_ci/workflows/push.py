"""Push workflow: commit refreshed metadata directly to the triggering branch."""

from __future__ import annotations

import logging
from typing import Any

from ..context import get_branch
from ..git import ensure_branch
from ..github import create_comment, find_pull_request
from ..licensed import check_status, resolve_command
from ..telemetry import set_output, warning
from .common import StatusCheckError, WorkflowEnv, cache_and_stage, commit_and_push

logger = logging.getLogger(__name__)


def _comment_on_pull_request(env: WorkflowEnv, pull_request: dict[str, Any]) -> None:
    comment = env.config.pr_comment
    if not comment:
        return

    logger.info("Adding comment to %s", pull_request.get("html_url"))
    warning(
        '"pr_comment" is deprecated.  Please use the "pr_url" and "pr_number" '
        "step outputs to script actions on an available pull request."
    )
    create_comment(env.config, env.context, pull_request["number"], comment)


def run(env: WorkflowEnv) -> None:
    config, context, runner = env.config, env.context, env.runner

    branch = get_branch(context, config.branch)
    set_output("licenses_branch", branch)
    set_output("user_branch", branch)

    command, options = resolve_command(config)

    # pre-check, if status succeeds there is nothing to recache
    if check_status(runner, command, options)["success"]:
        logger.info("Cached metadata is up to date on %s", branch)
        set_output("licenses_updated", False)
        return

    local_branch, _ = ensure_branch(runner, branch, branch)
    pull_request = find_pull_request(config, context, {"head": branch})

    licenses_updated = cache_and_stage(env, command, options)
    if licenses_updated:
        commit_and_push(env, local_branch, branch)
        if pull_request:
            _comment_on_pull_request(env, pull_request)

    set_output("licenses_updated", licenses_updated)
    if pull_request:
        set_output("pr_url", pull_request["html_url"])
        set_output("pr_number", pull_request["number"])

    if not check_status(runner, command, options)["success"]:
        raise StatusCheckError()
