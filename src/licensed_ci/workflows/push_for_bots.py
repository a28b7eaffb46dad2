"""Choose between the branch and push workflows based on who triggered the run.

Bot accounts (e.g. Dependabot) cannot respond to review requests, so their
updates are pushed directly unless a licenses branch is already in use.
Everything else goes through the reviewable branch workflow.
"""

from __future__ import annotations

import logging

from ..context import get_branch, is_bot_sender
from ..git import has_remote_branch, is_licenses_branch, licenses_branch_name
from . import branch, push
from .common import WorkflowEnv

logger = logging.getLogger(__name__)


def has_licenses_branch(env: WorkflowEnv) -> bool:
    current = get_branch(env.context, env.config.branch)
    if is_licenses_branch(current):
        return True
    return has_remote_branch(env.runner, licenses_branch_name(current))


def run(env: WorkflowEnv) -> None:
    if has_licenses_branch(env):
        logger.info("Detected licenses branch, choosing branch workflow")
        branch.run(env)
    elif not is_bot_sender(env.context):
        logger.info("Detected user context, choosing branch workflow")
        branch.run(env)
    else:
        logger.info("Detected no licenses branch and Bot context, choosing push workflow")
        push.run(env)
