"""Steps shared by the push and branch workflows."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import Config
from ..constants import DEPENDABOT_SKIP_PREFIX
from ..context import ActionContext, is_dependabot_context
from ..git import (
    commit,
    extra_header_config_without_authorization,
    has_staged_changes,
    push,
    stage_paths,
)
from ..licensed import LicensedOptions, cache, get_cache_paths
from ..runner import CommandRunner
from ..telemetry import group

logger = logging.getLogger(__name__)


class StatusCheckError(RuntimeError):
    """Raised when cached metadata is still invalid at the end of a run."""

    def __init__(self) -> None:
        super().__init__("Cached metadata checks failed")


@dataclass(frozen=True)
class WorkflowEnv:
    """Everything a workflow needs, built once by the entrypoint."""

    config: Config
    context: ActionContext
    runner: CommandRunner


def get_commit_message(config: Config, context: ActionContext) -> str:
    """Return the commit message, marked for Dependabot to skip if requested."""
    if config.dependabot_skip and is_dependabot_context(context):
        return f"{DEPENDABOT_SKIP_PREFIX}{config.commit_message}"
    return config.commit_message


def cache_and_stage(env: WorkflowEnv, command: list[str], options: LicensedOptions) -> bool:
    """Refresh cached metadata and stage it.  Returns True if anything changed."""
    with group("Caching licensed metadata"):
        cache(env.runner, command, options)

    cache_paths = get_cache_paths(env.runner, command, options)
    stage_paths(env.runner, cache_paths)
    changed = has_staged_changes(env.runner, cache_paths)
    if not changed:
        logger.info("No cached metadata changes detected in %s", ", ".join(cache_paths))
    return changed


def commit_and_push(env: WorkflowEnv, local_branch: str, branch: str) -> None:
    """Commit staged metadata and push ``local_branch`` to ``branch`` on origin."""
    extra_config = extra_header_config_without_authorization(env.runner, env.context.server_url)
    commit(env.runner, env.config, get_commit_message(env.config, env.context))
    push(env.runner, extra_config, local_branch, branch)
