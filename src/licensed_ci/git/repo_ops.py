"""Git repository operations.

Every operation shells out to the git CLI through ``CommandRunner``.  The
action works against a dedicated remote (``licensed-ci-origin``) whose URL
embeds the workflow token, so pushes do not depend on how the repository
was checked out.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from urllib.parse import urlsplit

from ..config import Config
from ..constants import ORIGIN
from ..context import ActionContext
from ..runner import CommandError, CommandRunner
from .branch_strategy import local_branch_name

logger = logging.getLogger(__name__)


def origin_url(config: Config, context: ActionContext) -> str:
    """Return the token-authenticated URL of the repository."""
    server = urlsplit(context.server_url)
    return f"{server.scheme}://x-access-token:{config.github_token}@{server.netloc}/{context.repository}"


def configure_git(runner: CommandRunner, config: Config, context: ActionContext) -> None:
    """Add the ``licensed-ci-origin`` remote.

    An existing remote of the same name, e.g. from an earlier step in the
    same job, is repointed instead.
    """
    url = origin_url(config, context)
    result = runner.run(["git", "remote", "add", ORIGIN, url], check=False)
    if result["exit_code"] != 0:
        runner.run(["git", "remote", "set-url", ORIGIN, url])


def user_config(config: Config) -> list[str]:
    """Inline git configuration for the commit author."""
    return ["-c", f"user.name={config.user_name}", "-c", f"user.email={config.user_email}"]


def extra_header_config_without_authorization(runner: CommandRunner, server_url: str) -> list[str]:
    """Return ``-c`` overrides that drop persisted AUTHORIZATION headers.

    ``actions/checkout`` persists its token as an ``http.extraheader``,
    which would take precedence over the credentials in the remote URL.
    Each header key is reset and its remaining headers re-added.
    """
    keys = ["http.extraheader", f"http.{server_url.rstrip('/')}/.extraheader"]
    config_values: list[str] = []
    for key in keys:
        result = runner.run(["git", "config", "--get-all", key], check=False, quiet=True)
        headers = [h.strip() for h in re.split(r"\r?\n", str(result["stdout"])) if h.strip()]
        config_values.extend(["-c", f"{key}="])
        for header in headers:
            if header.lower().startswith("authorization:"):
                continue
            config_values.extend(["-c", f"{key}={header}"])
    return config_values


def _is_shallow(runner: CommandRunner) -> bool:
    return (Path(runner.cwd or ".") / ".git" / "shallow").exists()


def _fetch(runner: CommandRunner, branch: str) -> bool:
    # --unshallow is rejected once the clone is complete
    unshallow = ["--unshallow"] if _is_shallow(runner) else []
    result = runner.run(["git", "fetch", *unshallow, ORIGIN, branch], check=False)
    return result["exit_code"] == 0


def remote_ref(branch: str) -> str:
    """Fully qualified remote-tracking ref of ``branch`` on ``licensed-ci-origin``."""
    return f"refs/remotes/{ORIGIN}/{branch}"


def current_head(runner: CommandRunner) -> str:
    """Return the checked out branch name, or the commit sha on a detached HEAD."""
    result = runner.run(["git", "symbolic-ref", "--quiet", "--short", "HEAD"], check=False, quiet=True)
    name = str(result["stdout"]).strip()
    if result["exit_code"] == 0 and name:
        return name
    return str(runner.run(["git", "rev-parse", "HEAD"], quiet=True)["stdout"]).strip()


def ensure_branch(runner: CommandRunner, branch: str, parent: str) -> tuple[str, str]:
    """Check out a local copy of ``branch``, creating it from ``parent`` if needed.

    ``parent`` is always fetched so it can be merged afterwards.  Returns the
    local branch name for ``branch`` and the remote-tracking ref of
    ``parent``.  Raises `RuntimeError` when the branch can neither be found
    nor created.
    """
    local_branch = local_branch_name(branch)

    _fetch(runner, branch)
    if branch != parent and not _fetch(runner, parent):
        logger.warning("Unable to fetch %s from %s", parent, ORIGIN)

    result = runner.run(
        ["git", "checkout", "--force", "-B", local_branch, remote_ref(branch)],
        check=False,
    )
    if result["exit_code"] != 0 and branch != parent:
        result = runner.run(
            ["git", "checkout", "--force", "-B", local_branch, remote_ref(parent)],
            check=False,
        )

    if result["exit_code"] != 0:
        raise RuntimeError(f"Unable to find or create the {branch} branch")

    return local_branch, remote_ref(parent)


def merge_theirs(runner: CommandRunner, config: Config, parent_ref: str, parent: str) -> None:
    """Bring the checked out branch up to date with ``parent_ref``.

    Conflicts are resolved in favour of the parent; cached metadata is
    regenerated afterwards anyway.
    """
    argv = ["git", *user_config(config), "merge", "-s", "recursive", "-Xtheirs", parent_ref]
    result = runner.run(argv, check=False)
    if result["exit_code"] != 0:
        raise RuntimeError(f"Unable to get branch up to date with {parent}")


def is_tracked(runner: CommandRunner, path: str) -> bool:
    result = runner.run(["git", "ls-files", "--", path], check=False, quiet=True)
    return result["exit_code"] == 0 and bool(str(result["stdout"]).strip())


def stage_paths(runner: CommandRunner, paths: list[str]) -> None:
    """Stage additions, changes and deletions under ``paths``.

    Paths that neither exist on disk nor are tracked are skipped, since git
    rejects pathspecs that match nothing.
    """
    root = Path(runner.cwd or ".")
    stageable = [p for p in paths if os.access(root / p, os.R_OK) or is_tracked(runner, p)]
    if not stageable:
        logger.info("No cache paths exist on disk or in the index, nothing to stage")
        return
    runner.run(["git", "add", "-A", "--", *stageable])


def has_staged_changes(runner: CommandRunner, paths: list[str]) -> bool:
    """Return True when ``paths`` differ from HEAD."""
    argv = ["git", "diff-index", "--quiet", "HEAD", "--", *paths]
    result = runner.run(argv, check=False)
    exit_code = int(result["exit_code"])
    if exit_code > 1:
        raise CommandError(argv, exit_code, str(result["stderr"]))
    return exit_code == 1


def commit(runner: CommandRunner, config: Config, message: str) -> None:
    runner.run(["git", *user_config(config), "commit", "-m", message])


def push(runner: CommandRunner, extra_config: list[str], local_branch: str, branch: str) -> None:
    runner.run(["git", *extra_config, "push", ORIGIN, f"refs/heads/{local_branch}:refs/heads/{branch}"])


def checkout(runner: CommandRunner, branch: str) -> None:
    runner.run(["git", "checkout", branch])


def has_remote_branch(runner: CommandRunner, branch: str) -> bool:
    result = runner.run(["git", "ls-remote", "--exit-code", ORIGIN, branch], check=False, quiet=True)
    return result["exit_code"] == 0


def delete_branch(runner: CommandRunner, branch: str) -> None:
    """Delete ``branch`` from the remote if it exists."""
    if has_remote_branch(runner, branch):
        runner.run(["git", "push", ORIGIN, "--delete", branch])
