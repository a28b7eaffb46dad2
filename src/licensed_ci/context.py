"""GitHub Actions event context.

Collects the runner-provided ``GITHUB_*`` environment and the webhook event
payload, and derives the branch a run operates on.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .constants import DEFAULT_API_URL, DEFAULT_SERVER_URL, DEPENDABOT_LOGIN

logger = logging.getLogger(__name__)

_HEADS_PREFIX = "refs/heads/"


@dataclass(frozen=True)
class ActionContext:
    """Read-only view of the workflow run that triggered the action."""

    repository: str = ""
    actor: str = ""
    event_name: str | None = None
    ref: str = ""
    server_url: str = DEFAULT_SERVER_URL
    api_url: str = DEFAULT_API_URL
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def repo(self) -> tuple[str, str]:
        """Return ``(owner, repo)`` parsed from ``GITHUB_REPOSITORY``."""
        try:
            owner, name = self.repository.split("/", 1)
        except ValueError as exc:
            raise RuntimeError(
                f"GITHUB_REPOSITORY must be in 'owner/repo' format (got '{self.repository}')"
            ) from exc
        return owner, name

    @classmethod
    def load_from_env(cls, environ: Mapping[str, str] | None = None) -> ActionContext:
        env = os.environ if environ is None else environ
        payload: dict[str, Any] = {}
        event_path = env.get("GITHUB_EVENT_PATH")
        if event_path:
            path = Path(event_path)
            if path.exists():
                payload = json.loads(path.read_text(encoding="utf-8"))
            else:
                logger.warning("GITHUB_EVENT_PATH %s does not exist", event_path)

        return cls(
            repository=env.get("GITHUB_REPOSITORY", ""),
            actor=env.get("GITHUB_ACTOR", ""),
            event_name=env.get("GITHUB_EVENT_NAME"),
            ref=env.get("GITHUB_REF", ""),
            server_url=env.get("GITHUB_SERVER_URL") or DEFAULT_SERVER_URL,
            api_url=env.get("GITHUB_API_URL") or DEFAULT_API_URL,
            payload=payload,
        )


def get_branch(context: ActionContext, override: str = "") -> str:
    """Return the branch name the run should operate on.

    Resolution order: an explicit ``override`` input, the head branch of a
    pull request payload, the payload ``ref`` and finally ``GITHUB_REF``.
    """
    if override:
        return override

    pull_request = context.payload.get("pull_request")
    if pull_request:
        return pull_request["head"]["ref"]

    payload_ref = context.payload.get("ref")
    if payload_ref:
        if not payload_ref.startswith(_HEADS_PREFIX):
            raise RuntimeError(f"{payload_ref} does not reference a branch")
        return payload_ref[len(_HEADS_PREFIX):]

    if context.ref.startswith(_HEADS_PREFIX):
        return context.ref[len(_HEADS_PREFIX):]

    raise RuntimeError(
        f"Unable to determine a HEAD branch reference for {context.event_name} event type"
    )


def is_dependabot_context(context: ActionContext) -> bool:
    """Return True when the run was triggered by or for Dependabot."""
    if context.actor == DEPENDABOT_LOGIN:
        return True
    pull_request = context.payload.get("pull_request") or {}
    user = pull_request.get("user") or {}
    return user.get("login") == DEPENDABOT_LOGIN


def is_bot_sender(context: ActionContext) -> bool:
    """Return True when the webhook sender is a GitHub App / bot account."""
    sender = context.payload.get("sender") or {}
    return sender.get("type") == "Bot"
