"""Configuration loading for licensed-ci.

This module loads environment variables from a `.env` file using
`python-dotenv` and populates a `Config` object from the action inputs.
GitHub Actions exposes each input ``name`` as ``INPUT_<NAME>``.

Required inputs:
- workflow
- github_token
- command
- config_file
- user_name
- user_email
- commit_message

Optional inputs:
- sources, format (passed through to ``licensed``)
- branch (overrides the branch detected from the event)
- pr_comment
- cleanup_on_success (default: false)
- dependabot_skip (default: false)
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .constants import DEFAULT_LOG_LEVEL

REQUIRED_INPUTS = (
    "workflow",
    "github_token",
    "command",
    "config_file",
    "user_name",
    "user_email",
    "commit_message",
)


class InputError(ValueError):
    """Raised when an action input is missing or malformed."""


def input_env_name(name: str) -> str:
    """Return the environment variable GitHub Actions uses for input ``name``."""
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(name: str, environ: Mapping[str, str] | None = None, *, required: bool = False) -> str:
    """Read an action input, stripped of surrounding whitespace."""
    env = os.environ if environ is None else environ
    value = env.get(input_env_name(name), "").strip()
    if required and not value:
        raise InputError(f"Input required and not supplied: {name}")
    return value


def get_boolean_input(name: str, environ: Mapping[str, str] | None = None) -> bool:
    """Read a ``true``/``false`` action input.  Unset inputs are false."""
    value = get_input(name, environ)
    if not value:
        return False
    lowered = value.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    raise InputError(f"Input '{name}' must be one of: true, false (got '{value}')")


def parse_list_input(value: str) -> list[str]:
    """Split a comma or newline separated input into its non-empty items."""
    return [item.strip() for item in re.split(r"[,\n]", value) if item.strip()]


@dataclass(frozen=True)
class Config:
    """Action inputs for a single run."""

    workflow: str
    github_token: str
    command: str
    config_file: str
    user_name: str
    user_email: str
    commit_message: str
    sources: list[str] = field(default_factory=list)
    format: str = ""
    branch: str = ""
    pr_comment: str = ""
    cleanup_on_success: bool = False
    dependabot_skip: bool = False
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def secrets(self) -> list[str]:
        return [self.github_token]

    @classmethod
    def load_from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Load configuration from action input environment variables.

        The `.env` file is loaded if present and no explicit ``environ`` is
        given.  Raises `InputError` naming every missing required input.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        values = {name: get_input(name, environ) for name in REQUIRED_INPUTS}
        missing = [name for name, value in values.items() if not value]
        if missing:
            raise InputError(f"Input required and not supplied: {', '.join(missing)}")

        return cls(
            **values,
            sources=parse_list_input(get_input("sources", environ)),
            format=get_input("format", environ),
            branch=get_input("branch", environ),
            pr_comment=get_input("pr_comment", environ),
            cleanup_on_success=get_boolean_input("cleanup_on_success", environ),
            dependabot_skip=get_boolean_input("dependabot_skip", environ),
            log_level=environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL),
        )
