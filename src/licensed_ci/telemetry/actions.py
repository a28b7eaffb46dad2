"""GitHub Actions workflow commands and step outputs.

Workflow commands (``::warning::``, ``::error::``, ``::group::``) are written
to stdout where the runner picks them up.  Step outputs are appended to the
file named by ``$GITHUB_OUTPUT``.

See: https://docs.github.com/actions/using-workflows/workflow-commands-for-github-actions
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


def _escape_workflow_command(value: object) -> str:
    if value is None:
        return ""
    return str(value).replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _to_output_string(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def _issue(command: str, message: object = "") -> None:
    sys.stdout.write(f"::{command}::{_escape_workflow_command(message)}\n")
    sys.stdout.flush()


def set_output(name: str, value: object) -> None:
    """Write a step output.  Booleans are written as ``true``/``false``."""
    output_value = _to_output_string(value)
    github_output = os.environ.get("GITHUB_OUTPUT")
    if not github_output:
        logger.info("Output %s=%s (GITHUB_OUTPUT not set)", name, output_value)
        return

    with open(Path(github_output), "a", encoding="utf-8") as f:
        if "\n" in output_value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            f.write(f"{name}<<{delimiter}\n{output_value}\n{delimiter}\n")
        else:
            f.write(f"{name}={output_value}\n")


def warning(message: object) -> None:
    _issue("warning", message)


def set_failed(message: object) -> None:
    """Report ``message`` as an error annotation.  Callers set the exit code."""
    _issue("error", message)


@contextmanager
def group(name: str) -> Iterator[None]:
    """Fold everything logged inside the block into a collapsible group."""
    _issue("group", name)
    try:
        yield
    finally:
        _issue("endgroup")
