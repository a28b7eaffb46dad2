"""Workflow implementations and the closed set of workflow names."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from ..config import InputError
from . import branch, push, push_for_bots
from .common import StatusCheckError, WorkflowEnv


class Workflow(str, Enum):
    BRANCH = "branch"
    PUSH = "push"
    PUSH_FOR_BOTS = "push_for_bots"


def build_workflows_dispatch() -> dict[Workflow, Callable[[WorkflowEnv], None]]:
    """Return a mapping from workflow names to their ``run`` callables."""
    return {
        Workflow.BRANCH: branch.run,
        Workflow.PUSH: push.run,
        Workflow.PUSH_FOR_BOTS: push_for_bots.run,
    }


def get_workflow(name: str) -> Callable[[WorkflowEnv], None]:
    """Look up a workflow by input value.  Raises `InputError` for unknown names."""
    dispatch = build_workflows_dispatch()
    try:
        return dispatch[Workflow(name)]
    except ValueError:
        valid = ", ".join(w.value for w in Workflow)
        raise InputError(f'Workflow input value "{name}" must be one of: {valid}') from None


__all__ = [
    "StatusCheckError",
    "Workflow",
    "WorkflowEnv",
    "build_workflows_dispatch",
    "get_workflow",
]
