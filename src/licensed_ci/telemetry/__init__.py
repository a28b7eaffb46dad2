"""Step outputs and workflow command helpers."""

from .actions import group, set_failed, set_output, warning

__all__ = ["group", "set_failed", "set_output", "warning"]
