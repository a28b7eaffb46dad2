"""Wrappers around the ``licensed`` command line tool."""

from .commands import (
    cache,
    check_status,
    get_cache_paths,
    resolve_command,
)
from .options import LicensedOptions

__all__ = [
    "LicensedOptions",
    "cache",
    "check_status",
    "get_cache_paths",
    "resolve_command",
]
