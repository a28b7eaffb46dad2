"""Licenses branch naming."""

from __future__ import annotations

from ..constants import LICENSES_BRANCH_SUFFIX, ORIGIN


def is_licenses_branch(branch: str) -> bool:
    return branch.endswith(LICENSES_BRANCH_SUFFIX)


def user_branch_name(branch: str) -> str:
    """Return the user branch a licenses branch was created for."""
    if is_licenses_branch(branch):
        return branch[: -len(LICENSES_BRANCH_SUFFIX)]
    return branch


def licenses_branch_name(branch: str) -> str:
    """Return the companion ``<branch>-licenses`` branch name.

    Names that already carry the suffix are returned unchanged.
    """
    return f"{user_branch_name(branch)}{LICENSES_BRANCH_SUFFIX}"


def local_branch_name(branch: str) -> str:
    """Local branch used to work on ``branch`` without touching the checkout."""
    return f"{ORIGIN}/{branch}"
