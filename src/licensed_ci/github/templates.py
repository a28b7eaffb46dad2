"""Templates for licenses pull request bodies and comments."""

from __future__ import annotations


def generate_pr_body(
    user_branch: str,
    branch_url: str,
    actor: str,
    parent_pr_url: str | None = None,
    pr_comment: str = "",
) -> str:
    """Return the body for a new licenses pull request.

    The body links the branch the updates are merged into and, when one is
    open, the pull request for that branch.  ``pr_comment`` is appended
    verbatim and the triggering actor is cc'd.
    """
    body_parts: list[str] = [
        "This PR was auto generated by the `licensed-ci` GitHub Action.\n",
        "It contains updates to cached `github/licensed` dependency metadata "
        f"to be merged into [{user_branch}]({branch_url}).\n",
    ]
    if parent_pr_url:
        body_parts.append(f"The updates are for changes made in [PR]({parent_pr_url}).\n")
    body_parts.append("\nPlease review the changed files and adjust as needed before merging.\n")
    if pr_comment:
        body_parts.append(f"\n{pr_comment.strip()}\n")
    if actor:
        body_parts.append(f"\n/cc @{actor}\n")
    return "".join(body_parts)


def generate_parent_comment(licenses_pr_url: str) -> str:
    """Comment left on the user's pull request after licenses are updated."""
    return (
        "The `licensed-ci` GitHub Action has updated cached dependency metadata "
        "needed by this branch.\n\n"
        f"Please review and merge {licenses_pr_url} to bring the changes into this branch."
    )


def generate_status_comment(success: bool, log: str) -> str:
    """Comment reporting the ``licensed status`` result on the licenses branch."""
    result = "succeeded" if success else "failed"
    return (
        f"**`licensed status` result**: {result}\n\n"
        "<details>\n<summary>Output</summary>\n\n"
        f"```\n{log.strip()}\n```\n\n"
        "</details>"
    )
