"""Top-level package for licensed-ci.

This package implements a CI action that keeps cached ``licensed`` dependency
metadata in sync with a repository, pushing updates directly or routing them
through a companion licenses branch and pull request.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
