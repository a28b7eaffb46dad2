"""Global constants for licensed-ci.

These values serve as defaults for configuration and API behaviour.  The
tunable ones can be overridden through environment variables.
"""

import os

# Name of the git remote configured with a token-authenticated URL
ORIGIN = "licensed-ci-origin"

# Suffix used to derive the companion licenses branch from a user branch
LICENSES_BRANCH_SUFFIX = "-licenses"

DEPENDABOT_LOGIN = "dependabot[bot]"
DEPENDABOT_SKIP_PREFIX = "[dependabot skip] "

# Default GitHub endpoints, overridden by the runner environment on GHES
DEFAULT_SERVER_URL = "https://github.com"
DEFAULT_API_URL = "https://api.github.com"

# Limits
COMMAND_TIMEOUT_S = int(os.environ.get("COMMAND_TIMEOUT_S", 600))
HTTP_TIMEOUT_S = float(os.environ.get("HTTP_TIMEOUT_S", 10.0))
RATE_LIMIT_MAX_TRIES = int(os.environ.get("RATE_LIMIT_MAX_TRIES", 3))
RATE_LIMIT_MAX_WAIT_S = int(os.environ.get("RATE_LIMIT_MAX_WAIT_S", 60))

# Logging
DEFAULT_LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
