"""Entrypoint for the licensed-ci action.

Reads the action inputs and event context, configures the git remote used
for pushes and runs the selected workflow.  Any error fails the step with an
``::error::`` annotation and a non-zero exit code.
"""

from __future__ import annotations

import logging
import sys

from .config import Config
from .constants import DEFAULT_LOG_LEVEL
from .context import ActionContext
from .git import configure_git
from .runner import CommandRunner
from .telemetry import set_failed
from .workflows import WorkflowEnv, get_workflow

logger = logging.getLogger(__name__)


def run(config: Config, context: ActionContext, runner: CommandRunner) -> None:
    """Run the workflow named by the ``workflow`` input."""
    workflow = get_workflow(config.workflow)
    configure_git(runner, config, context)

    logger.info("Running %s workflow", config.workflow)
    workflow(WorkflowEnv(config=config, context=context, runner=runner))


def main() -> int:
    logging.basicConfig(
        level=getattr(logging, DEFAULT_LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = Config.load_from_env()
        logging.getLogger().setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
        context = ActionContext.load_from_env()
        runner = CommandRunner(secrets=config.secrets)
        run(config, context, runner)
    except Exception as exc:
        logger.debug("licensed-ci failed", exc_info=True)
        set_failed(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
