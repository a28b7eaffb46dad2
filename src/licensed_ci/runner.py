"""Subprocess execution for git and licensed commands.

All external tools are run through ``CommandRunner.run`` so command lines are
logged consistently, secrets are redacted from the log, and non-zero exit
codes are either returned to the caller as a signal or raised.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import time
from collections.abc import Iterable, Sequence

from .constants import COMMAND_TIMEOUT_S
from .policy.redaction import redact_secrets

logger = logging.getLogger(__name__)


class CommandError(RuntimeError):
    """Raised when a command exits non-zero and the caller required success."""

    def __init__(self, argv: Sequence[str], exit_code: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.exit_code = exit_code
        self.stderr = stderr
        message = f"The process '{argv[0]}' failed with exit code {exit_code}"
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class CommandRunner:
    """Runs commands in the repository working directory."""

    def __init__(
        self,
        cwd: str | None = None,
        secrets: Iterable[str] = (),
        timeout_s: int = COMMAND_TIMEOUT_S,
    ) -> None:
        self.cwd = cwd
        self.secrets = [s for s in secrets if s]
        self.timeout_s = timeout_s

    def redact(self, text: str) -> str:
        return redact_secrets(text, self.secrets)

    def run(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        quiet: bool = False,
    ) -> dict[str, object]:
        """Run ``argv`` and return its exit code and captured output.

        With ``check=True`` a non-zero exit raises `CommandError`; otherwise
        the exit code is returned for the caller to interpret.  ``quiet``
        keeps stdout out of the log, e.g. for machine-readable output.
        """
        logger.info("[command] %s", self.redact(shlex.join(argv)))

        timed_out = False
        start_ns = time.time_ns()
        try:
            proc = subprocess.run(
                list(argv),
                cwd=self.cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                shell=False,
                timeout=self.timeout_s,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
            stdout = proc.stdout or ""
            stderr = proc.stderr or ""
            exit_code = proc.returncode
        except subprocess.TimeoutExpired:
            timed_out = True
            stdout = ""
            stderr = "Command timed out"
            exit_code = 124

        duration_ms = int((time.time_ns() - start_ns) / 1_000_000)

        if stdout and not quiet:
            logger.info("%s", self.redact(stdout.rstrip()))
        if stderr:
            logger.info("%s", self.redact(stderr.rstrip()))

        if check and exit_code != 0:
            raise CommandError(argv, exit_code, self.redact(stderr))

        return {
            "exit_code": exit_code,
            "stdout": stdout,
            "stderr": stderr,
            "duration_ms": duration_ms,
            "timed_out": timed_out,
        }
