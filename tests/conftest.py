"""Pytest configuration and fixtures for licensed-ci tests.

This module provides a FakeRunner that records commands and returns scripted
exit codes and output, so workflows can be exercised without git or licensed
installed.

IMPORTANT: Environment variables must be set BEFORE importing licensed_ci
modules, as constants are read from the environment at import time.
"""

from __future__ import annotations

import os

# Set environment variables BEFORE any licensed_ci imports
os.environ.setdefault("RATE_LIMIT_MAX_TRIES", "3")
os.environ.setdefault("LOG_LEVEL", "INFO")

from collections.abc import Sequence
from pathlib import Path

import pytest

from licensed_ci.config import Config
from licensed_ci.context import ActionContext
from licensed_ci.licensed import LicensedOptions
from licensed_ci.runner import CommandError, CommandRunner
from licensed_ci.workflows import WorkflowEnv

TOKEN = "test-github-token"


class FakeRunner(CommandRunner):
    """A runner that never spawns processes.

    Commands are matched against mocked argv prefixes, most recently added
    first.  Unmatched commands succeed with no output.
    """

    def __init__(self, cwd: str | None = None) -> None:
        super().__init__(cwd=cwd, secrets=[TOKEN])
        self.calls: list[list[str]] = []
        self._mocks: list[dict[str, object]] = []

    def mock(
        self,
        prefix: Sequence[str],
        exit_code: int = 0,
        stdout: str = "",
        times: int | None = None,
    ) -> None:
        """Script the result of commands starting with ``prefix``.

        With ``times`` the mock is dropped after that many matches.
        """
        self._mocks.insert(
            0, {"prefix": list(prefix), "exit_code": exit_code, "stdout": stdout, "times": times}
        )

    def run(self, argv: Sequence[str], *, check: bool = True, quiet: bool = False) -> dict[str, object]:
        argv = list(argv)
        self.calls.append(argv)

        exit_code, stdout = 0, ""
        for mock in self._mocks:
            prefix = mock["prefix"]
            if argv[: len(prefix)] == prefix:
                exit_code, stdout = int(mock["exit_code"]), str(mock["stdout"])
                if mock["times"] is not None:
                    mock["times"] -= 1
                    if mock["times"] == 0:
                        self._mocks.remove(mock)
                break

        if check and exit_code != 0:
            raise CommandError(argv, exit_code)

        return {
            "exit_code": exit_code,
            "stdout": stdout,
            "stderr": "",
            "duration_ms": 0,
            "timed_out": False,
        }

    def called(self, argv: Sequence[str]) -> bool:
        return list(argv) in self.calls

    def calls_starting_with(self, *prefix: str) -> list[list[str]]:
        return [call for call in self.calls if call[: len(prefix)] == list(prefix)]


def make_config(**overrides: object) -> Config:
    values: dict[str, object] = {
        "workflow": "push",
        "github_token": TOKEN,
        "command": "licensed",
        "config_file": ".licensed.yml",
        "user_name": "licensed-ci",
        "user_email": "licensed-ci@users.noreply.github.com",
        "commit_message": "Auto-update license files",
    }
    values.update(overrides)
    return Config(**values)  # type: ignore[arg-type]


@pytest.fixture
def runner(tmp_path: Path) -> FakeRunner:
    return FakeRunner(cwd=str(tmp_path))


@pytest.fixture
def config() -> Config:
    return make_config()


@pytest.fixture
def context() -> ActionContext:
    return ActionContext(
        repository="owner/repo",
        actor="actor",
        event_name="push",
        ref="refs/heads/branch",
        payload={"ref": "refs/heads/branch", "sender": {"login": "actor", "type": "User"}},
    )


@pytest.fixture
def workflow_env(config: Config, context: ActionContext, runner: FakeRunner) -> WorkflowEnv:
    return WorkflowEnv(config=config, context=context, runner=runner)


@pytest.fixture
def licensed_options() -> LicensedOptions:
    return LicensedOptions(".licensed.yml")


@pytest.fixture
def outputs(tmp_path: Path, monkeypatch):
    """Return a callable that reads the step outputs written so far."""
    output_file = tmp_path / "github_output"
    output_file.touch()
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))

    def read() -> dict[str, str]:
        values: dict[str, str] = {}
        for line in output_file.read_text(encoding="utf-8").splitlines():
            if "=" in line:
                name, value = line.split("=", 1)
                values[name] = value
        return values

    return read


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Clear GitHub Actions variables that would leak in from a CI runner."""
    for name in list(os.environ):
        if name.startswith("INPUT_") or name in {"GITHUB_OUTPUT", "GITHUB_EVENT_PATH"}:
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_factory():
    """Build a `Config` with test defaults, overriding selected inputs."""
    return make_config
