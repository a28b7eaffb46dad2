"""Tests for ``licensed`` command invocations."""

from __future__ import annotations

import json

import pytest

from licensed_ci.config import InputError
from licensed_ci.licensed import (
    LicensedOptions,
    cache,
    check_status,
    get_cache_paths,
    resolve_command,
)
from licensed_ci.runner import CommandError


class TestOptions:
    def test_cache_options(self) -> None:
        options = LicensedOptions(".licensed.yml", ["bundler", "npm"], "yaml")

        assert options.cache_options == [
            "-c",
            ".licensed.yml",
            "--sources",
            "bundler",
            "--sources",
            "npm",
            "--format",
            "yaml",
        ]
        assert options.status_options == options.cache_options

    def test_env_options_request_json(self) -> None:
        options = LicensedOptions(".licensed.yml", format="yaml")

        assert options.env_options == ["--format", "json", "-c", ".licensed.yml"]


class TestResolveCommand:
    def test_splits_command(self, mocker, config_factory, tmp_path) -> None:
        config_file = tmp_path / ".licensed.yml"
        config_file.write_text("sources: {}\n", encoding="utf-8")
        which = mocker.patch("licensed_ci.licensed.commands.shutil.which", return_value="/usr/bin/bundle")
        config = config_factory(
            command="bundle exec licensed", config_file=str(config_file), sources=["bundler"]
        )

        command, options = resolve_command(config)

        which.assert_called_once_with("bundle")
        assert command == ["bundle", "exec", "licensed"]
        assert options == LicensedOptions(str(config_file), ["bundler"], "")

    def test_missing_executable(self, mocker, config_factory) -> None:
        mocker.patch("licensed_ci.licensed.commands.shutil.which", return_value=None)

        with pytest.raises(FileNotFoundError, match="Unable to locate executable file: licensed"):
            resolve_command(config_factory())

    def test_missing_configuration_file(self, mocker, config_factory, tmp_path) -> None:
        mocker.patch("licensed_ci.licensed.commands.shutil.which", return_value="/usr/bin/licensed")
        missing = tmp_path / "missing.yml"

        with pytest.raises(FileNotFoundError, match="Configuration file does not exist"):
            resolve_command(config_factory(config_file=str(missing)))

    def test_unparseable_command(self, config_factory) -> None:
        with pytest.raises(InputError, match="Unable to parse command"):
            resolve_command(config_factory(command="licensed 'unterminated"))


class TestCheckStatus:
    def test_success(self, runner, licensed_options) -> None:
        runner.mock(["licensed", "status"], 0, stdout="ok")

        assert check_status(runner, ["licensed"], licensed_options) == {"success": True, "log": "ok"}

    def test_failure_is_returned(self, runner, licensed_options) -> None:
        runner.mock(["licensed", "status"], 1, stdout="missing license")

        result = check_status(runner, ["licensed"], licensed_options)

        assert result == {"success": False, "log": "missing license"}


def test_cache_raises_on_failure(runner, licensed_options) -> None:
    runner.mock(["bundle", "exec", "licensed", "cache"], 1)

    with pytest.raises(CommandError, match="The process 'bundle' failed with exit code 1"):
        cache(runner, ["bundle", "exec", "licensed"], licensed_options)


class TestGetCachePaths:
    def test_reads_app_cache_paths(self, runner, licensed_options) -> None:
        env = {"apps": [{"name": "a", "cache_path": "a/licenses"}, {"name": "b", "cache_path": "b/licenses"}]}
        runner.mock(["licensed", "env"], 0, stdout=json.dumps(env))

        assert get_cache_paths(runner, ["licensed"], licensed_options) == ["a/licenses", "b/licenses"]
        assert runner.calls == [["licensed", "env", "--format", "json", "-c", ".licensed.yml"]]

    @pytest.mark.parametrize(
        ("exit_code", "stdout"),
        [
            (1, ""),
            (0, ""),
            (0, json.dumps({"apps": []})),
            (0, "licensed: unknown command env"),
            (0, json.dumps(["a/licenses"])),
            (0, json.dumps({"apps": ["a/licenses"]})),
        ],
    )
    def test_falls_back_to_repository_root(self, runner, licensed_options, exit_code, stdout) -> None:
        runner.mock(["licensed", "env"], exit_code, stdout=stdout)

        assert get_cache_paths(runner, ["licensed"], licensed_options) == ["."]
