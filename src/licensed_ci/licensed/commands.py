"""``licensed`` command invocations.

The ``command`` input may contain several words (``bundle exec licensed``),
so it is split with ``shlex`` and the subcommand arguments are appended.
"""

from __future__ import annotations

import json
import logging
import shlex
import shutil
from pathlib import Path

from ..config import Config, InputError
from ..runner import CommandRunner
from .options import LicensedOptions

logger = logging.getLogger(__name__)

DEFAULT_CACHE_PATHS = ["."]


def resolve_command(config: Config) -> tuple[list[str], LicensedOptions]:
    """Validate the ``command`` and ``config_file`` inputs.

    Raises `FileNotFoundError` when the executable cannot be found on PATH or
    the configuration file does not exist.
    """
    try:
        argv = shlex.split(config.command)
    except ValueError as exc:
        raise InputError(f"Unable to parse command '{config.command}': {exc}") from exc
    if not argv:
        raise InputError("Input required and not supplied: command")

    if shutil.which(argv[0]) is None:
        raise FileNotFoundError(f"Unable to locate executable file: {argv[0]}")

    if not Path(config.config_file).exists():
        raise FileNotFoundError(f"Configuration file does not exist: {config.config_file}")

    options = LicensedOptions(config.config_file, list(config.sources), config.format)
    return argv, options


def check_status(runner: CommandRunner, command: list[str], options: LicensedOptions) -> dict[str, object]:
    """Run ``licensed status`` and report whether cached metadata is valid."""
    result = runner.run([*command, "status", *options.status_options], check=False)
    return {"success": result["exit_code"] == 0, "log": result["stdout"]}


def cache(runner: CommandRunner, command: list[str], options: LicensedOptions) -> None:
    runner.run([*command, "cache", *options.cache_options])


def get_cache_paths(runner: CommandRunner, command: list[str], options: LicensedOptions) -> list[str]:
    """Return the cache paths of every app configured for ``licensed``.

    Falls back to the repository root when ``licensed env`` is unavailable
    or does not print a JSON object.
    """
    result = runner.run([*command, "env", *options.env_options], check=False, quiet=True)
    output = str(result["stdout"]).strip()
    if result["exit_code"] != 0 or not output:
        logger.info("licensed env unavailable, using default cache paths %s", DEFAULT_CACHE_PATHS)
        return list(DEFAULT_CACHE_PATHS)

    try:
        env = json.loads(output)
    except ValueError as exc:
        logger.warning("Unable to parse licensed env output, using default cache paths: %s", exc)
        return list(DEFAULT_CACHE_PATHS)
    if not isinstance(env, dict):
        logger.warning("Unexpected licensed env output, using default cache paths")
        return list(DEFAULT_CACHE_PATHS)

    cache_paths = [
        app["cache_path"] for app in env.get("apps") or [] if isinstance(app, dict) and app.get("cache_path")
    ]
    return cache_paths or list(DEFAULT_CACHE_PATHS)
