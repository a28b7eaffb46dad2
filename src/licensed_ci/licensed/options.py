"""Argument building for ``licensed`` subcommands."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LicensedOptions:
    """Options shared by ``licensed cache``, ``status`` and ``env``."""

    config_file: str
    sources: list[str] = field(default_factory=list)
    format: str = ""

    @property
    def cache_options(self) -> list[str]:
        options = ["-c", self.config_file]
        for source in self.sources:
            options.extend(["--sources", source])
        if self.format:
            options.extend(["--format", self.format])
        return options

    @property
    def status_options(self) -> list[str]:
        return self.cache_options

    @property
    def env_options(self) -> list[str]:
        # `licensed env` output is always requested as JSON
        return ["--format", "json", "-c", self.config_file]
