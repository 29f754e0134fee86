"""Run configuration captured once at startup."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .reporter import Reporter, Spinner

SETTINGS_FILENAME_ENV = "SETTINGS_FILENAME"
DEFAULT_SETTINGS_FILENAME = "odin"


def load_environment() -> None:
    """Populate os.environ from a .env file in the working directory, if any."""
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path, override=False)


@dataclass(frozen=True)
class BuildContext:
    """Everything a stage needs besides the settings themselves.

    The working directory is fixed here and every relative path in the
    settings is resolved against it.
    """

    cwd: Path
    debug: bool = False
    settings_filename: str = DEFAULT_SETTINGS_FILENAME
    spinner: Spinner = field(default_factory=Spinner, compare=False, repr=False)

    @classmethod
    def from_environment(cls, *, debug: bool = False, cwd: Path | None = None) -> BuildContext:
        return cls(
            cwd=(cwd or Path.cwd()).resolve(),
            debug=debug,
            settings_filename=os.environ.get(SETTINGS_FILENAME_ENV) or DEFAULT_SETTINGS_FILENAME,
        )

    def logger(self, origin: str) -> Reporter:
        return Reporter(origin, self.debug)

    def resolve(self, relative: str | Path) -> Path:
        return self.cwd / relative
