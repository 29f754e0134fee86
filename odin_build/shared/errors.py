"""Custom exceptions for odin-build."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from odin_build.copy_files import CopyResult


class BuildError(Exception):
    """Base exception for pipeline failures."""

    def __init__(self, message: str, stage: str | None = None) -> None:
        self.stage = stage
        self.message = message
        full_message = f"{message}" if not stage else f"[{stage}] {message}"
        super().__init__(full_message)


class SettingsError(BuildError):
    """Raised when a settings file cannot be read or parsed."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = str(path) if path is not None else None
        if self.path:
            message = f"{message} ({self.path})"
        super().__init__(message, "SETUP")


class CompileError(BuildError):
    """Raised when the compiler exits non-zero or writes to stderr."""

    def __init__(
        self,
        message: str,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message, "BUILD")


class CopyError(BuildError):
    """Raised after the copy stage when one or more files failed to copy."""

    def __init__(self, failures: Sequence[CopyResult]) -> None:
        self.failures = list(failures)
        names = ", ".join(f.name for f in self.failures)
        super().__init__(f"{len(self.failures)} file(s) failed to copy: {names}", "COPY")
