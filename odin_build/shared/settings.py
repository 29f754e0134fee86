"""Build settings and the loader for ``<name>.<buildType>.json`` files."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping

from .errors import SettingsError

if TYPE_CHECKING:
    from .context import BuildContext

DEFAULT_SRC = "src"
DEFAULT_DIST = "dist"


class BuildType(str, Enum):
    DEV = "dev"
    PROD = "prod"

    @classmethod
    def parse(cls, token: str) -> BuildType:
        """Map a command-line token to a build type; empty means dev."""
        if not token:
            return cls.DEV
        try:
            return cls(token.lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise SettingsError(
                f"Unknown build type '{token}' (expected one of: {choices})"
            ) from None


@dataclass(frozen=True)
class Settings:
    """Per-environment build profile, read-only once loaded."""

    build_type: BuildType = BuildType.DEV
    src: str = DEFAULT_SRC
    dist: str = DEFAULT_DIST
    files: tuple[str, ...] = ()
    explicit_params: bool = False
    npx: bool = False

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        build_type: BuildType = BuildType.DEV,
    ) -> Settings:
        """Build settings from a parsed JSON object.

        Unknown keys are ignored; missing or null keys take the defaults.
        """

        def get(key: str, default: Any) -> Any:
            value = data.get(key)
            return default if value is None else value

        return cls(
            build_type=build_type,
            src=str(get("src", DEFAULT_SRC)),
            dist=str(get("dist", DEFAULT_DIST)),
            files=tuple(str(name) for name in get("files", ())),
            explicit_params=bool(get("explicitParams", False)),
            npx=bool(get("npx", False)),
        )

    def src_dir(self, cwd: Path) -> Path:
        return cwd / self.src

    def dist_dir(self, cwd: Path) -> Path:
        return cwd / self.dist


def settings_path(cwd: Path, base_filename: str, build_type: BuildType) -> Path:
    """Return ``<cwd>/<base_filename>.<build_type>.json``."""
    return cwd / f"{base_filename}.{build_type.value}.json"


def read_settings_file(path: Path, build_type: BuildType = BuildType.DEV) -> Settings:
    """Read and parse a settings file.

    Raises:
        SettingsError: If the file cannot be read, is not valid JSON,
            its root is not an object, or a field has the wrong type.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SettingsError(f"Failed to read settings file: {e.strerror or e}", path) from e
    except UnicodeDecodeError as e:
        raise SettingsError(f"Settings file is not valid UTF-8: {e.reason}", path) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise SettingsError(f"Invalid JSON: {e}", path) from e

    if not isinstance(data, dict):
        raise SettingsError("Settings root must be an object", path)

    try:
        return Settings.from_dict(data, build_type)
    except (TypeError, ValueError) as e:
        raise SettingsError(f"Invalid settings value: {e}", path) from e


def load_settings(build_type: BuildType, ctx: BuildContext) -> Settings | None:
    """Locate and load the settings for ``build_type``.

    Never raises: failures are reported and ``None`` is returned.
    """
    log = ctx.logger("SETUP")
    log.blank()
    log.info("Getting settings file...")
    log.debug("Getting settings file ->", build_type.value)

    path = settings_path(ctx.cwd, ctx.settings_filename, build_type)
    ctx.spinner.start("Getting settings file...")
    try:
        settings = read_settings_file(path, build_type)
    except SettingsError as e:
        ctx.spinner.fail("Settings file not found")
        log.error(e.message)
        return None

    ctx.spinner.succeed("Settings file found")
    log.debug(f"Loaded {path.name}: {settings}")
    return settings
