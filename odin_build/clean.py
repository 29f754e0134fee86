"""
Remove the previous build output before compiling.

Cleaning is best effort: a missing output directory is a no-op, and any other
filesystem error is reported without stopping the build.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from odin_build.shared import BuildContext


def remove_path(path: Path) -> None:
    """Recursively remove ``path``; a missing path is not an error."""
    if path.is_dir() and not path.is_symlink():
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            pass
    else:
        path.unlink(missing_ok=True)


def delete_previous_build(dist: str | Path, ctx: BuildContext) -> bool:
    """Delete ``<cwd>/<dist>``. Returns False if removal failed."""
    log = ctx.logger("CLEAN")
    log.blank()
    log.info("Deleting previous build...")

    target = ctx.resolve(dist)
    ctx.spinner.start("Deleting previous build...")
    log.debug(f"Removing: {target}")
    try:
        remove_path(target)
    except OSError as e:
        ctx.spinner.fail("Previous build delete failed")
        log.error(f"{e.strerror or e}: {e.filename or target}")
        return False

    ctx.spinner.succeed("Previous build deleted")
    return True
