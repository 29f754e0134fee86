"""Copy auxiliary files (README, package manifests, ...) into the build output."""

from __future__ import annotations

import shutil
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from odin_build.shared import BuildContext

MAX_WORKERS = 8


@dataclass
class CopyResult:
    """Outcome of copying a single file."""

    name: str
    source: Path
    destination: Path
    error: OSError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def copy_file(source: Path, destination: Path) -> None:
    """Copy file contents byte for byte; overwrites an existing destination."""
    shutil.copyfile(source, destination)


def _describe(error: OSError) -> str:
    return error.strerror or str(error)


def copy_files(
    files: Sequence[str],
    source: str | Path,
    destination: str | Path,
    ctx: BuildContext,
) -> list[CopyResult]:
    """Copy ``files`` from ``<cwd>/<source>`` to ``<cwd>/<destination>``.

    Every copy is attempted even if some fail. Results are returned in the
    order of ``files``; failed entries carry their error.
    """
    log = ctx.logger("COPY")
    log.blank()
    if not files:
        log.info("No files to copy")
        return []

    log.debug("Copying files:", ", ".join(files))
    src = ctx.resolve(source)
    dist = ctx.resolve(destination)
    log.info(f"Copying files from {source} to {destination}")

    results = [CopyResult(name, src / name, dist / name) for name in files]
    ctx.spinner.start(f"Copying {len(results)} file(s)...")
    with ThreadPoolExecutor(max_workers=min(MAX_WORKERS, len(results))) as executor:
        futures = {
            executor.submit(copy_file, result.source, result.destination): result
            for result in results
        }
        for future in as_completed(futures):
            result = futures[future]
            try:
                future.result()
            except OSError as e:
                result.error = e
                ctx.spinner.fail(f"{result.name} copy failed")
                log.error(f"{result.name}: {_describe(e)}")
            else:
                ctx.spinner.succeed(f"{result.name} copied")

    failed = [r for r in results if not r.ok]
    if failed:
        log.error(f"{len(failed)} of {len(results)} file(s) failed to copy")
    return results
