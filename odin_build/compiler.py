"""
Invoke the TypeScript compiler for a build profile.

The command is ``tsc`` (or ``npx tsc``), with ``--project <src>/tsconfig.json``
when the profile asks for explicit parameters and extra diagnostic listings in
debug mode. A run only counts as successful when the compiler exits 0 and
writes nothing to stderr.
"""

from __future__ import annotations

import shutil
import subprocess
import sys
from pathlib import Path

from odin_build.shared import BuildContext, CompileError, Settings

COMPILER = "tsc"
PACKAGE_RUNNER = "npx"
PROJECT_FILE = "tsconfig.json"
DEBUG_FLAGS: tuple[str, ...] = ("--diagnostics", "--listFiles", "--listEmittedFiles")


def build_compile_command(
    *,
    npx: bool = False,
    explicit_params: bool = False,
    src: str | Path = "src",
    debug: bool = False,
) -> list[str]:
    """Build the compiler argument list."""
    command = [PACKAGE_RUNNER, COMPILER] if npx else [COMPILER]
    if debug:
        command.extend(DEBUG_FLAGS)
    if explicit_params:
        command.extend(["--project", str(Path(src) / PROJECT_FILE)])
    return command


def run_command(command: list[str], cwd: Path) -> subprocess.CompletedProcess:
    """Run a command capturing its output; never raises on a non-zero exit."""
    # On Windows, resolve the executable path to handle .cmd/.bat files
    resolved_cmd = list(command)
    if sys.platform == "win32" and command:
        resolved = shutil.which(command[0])
        if resolved:
            resolved_cmd[0] = resolved
    try:
        return subprocess.run(
            resolved_cmd,
            cwd=cwd,
            check=False,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as e:
        raise CompileError(f"Command not found: {e.filename or command[0]}") from e


def compile_project(settings: Settings, ctx: BuildContext) -> str:
    """Compile the project and return the compiler's stdout.

    Raises:
        CompileError: If the compiler cannot be started, exits non-zero,
            or reports anything on stderr.
    """
    log = ctx.logger("BUILD")
    log.blank()
    log.info("Building typescript...")

    command = build_compile_command(
        npx=settings.npx,
        explicit_params=settings.explicit_params,
        src=settings.src,
        debug=ctx.debug,
    )
    log.debug(f"$ {' '.join(command)}")

    ctx.spinner.start("Building typescript...")
    try:
        result = run_command(command, ctx.cwd)
    except CompileError as e:
        ctx.spinner.fail("Typescript build failed")
        log.error("Details:", e.message)
        raise

    stderr = (result.stderr or "").strip()
    if result.returncode != 0 or stderr:
        ctx.spinner.fail("Typescript build failed")
        # tsc reports type errors on stdout
        details = stderr or (result.stdout or "").strip() or f"exit code {result.returncode}"
        log.error("Details:", details)
        if result.returncode != 0:
            message = f"Compiler exited with code {result.returncode}"
        else:
            message = "Compiler reported errors on stderr"
        raise CompileError(
            message,
            returncode=result.returncode,
            stderr=stderr,
        )

    ctx.spinner.succeed("Typescript built successfully")
    if result.stdout:
        log.debug(result.stdout.rstrip())
    return result.stdout or ""
