"""
Build pipeline for a single settings profile.

Runs the stages strictly in order:
1. Delete the previous build output (best effort)
2. Compile with tsc
3. Copy auxiliary files into the output directory
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from odin_build.clean import delete_previous_build
from odin_build.compiler import compile_project
from odin_build.copy_files import copy_files
from odin_build.shared import BuildContext, BuildError, CopyError, Settings


@dataclass
class BuildStep:
    """Represents a build step with timing."""

    name: str
    action: Callable[[], object]
    enabled: bool = True


@dataclass
class StepResult:
    name: str
    elapsed: float
    success: bool


def print_summary(results: list[StepResult], total_elapsed: float, ctx: BuildContext) -> None:
    log = ctx.logger("SUMMARY")
    log.blank()
    for result in results:
        status = "[OK]" if result.success else "[FAIL]"
        line = f"{status} {result.name}: {result.elapsed:.2f}s"
        if result.success:
            log.info(line)
        else:
            log.error(line)
    log.debug(f"Total time: {total_elapsed:.2f}s")


def run_build_steps(steps: list[BuildStep], ctx: BuildContext) -> list[StepResult]:
    """Execute build steps in order, stopping at the first BuildError."""
    log = ctx.logger("BUILD")
    total_start = time.perf_counter()
    results: list[StepResult] = []

    for step in steps:
        if not step.enabled:
            continue

        log.debug(f"Step: {step.name}")
        step_start = time.perf_counter()
        try:
            step.action()
        except BuildError:
            results.append(StepResult(step.name, time.perf_counter() - step_start, False))
            print_summary(results, time.perf_counter() - total_start, ctx)
            raise
        results.append(StepResult(step.name, time.perf_counter() - step_start, True))

    print_summary(results, time.perf_counter() - total_start, ctx)
    return results


def copy_step(settings: Settings, ctx: BuildContext) -> None:
    results = copy_files(settings.files, settings.src, settings.dist, ctx)
    failed = [r for r in results if not r.ok]
    if failed:
        raise CopyError(failed)


def build(settings: Settings, ctx: BuildContext) -> list[StepResult]:
    """Clean, compile and copy according to ``settings``.

    Raises:
        CompileError: If compilation fails; nothing is copied.
        CopyError: If any file failed to copy (all copies are still attempted).
    """
    ctx.logger("BUILD").debug("Building...")
    steps = [
        BuildStep("Clean", lambda: delete_previous_build(settings.dist, ctx)),
        BuildStep("Compile", lambda: compile_project(settings, ctx)),
        BuildStep("Copy files", lambda: copy_step(settings, ctx)),
    ]
    return run_build_steps(steps, ctx)
