#!/usr/bin/env python3
"""
Build a TypeScript project from a per-environment settings profile.

Usage:
    python -m odin_build <buildType> [--debug]

Reads <SETTINGS_FILENAME>.<buildType>.json (default base name "odin") from the
current directory, deletes the previous build, runs tsc and copies the listed
files into the output directory.

Examples:
    python -m odin_build dev
    python -m odin_build prod --debug
    SETTINGS_FILENAME=myapp python -m odin_build prod
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from odin_build import __title__, __version__
from odin_build.pipeline import build
from odin_build.shared import (
    BuildContext,
    BuildError,
    BuildType,
    load_settings,
    settings_path,
)
from odin_build.shared.context import load_environment
from odin_build.shared.reporter import stdout_console

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=__title__,
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "build_type",
        nargs="?",
        metavar="buildType",
        help="Settings profile to build: dev or prod (empty means dev)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show debug output and pass diagnostic flags to the compiler",
    )
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="Do not clear the console before building",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def clear_console() -> None:
    """Clear the terminal; does nothing when output is redirected."""
    if stdout_console.is_terminal:
        stdout_console.clear()


def main(argv: Sequence[str] | None = None) -> int:
    args = create_parser().parse_args(argv)

    load_environment()
    ctx = BuildContext.from_environment(debug=args.debug)
    log = ctx.logger("ODIN")

    if not args.no_clear:
        clear_console()
    log.info(f"Starting {__title__} v{__version__}...")

    try:
        if args.build_type is None:
            log.error("No build type provided.")
            return EXIT_FAILURE

        if ctx.debug:
            ctx.logger("DEBUGGER").info("Debug mode enabled")

        build_type = BuildType.parse(args.build_type)
        settings = load_settings(build_type, ctx)
        if settings is None:
            path = settings_path(ctx.cwd, ctx.settings_filename, build_type)
            log.error("No settings file found", f"({path.name})")
            return EXIT_FAILURE

        build(settings, ctx)
    except BuildError as e:
        log.error(e.message)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        log.error("Build interrupted.")
        return EXIT_INTERRUPTED
    except Exception as e:
        log.error(f"Unexpected error: {e}")
        return EXIT_FAILURE
    finally:
        ctx.spinner.stop()

    log.blank()
    log.info("Build completed successfully")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
