#!/usr/bin/env python3
"""
Build wrapper for projects using odin-build.

This is a convenience wrapper that forwards to the odin_build module.
Run with --help to see available options.

Usage:
    python build.py <buildType> [--debug]
    ./build.py <buildType> [--debug]  (on Unix with execute permission)

Examples:
    python build.py dev
    python build.py prod --debug
"""

import subprocess
import sys


def main() -> int:
    """Forward all arguments to the odin_build module."""
    return subprocess.call([sys.executable, "-m", "odin_build"] + sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
