"""odin-build: per-environment build profiles for TypeScript projects."""

__title__ = "odin-build"
__version__ = "1.0.0"
