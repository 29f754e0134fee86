from pathlib import Path

import pytest

from odin_build.shared import BuildContext


@pytest.fixture
def ctx(tmp_path: Path) -> BuildContext:
    return BuildContext(cwd=tmp_path)


@pytest.fixture
def debug_ctx(tmp_path: Path) -> BuildContext:
    return BuildContext(cwd=tmp_path, debug=True)

