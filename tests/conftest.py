from __future__ import annotations

import shutil
from pathlib import Path

import pytest

requires_tools = pytest.mark.skipif(
    any(shutil.which(tool) is None for tool in ("find", "wc", "diff")),
    reason="find, wc and diff are required",
)


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create ``files`` (relative path -> content) under ``root``."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def source_trees(tmp_path: Path) -> tuple[Path, Path]:
    old = write_tree(tmp_path / "old", {"a.c": "1\n2\n3\n"})
    new = write_tree(tmp_path / "new", {"a.c": "1\nX\n3\n4\n", "b.c": "x\ny\n"})
    return old, new
