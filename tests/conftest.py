"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest


@pytest.fixture
def notes_dir(tmp_path: Path) -> Path:
    """A small Markdown tree: two top-level notes, one nested, one non-md."""
    root = tmp_path / "notes"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "index.md").write_text("# Index\n\n- [[Daily]]\n", encoding="utf-8")
    (root / "todo.md").write_text("- [ ] write\n- [x] read\n", encoding="utf-8")
    (root / "readme.txt").write_text("# not markdown\n", encoding="utf-8")
    (root / "sub" / "nested.md").write_text("## Nested\n", encoding="utf-8")
    (root / "sub" / "deeper" / "leaf.md").write_text("plain\n", encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def _reset_root_logger():
    """Undo handler changes made by CLI invocations between tests."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
