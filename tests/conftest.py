"""Test setup for booktree."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


SAMPLE_SUMMARY = """\
# Summary

[Introduction](README.md)

# Basics

- [Types and Declarations](basics/types.md)
  - [Initialization](basics/initialization.md)
- [Control Flow](control-flow/README.md)
  - [Switch](control-flow/switch.md)

# Abstraction

- [Templates](templates/README.md)
- [Memory](memory/README.md)
"""

SAMPLE_FILES = {
    "README.md": "# A Tour of C++\n\nStart with [types](basics/types.md).\n",
    "basics/types.md": "# Types\n\nSee [initialization](initialization.md#braces).\n",
    "basics/initialization.md": "# Initialization\n\n```cpp\nauto f = [&](int x) { return x; };\n```\n",
    "control-flow/README.md": "# Control Flow\n\nNext: [switch](switch.md).\n",
    "control-flow/switch.md": "# Switch\n",
    "templates/README.md": "# Templates\n\nBack to [memory](../memory/README.md).\n",
    "memory/README.md": "# Memory\n\nSee the [Templates Overview](../templates/README.md) and [cppreference](https://en.cppreference.com).\n",
}


@pytest.fixture
def book(tmp_path: Path) -> Path:
    """A small, fully consistent book checkout."""
    (tmp_path / "SUMMARY.md").write_text(SAMPLE_SUMMARY, encoding="utf-8")
    for relative, content in SAMPLE_FILES.items():
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return tmp_path
