"""
Pytest Configuration and Fixtures

Author: Kataify maintainers | 2026-10-18
"""

import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from kataify_core import InMemoryFileAccess  # noqa: E402


SOLUTION_SOURCE = """describe('sum', () => {
  it('adds two numbers', () => {
    ////const sum = undefined;
    const sum = 1 + 2;
    assert.equal(sum, 3);
  });
});
"""

KATA_SOURCE = """describe('sum', () => {
  it('adds two numbers', () => {
    const sum = undefined;
    assert.equal(sum, 3);
  });
});
"""


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def solutions_tree(temp_dir: Path) -> Path:
    """Create a small tree of annotated solution files."""
    root = temp_dir / "solutions"
    (root / "array").mkdir(parents=True)
    (root / "node_modules" / "lib").mkdir(parents=True)

    (root / "sum.spec.js").write_text(SOLUTION_SOURCE)
    (root / "array" / "from.spec.js").write_text("////const arr = [];\nconst arr = Array.from('ab');\n")
    (root / "array" / "README.md").write_text("# Arrays\n")
    (root / "node_modules" / "lib" / "dep.spec.js").write_text("////x\ny\n")

    return root


@pytest.fixture
def memory_files() -> InMemoryFileAccess:
    """In-memory store with one solution file."""
    return InMemoryFileAccess({"/src/sum.spec.js": SOLUTION_SOURCE})


@pytest.fixture
def solution_source() -> str:
    return SOLUTION_SOURCE


@pytest.fixture
def kata_source() -> str:
    return KATA_SOURCE
