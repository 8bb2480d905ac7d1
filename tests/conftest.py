"""Pytest configuration and shared fixtures."""

import os
import pytest
from pathlib import Path
from sourcedir.handles import InMemoryDirectoryHandle

T1 = 1_700_000_000_000
T2 = 1_700_000_060_000


def set_mtime(path: Path, millis: int) -> None:
    """Pin a file's modification time to ``millis`` epoch milliseconds."""
    ns = millis * 1_000_000
    os.utime(path, ns=(ns, ns))


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Create a directory with two Rust files, one other file and a subdirectory."""
    directory = tmp_path / "ai"
    directory.mkdir()

    (directory / "a.rs").write_text("fn main(){}")
    (directory / "b.rs").write_text("// empty")
    (directory / "notes.txt").write_text("not rust")
    (directory / "nested").mkdir()
    (directory / "nested" / "c.rs").write_text("fn nested(){}")

    set_mtime(directory / "a.rs", T1)
    set_mtime(directory / "b.rs", T1)

    return directory


@pytest.fixture
def memory_dir() -> InMemoryDirectoryHandle:
    """In-memory directory with two Rust files at the same timestamp."""
    return InMemoryDirectoryHandle("ai", {
        "a.rs": "fn main(){}",
        "b.rs": "// empty",
    })


@pytest.fixture
def notices() -> list[str]:
    """Collects notices; pass ``notices.append`` as a session's notifier."""
    return []
