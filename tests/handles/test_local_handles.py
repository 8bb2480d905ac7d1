"""Tests for local filesystem capabilities."""

import os

import pytest
from sourcedir.handles import (
    DirectoryHandle,
    FileEntry,
    FileObject,
    LegacyEntry,
    LegacyFileEntry,
    LocalDirectoryHandle,
    LocalFileEntry,
)


@pytest.fixture
def sample_dir(tmp_path):
    """Create a directory with files and a subdirectory."""
    directory = tmp_path / "src"
    directory.mkdir()
    (directory / "main.rs").write_text("fn main() {}")
    (directory / "sub").mkdir()
    millis = 1_650_000_000_123
    os.utime(directory / "main.rs", ns=(millis * 1_000_000, millis * 1_000_000))
    return directory


class TestLocalDirectoryHandle:
    def test_protocol_compliance(self, sample_dir):
        assert isinstance(LocalDirectoryHandle(sample_dir), DirectoryHandle)

    def test_rejects_files(self, sample_dir):
        with pytest.raises(ValueError):
            LocalDirectoryHandle(sample_dir / "main.rs")

    def test_name(self, sample_dir):
        assert LocalDirectoryHandle(sample_dir).name == "src"

    async def test_entries_are_direct_children(self, sample_dir):
        handle = LocalDirectoryHandle(sample_dir)

        children = {entry.name: entry.kind async for entry in handle.entries()}

        assert children == {"main.rs": "file", "sub": "directory"}

    async def test_broken_symlink_is_skipped(self, sample_dir):
        (sample_dir / "dangling.rs").symlink_to(sample_dir / "missing.rs")
        handle = LocalDirectoryHandle(sample_dir)

        names = [entry.name async for entry in handle.entries()]

        assert "dangling.rs" not in names


class TestLocalFileEntry:
    def test_protocol_compliance(self, sample_dir):
        assert isinstance(LocalFileEntry(sample_dir / "main.rs"), FileEntry)

    async def test_get_file_captures_metadata(self, sample_dir):
        file = await LocalFileEntry(sample_dir / "main.rs").get_file()

        assert isinstance(file, FileObject)
        assert file.name == "main.rs"
        assert file.last_modified == 1_650_000_000_123
        assert file.size == len("fn main() {}")

    async def test_contents_read_at_call_time(self, sample_dir):
        file = await LocalFileEntry(sample_dir / "main.rs").get_file()
        (sample_dir / "main.rs").write_text("fn main() { loop {} }")

        assert await file.text() == "fn main() { loop {} }"

    async def test_missing_file_raises_oserror(self, sample_dir):
        with pytest.raises(FileNotFoundError):
            await LocalFileEntry(sample_dir / "gone.rs").get_file()


class TestLegacyFileEntry:
    def test_protocol_compliance(self, sample_dir):
        entry = LegacyFileEntry(sample_dir / "main.rs")
        assert isinstance(entry, LegacyEntry)
        assert not isinstance(entry, FileEntry)

    def test_callback_receives_file(self, sample_dir):
        received = []

        LegacyFileEntry(sample_dir / "main.rs").file(received.append)

        assert [f.name for f in received] == ["main.rs"]
        assert received[0].last_modified == 1_650_000_000_123

    def test_error_callback(self, sample_dir):
        errors = []

        LegacyFileEntry(sample_dir / "gone.rs").file(lambda f: None, errors.append)

        assert len(errors) == 1
        assert isinstance(errors[0], FileNotFoundError)

    def test_raises_without_error_callback(self, sample_dir):
        with pytest.raises(FileNotFoundError):
            LegacyFileEntry(sample_dir / "gone.rs").file(lambda f: None)
