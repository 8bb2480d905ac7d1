"""Tests for single-file read-through access."""

import pytest
from sourcedir.errors import ReadFailure, WrongEntryKind
from sourcedir.handles import InMemoryDirectoryHandle, LegacyFileEntry, LocalFileEntry
from sourcedir.single_file import FileHandle


@pytest.fixture
def store():
    return InMemoryDirectoryHandle("ai", {"main.rs": "fn main() {}"})


class TestFileHandleShapes:
    """Both capability shapes produce the same text."""

    async def test_modern_entry(self, store):
        assert await FileHandle(store.file_entry("main.rs")).read() == "fn main() {}"

    async def test_legacy_entry(self, store):
        assert await FileHandle(store.legacy_entry("main.rs")).read() == "fn main() {}"

    async def test_local_shapes_agree(self, tmp_path):
        path = tmp_path / "main.rs"
        path.write_text("fn main() { println!(\"hi\") }")

        modern = await FileHandle(LocalFileEntry(path)).read()
        legacy = await FileHandle(LegacyFileEntry(path)).read()

        assert modern == legacy == "fn main() { println!(\"hi\") }"

    def test_unknown_shape(self):
        class Folder:
            kind = "directory"
            name = "src"

        with pytest.raises(WrongEntryKind):
            FileHandle(Folder())


class TestFileHandleReads:
    async def test_every_read_hits_storage(self, store):
        handle = FileHandle(store.file_entry("main.rs"))

        await handle.read()
        store.set_file("main.rs", "fn main() { loop {} }", last_modified=1_700_000_000_000)
        text = await handle.read()

        # Same timestamp, still re-read: nothing is cached
        assert text == "fn main() { loop {} }"
        assert store.read_counts["main.rs"] == 2

    async def test_missing_file_modern(self, store):
        store.remove_file("main.rs")

        with pytest.raises(ReadFailure) as exc_info:
            await FileHandle(store.file_entry("main.rs")).read()

        assert exc_info.value.name == "main.rs"

    async def test_missing_file_legacy(self, store):
        store.remove_file("main.rs")

        with pytest.raises(ReadFailure):
            await FileHandle(store.legacy_entry("main.rs")).read()

    async def test_missing_local_file_legacy(self, tmp_path):
        with pytest.raises(ReadFailure):
            await FileHandle(LegacyFileEntry(tmp_path / "gone.rs")).read()
