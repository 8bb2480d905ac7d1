"""Tests for the in-memory directory capability."""

import asyncio

import pytest
from sourcedir.handles import DirectoryHandle, FileEntry, InMemoryDirectoryHandle


@pytest.fixture
def handle():
    return InMemoryDirectoryHandle("ai", {"main.rs": "fn main() {}"})


def test_protocol_compliance(handle):
    assert isinstance(handle, DirectoryHandle)
    assert isinstance(handle.file_entry("main.rs"), FileEntry)


def test_set_file_advances_clock(handle):
    first = handle.set_file("a.rs", "1")
    second = handle.set_file("a.rs", "2")

    assert second > first


async def test_counts_metadata_and_reads(handle):
    file = await handle.file_entry("main.rs").get_file()
    await file.read_bytes()
    await file.read_bytes()

    assert handle.metadata_counts["main.rs"] == 1
    assert handle.read_counts["main.rs"] == 2

    handle.reset_counts()
    assert not handle.read_counts and not handle.metadata_counts


async def test_entries_include_subdirectories(handle):
    handle.add_directory("nested")

    kinds = {entry.name: entry.kind async for entry in handle.entries()}

    assert kinds == {"nested": "directory", "main.rs": "file"}


async def test_removed_file_fails_read(handle):
    file = await handle.file_entry("main.rs").get_file()
    handle.remove_file("main.rs")

    with pytest.raises(FileNotFoundError):
        await file.read_bytes()


async def test_failing_reads(handle):
    handle.failing_reads.add("main.rs")
    file = await handle.file_entry("main.rs").get_file()

    with pytest.raises(PermissionError):
        await file.read_bytes()


async def test_legacy_entry_delivers_later(handle):
    received = []
    handle.legacy_entry("main.rs").file(received.append)

    assert received == []
    await asyncio.sleep(0.01)
    assert [f.name for f in received] == ["main.rs"]
