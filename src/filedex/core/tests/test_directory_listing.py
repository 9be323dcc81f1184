"""Tests for directory listing module."""

import os
import pytest
from pathlib import Path
from filedex.core.directory_listing import DirectoryListing
from filedex.core.types import (
    DirectoryAccessError,
    InvalidArgumentError,
    NotFoundError,
    OutOfScopeError,
)

@pytest.fixture
def data_dir(tmp_path):
    """Create a directory with mixed entries."""
    data = tmp_path / "data"
    data.mkdir()

    (data / "a.js").write_text("module.exports = 1;")
    (data / "b.json").write_text("{}")
    (data / "c.txt").write_text("text")
    (data / "UPPER.JS").write_text("case matters")

    # Subdirectories and their files are never listed
    subdir = data / "nested.js"
    subdir.mkdir()
    (subdir / "d.js").write_text("nested")

    # Symlinks are not regular files
    os.symlink(data / "a.js", data / "link.js")

    return data

@pytest.fixture
def listing(data_dir):
    """Create a listing of .js files."""
    return DirectoryListing(data_dir, {".js"})

def test_relative_directory_rejected():
    """Test that a relative directory cannot be used."""
    with pytest.raises(InvalidArgumentError):
        DirectoryListing("data", {".js"})

    with pytest.raises(ValueError):
        DirectoryListing(os.path.join(".", "data"), {".js"})

def test_directory_is_normalized(data_dir):
    """Test that trailing separators and '..' segments are removed."""
    listing = DirectoryListing(str(data_dir) + os.sep, {".js"})
    assert listing.directory == data_dir

    listing = DirectoryListing(f"{data_dir}/nested.js/..", {".js"})
    assert listing.directory == data_dir
    assert listing.directory.is_absolute()

def test_extensions_copied():
    """Test that the extension set is copied on the way in and out."""
    extensions = {".js"}
    listing = DirectoryListing("/data", extensions)
    extensions.add(".json")
    assert listing.supported_extensions == {".js"}

    listing.supported_extensions.add(".txt")
    assert listing.supported_extensions == {".js"}

@pytest.mark.asyncio
async def test_refresh_listing(listing, data_dir):
    """Test that only direct regular files with a supported extension are listed."""
    assert listing.file_paths == set()

    await listing.refresh_listing()

    assert listing.file_paths == {data_dir / "a.js"}
    assert listing.load_error_map == {}

@pytest.mark.asyncio
async def test_refresh_listing_multiple_extensions(data_dir):
    """Test listing with several extensions."""
    listing = DirectoryListing(data_dir, {".js", ".json"})
    await listing.refresh_listing()

    assert listing.file_paths == {data_dir / "a.js", data_dir / "b.json"}

@pytest.mark.asyncio
async def test_refresh_listing_replaces_snapshot(listing, data_dir):
    """Test that a refresh replaces the previous snapshot."""
    await listing.refresh_listing()
    (data_dir / "a.js").unlink()
    (data_dir / "e.js").write_text("new")

    await listing.refresh_listing()

    assert listing.file_paths == {data_dir / "e.js"}

@pytest.mark.asyncio
async def test_refresh_missing_directory(tmp_path):
    """Test that an unreadable directory is recorded and raised."""
    missing = tmp_path / "missing"
    listing = DirectoryListing(missing, {".js"})

    with pytest.raises(DirectoryAccessError) as exc_info:
        await listing.refresh_listing()

    assert exc_info.value.directory == missing
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)
    assert list(listing.load_error_map) == [missing]
    assert listing.load_error_map[missing] is exc_info.value

@pytest.mark.asyncio
async def test_refresh_not_a_directory(data_dir):
    """Test that a file cannot be used as the directory."""
    listing = DirectoryListing(data_dir / "c.txt", {".js"})

    with pytest.raises(DirectoryAccessError):
        await listing.refresh_listing()

@pytest.mark.asyncio
async def test_refresh_clears_errors(tmp_path):
    """Test that errors from a previous refresh are discarded."""
    directory = tmp_path / "later"
    listing = DirectoryListing(directory, {".js"})

    with pytest.raises(DirectoryAccessError):
        await listing.refresh_listing()
    assert directory in listing.load_error_map

    directory.mkdir()
    await listing.refresh_listing()
    assert listing.load_error_map == {}

def test_resolve(listing, data_dir):
    """Test resolving relative and absolute paths."""
    assert listing.resolve("a.js") == data_dir / "a.js"
    assert listing.resolve("./nested.js/../a.js") == data_dir / "a.js"
    assert listing.resolve(data_dir / "a.js") == data_dir / "a.js"
    assert listing.resolve("/elsewhere/./x.js") == Path("/elsewhere/x.js")
    assert listing.resolve("../x.js") == data_dir.parent / "x.js"

@pytest.mark.parametrize("file", [
    "a.js",
    "../x.js",
    "nested.js/d.js",
    "/elsewhere/x.js",
    "./b/../c/./d.js",
    "",
])
def test_resolve_idempotent(listing, file):
    """Test that resolving twice gives the same path."""
    once = listing.resolve(file)
    assert listing.resolve(once) == once

@pytest.mark.asyncio
async def test_file_location_error_for_listed_files(listing):
    """Test that every listed path is valid right after a refresh."""
    await listing.refresh_listing()

    for path in listing.file_paths:
        assert listing.file_location_error(path) is None
    assert listing.file_location_error("a.js") is None

@pytest.mark.asyncio
async def test_file_location_error_out_of_scope(listing, data_dir):
    """Test paths that are not direct children of the directory."""
    await listing.refresh_listing()

    for file in ["/elsewhere/a.js", "../a.js", "nested.js/d.js", data_dir, "."]:
        error = listing.file_location_error(file)
        assert isinstance(error, OutOfScopeError)
        assert error.path == listing.resolve(file)

@pytest.mark.asyncio
async def test_file_location_error_not_found(listing, data_dir):
    """Test paths in the directory that are not in the snapshot."""
    await listing.refresh_listing()

    for file in ["missing.js", "b.json", "c.txt", "link.js", "nested.js", "UPPER.JS"]:
        assert isinstance(listing.file_location_error(file), NotFoundError)

def test_file_location_error_before_refresh(listing):
    """Test that nothing is valid before the first refresh."""
    assert isinstance(listing.file_location_error("a.js"), NotFoundError)

@pytest.mark.asyncio
async def test_file_location_error_uses_snapshot(listing, data_dir):
    """Test that validation reads the last snapshot, not the disk."""
    await listing.refresh_listing()

    (data_dir / "created.js").write_text("new")
    (data_dir / "a.js").unlink()

    assert isinstance(listing.file_location_error("created.js"), NotFoundError)
    assert listing.file_location_error("a.js") is None

    await listing.refresh_listing()

    assert listing.file_location_error("created.js") is None
    assert isinstance(listing.file_location_error("a.js"), NotFoundError)

@pytest.mark.asyncio
async def test_accessors_return_copies(listing, data_dir):
    """Test that returned collections cannot change internal state."""
    await listing.refresh_listing()

    paths = listing.file_paths
    paths.clear()
    assert listing.file_paths == {data_dir / "a.js"}

    errors = listing.load_error_map
    errors[data_dir] = RuntimeError("injected")
    assert listing.load_error_map == {}

@pytest.mark.asyncio
async def test_double_leading_separator(data_dir):
    """Test that a leading '//' is collapsed for directories and files."""
    listing = DirectoryListing("/" + str(data_dir), {".js"})
    assert listing.directory == data_dir
    assert str(listing.directory) == str(data_dir)

    await listing.refresh_listing()

    assert listing.file_paths == {data_dir / "a.js"}
    assert listing.file_location_error(data_dir / "a.js") is None
    assert listing.file_location_error("/" + str(data_dir / "a.js")) is None
    assert str(listing.resolve("//x/y")) == "/x/y"
