"""Directory listing and path validation for a single directory."""

import asyncio
import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Union

from .types import (
    DirectoryAccessError,
    FileLocationError,
    InvalidArgumentError,
    NotFoundError,
    OutOfScopeError,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def _normalize(path: PathLike) -> Path:
    # normpath collapses "." and ".." and trailing separators without following symlinks
    normalized = os.path.normpath(os.fspath(path))
    # POSIX normpath keeps exactly two leading slashes
    if normalized.startswith("//"):
        normalized = normalized[1:]
    return Path(normalized)


class DirectoryListing:
    """Retrieves a listing of all files in a directory with the given extensions.

    The listing is a snapshot: it only changes when refresh_listing() runs.
    To load file contents, use a subclass of LoadableDirectory.
    """

    def __init__(self, directory: PathLike, file_extensions: Iterable[str]):
        """Initialize the listing.

        Args:
            directory: The directory containing files. Must be an absolute path.
            file_extensions: Only files with these extensions are listed. Must include '.'.

        Raises:
            InvalidArgumentError: If directory is not an absolute path.
        """
        if not os.path.isabs(os.fspath(directory)):
            raise InvalidArgumentError(f"'{directory}' is not an absolute path!")

        self._directory = _normalize(directory)
        self._supported_extensions: Set[str] = set(file_extensions)
        self._file_paths: Set[Path] = set()
        self._load_error_map: Dict[Path, Exception] = {}

    @property
    def directory(self) -> Path:
        """The directory that the files are stored in."""
        return self._directory

    @property
    def supported_extensions(self) -> Set[str]:
        """Only files with these extensions are listed."""
        return set(self._supported_extensions)

    @property
    def file_paths(self) -> Set[Path]:
        """Absolute paths of all matching files as of the last refresh."""
        return set(self._file_paths)

    @property
    def load_error_map(self) -> Dict[Path, Exception]:
        """Errors from the last refresh and any loads since, keyed by path."""
        return dict(self._load_error_map)

    def _scan(self) -> List[Path]:
        with os.scandir(self._directory) as entries:
            return [
                self._directory / entry.name
                for entry in entries
                if entry.is_file(follow_symlinks=False)
            ]

    async def refresh_listing(self) -> None:
        """Re-scan the directory and replace the file path snapshot.

        Raises:
            DirectoryAccessError: If the directory cannot be listed.
        """
        self._load_error_map.clear()

        try:
            files = await asyncio.to_thread(self._scan)
        except OSError as e:
            error = DirectoryAccessError(
                f"Failed to list directory {self._directory}: {str(e)}",
                self._directory
            )
            self._load_error_map[self._directory] = error
            logger.warning(str(error))
            raise error from e

        self._file_paths = {
            path for path in files
            if path.suffix in self._supported_extensions
        }
        logger.debug(f"Listed {len(self._file_paths)} files in {self._directory}")

    def resolve(self, file: PathLike) -> Path:
        """Resolve a path, treating relative paths as relative to the directory.

        Does not touch the filesystem.
        """
        path = Path(file)
        if not path.is_absolute():
            path = self._directory / path
        return _normalize(path)

    def file_location_error(self, file: PathLike) -> Optional[FileLocationError]:
        """Check that a file is in the directory and present in the last listing.

        Args:
            file: A file path to check. If relative, relative to the directory.

        Returns:
            An OutOfScopeError or NotFoundError describing the problem, or None
            if the path is currently listed.
        """
        path = self.resolve(file)

        if path == self._directory or path.parent != self._directory:
            return OutOfScopeError(
                f"File '{path}' is not in directory '{self._directory}'.", path
            )

        if path not in self._file_paths:
            return NotFoundError(
                f"File '{path}' does not exist, is not a file, or could not be accessed.",
                path
            )

        return None
