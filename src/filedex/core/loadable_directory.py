"""Generic load-and-cache behaviour on top of a directory listing."""

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Generic, Iterable, List, TypeVar

from .directory_listing import DirectoryListing, PathLike

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LoadableDirectory(DirectoryListing, ABC, Generic[T]):
    """A directory listing that loads and caches the content of its files.

    Subclasses choose the loaded type T and implement load_entry().
    """

    def __init__(self, directory: PathLike, file_extensions: Iterable[str]):
        """Initialize the loadable directory.

        Args:
            directory: The directory containing files. Must be an absolute path.
            file_extensions: Only files with these extensions are loaded. Must include '.'.
        """
        super().__init__(directory, file_extensions)
        self._loaded_entry_map: Dict[Path, T] = {}

    @property
    def loaded_entry_map(self) -> Dict[Path, T]:
        """Mapping from file path to loaded content."""
        return dict(self._loaded_entry_map)

    @property
    def loaded_entries(self) -> List[T]:
        """The loaded content of each file."""
        return list(self._loaded_entry_map.values())

    @abstractmethod
    async def load_entry(self, file: PathLike) -> T:
        """Load a file from disk and cache it in loaded_entry_map.

        Implementations refresh the listing, then validate the path with
        file_location_error(). Validation and load errors are recorded in the
        error map under the resolved path before being raised. The cache is
        only updated after a successful load.

        Args:
            file: The file to load. If relative, relative to the directory.

        Returns:
            The loaded content.

        Raises:
            FileLocationError: If the file is not a listed file of the directory.
            LoadFailureError: If the content could not be loaded.
        """
        pass

    async def load_all_entries(self) -> None:
        """Load every listed file, ignoring individual failures.

        Failures are only reported through load_error_map.
        """
        await self.refresh_listing()

        paths = sorted(self._file_paths)
        results = await asyncio.gather(
            *[self.load_entry(path) for path in paths],
            return_exceptions=True
        )

        failures = 0
        for path, result in zip(paths, results):
            if isinstance(result, Exception):
                failures += 1
                logger.debug(f"Skipping file {path}: {str(result)}")

        logger.info(
            f"Loaded {len(paths) - failures}/{len(paths)} entries from {self._directory}"
        )

    async def _prepare_entry(self, file: PathLike) -> Path:
        """Refresh the listing and return the validated, resolved path."""
        await self.refresh_listing()

        path = self.resolve(file)
        error = self.file_location_error(path)
        if error:
            self._record_error(path, error)
            raise error
        return path

    def _record_error(self, path: Path, error: Exception) -> None:
        self._load_error_map[path] = error
        logger.warning(f"Failed to load {path}: {str(error)}")

    def _store_entry(self, path: Path, value: T) -> T:
        self._loaded_entry_map[path] = value
        logger.debug(f"Loaded {path}")
        return value
