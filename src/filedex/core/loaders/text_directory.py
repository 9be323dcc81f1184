"""Loads text files from a directory into TextSource records."""

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from ..directory_listing import PathLike
from ..loadable_directory import LoadableDirectory
from ..types import LoadFailureError, TextSource

DEFAULT_EXTENSIONS = frozenset({".txt"})


class TextDirectory(LoadableDirectory[TextSource]):
    """Loads the text content of each file in a directory."""

    def __init__(
        self,
        directory: PathLike,
        file_extensions: Optional[Iterable[str]] = None,
        encoding: str = "utf-8"
    ):
        """Initialize the text directory.

        Args:
            directory: The directory containing text files. Must be an absolute path.
            file_extensions: Only files with these extensions are loaded. Defaults to .txt.
            encoding: Encoding used to decode every file.
        """
        super().__init__(
            directory,
            DEFAULT_EXTENSIONS if file_extensions is None else file_extensions
        )
        self.encoding = encoding

    def _read(self, path: Path) -> TextSource:
        with path.open('r', encoding=self.encoding) as f:
            content = f.read()

        return TextSource(
            content=content,
            source_id=str(path),
            metadata={
                "filename": path.name,
                "file_size": path.stat().st_size,
                "file_type": path.suffix[1:],  # Remove leading dot
            },
            timestamp=datetime.now()
        )

    async def load_entry(self, file: PathLike) -> TextSource:
        """Load a text file.

        Args:
            file: The file to load. If relative, relative to the directory.

        Returns:
            TextSource containing the text and file metadata.

        Raises:
            FileLocationError: If the file is not a listed file of the directory.
            LoadFailureError: If the file cannot be read or decoded.
        """
        path = await self._prepare_entry(file)

        try:
            source = await asyncio.to_thread(self._read, path)
        except (OSError, UnicodeDecodeError) as e:
            error = LoadFailureError(f"Failed to load file {path}: {str(e)}", path)
            self._record_error(path, error)
            raise error from e

        return self._store_entry(path, source)
