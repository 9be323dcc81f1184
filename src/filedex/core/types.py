"""Common types and exceptions for the filedex package."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

# Custom exceptions
class FiledexError(Exception):
    """Base exception for all filedex errors."""
    pass

class ConfigurationError(FiledexError):
    """Raised when there is an error in configuration."""
    pass

class InvalidArgumentError(FiledexError, ValueError):
    """Raised when a directory listing is constructed with a relative path."""
    pass

class DirectoryAccessError(FiledexError):
    """Raised when the managed directory itself cannot be listed."""

    def __init__(self, message: str, directory: Path):
        super().__init__(message)
        self.directory = directory

class FileLocationError(FiledexError):
    """Base class for errors about where a requested file lives."""

    def __init__(self, message: str, path: Path):
        super().__init__(message)
        self.path = path

class OutOfScopeError(FileLocationError):
    """Raised when a path is not a direct child of the managed directory."""
    pass

class NotFoundError(FileLocationError):
    """Raised when a path is missing from the current listing snapshot."""
    pass

class LoadFailureError(FiledexError):
    """Raised when the content of a listed file could not be loaded."""

    def __init__(self, message: str, path: Path):
        super().__init__(message)
        self.path = path

# Common types
@dataclass
class TextSource:
    """Represents the text content of a loaded file with metadata."""
    content: str
    source_id: str
    metadata: Dict[str, Any]
    timestamp: datetime

@dataclass
class ListingConfig:
    """Configuration for a directory listing."""
    directory: Optional[str]
    extensions: List[str] = field(default_factory=list)

@dataclass
class LoaderConfig:
    """Configuration for the loader built on top of a listing."""
    loader_type: str
    encoding: str = "utf-8"
