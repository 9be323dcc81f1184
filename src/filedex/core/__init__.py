"""
filedex core package initialization
"""

from .config import Configuration
from .directory_listing import DirectoryListing
from .loadable_directory import LoadableDirectory
from .loaders import ObjectDirectory, TextDirectory, create_directory
from .types import (
    FiledexError,
    ConfigurationError,
    InvalidArgumentError,
    DirectoryAccessError,
    FileLocationError,
    OutOfScopeError,
    NotFoundError,
    LoadFailureError,
    TextSource,
)

__all__ = [
    'Configuration',
    'DirectoryListing',
    'LoadableDirectory',
    'ObjectDirectory',
    'TextDirectory',
    'create_directory',
    'FiledexError',
    'ConfigurationError',
    'InvalidArgumentError',
    'DirectoryAccessError',
    'FileLocationError',
    'OutOfScopeError',
    'NotFoundError',
    'LoadFailureError',
    'TextSource',
]
