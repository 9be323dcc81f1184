"""Loadable directory implementations for different kinds of content."""

from typing import Optional

from ..config import Configuration
from ..directory_listing import PathLike
from ..loadable_directory import LoadableDirectory
from ..types import ConfigurationError
from .object_directory import ObjectDirectory
from .text_directory import TextDirectory


def create_directory(
    config: Configuration,
    directory: Optional[PathLike] = None
) -> LoadableDirectory:
    """Build the loadable directory described by a configuration.

    Args:
        config: Loaded configuration.
        directory: Overrides the configured listing directory.

    Raises:
        ConfigurationError: If no directory is configured or it is not absolute.
    """
    listing = config.get_listing_config()
    loader = config.get_loader_config()

    directory = directory or listing.directory
    extensions = listing.extensions or None
    if not directory:
        raise ConfigurationError("No listing directory configured")

    try:
        if loader.loader_type == "text":
            return TextDirectory(directory, extensions, encoding=loader.encoding)
        return ObjectDirectory(directory, extensions)
    except ValueError as e:
        raise ConfigurationError(f"Invalid listing directory: {str(e)}") from e


__all__ = ['ObjectDirectory', 'TextDirectory', 'create_directory']
