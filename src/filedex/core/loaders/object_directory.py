"""Loads Python modules and JSON documents from a directory."""

import hashlib
import importlib.util
import json
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Iterable, Optional

from ..directory_listing import PathLike
from ..loadable_directory import LoadableDirectory, T
from ..types import LoadFailureError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = frozenset({".py"})


def module_name_for(path: Path) -> str:
    """Return the sys.modules key used for the module at path."""
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
    return f"_filedex_object_{path.stem}_{digest}"


def import_module_at(path: Path) -> ModuleType:
    """Execute the Python file at path as a module.

    Modules are cached in sys.modules, so loading the same path twice returns
    the module from the first successful load.
    """
    name = module_name_for(path)
    if name in sys.modules:
        logger.debug(f"Reusing imported module {name} for {path}")
        return sys.modules[name]

    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot create a module spec for {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        del sys.modules[name]
        raise
    return module


def load_json_at(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


class ObjectDirectory(LoadableDirectory[T]):
    """Loads each file in a directory as a Python object.

    .json files are parsed as JSON; every other supported extension is
    executed as a Python module. By default only .py files are loaded; add
    ".json" to file_extensions to load JSON documents as well.
    """

    def __init__(
        self,
        directory: PathLike,
        file_extensions: Optional[Iterable[str]] = None
    ):
        super().__init__(
            directory,
            DEFAULT_EXTENSIONS if file_extensions is None else file_extensions
        )

    async def load_entry(self, file: PathLike) -> T:
        path = await self._prepare_entry(file)

        try:
            if path.suffix == ".json":
                obj = load_json_at(path)
            else:
                obj = import_module_at(path)
        except (Exception, SystemExit) as e:
            error = LoadFailureError(f"Failed to load object {path}: {str(e)}", path)
            self._record_error(path, error)
            raise error from e

        return self._store_entry(path, obj)
