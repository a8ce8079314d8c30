# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import logging
import os
import sys
from abc import ABC, abstractmethod
from importlib import resources as _resources
from typing import Iterator, Mapping, Optional, Sequence, Union

from ..exceptions import UnbelievableException
from ._configuration import Configuration, _default_encoding

__all__ = [
    "DirectoryResourceLocator",
    "MappingResourceLocator",
    "PackageResourceLocator",
    "ResourceConfiguration",
    "ResourceLocator",
    "SearchPathResourceLocator",
]

_logger = logging.getLogger(__name__)


def _path_parts(path: str) -> list[str]:
    parts = [part for part in path.replace("\\", "/").split("/") if part and part != "."]
    # Logical paths never leave the locator root
    if ".." in parts:
        return []
    return parts


class ResourceLocator(ABC):
    """
    Locates bundled resources by their logical path, a "/" separated path relative to wherever
    the locator looks resources up.
    """

    @abstractmethod
    def load(self, path: str) -> Optional[bytes]:  # pragma: no cover
        """
        Loads the contents of the resource at the given logical path.

        Returns:
            bytes | None: The resource contents, None if the resource could not be located.

        Raises:
            OSError: Raised when the resource exists but could not be read.
        """
        pass

    def exists(self, path: str) -> bool:
        """
        Checks if a resource exists at the given logical path.
        """
        return self.load(path) is not None


class _FileSystemResourceLocator(ResourceLocator):
    @abstractmethod
    def _roots(self) -> Iterator[str]:  # pragma: no cover
        pass

    def _find(self, path: str) -> Optional[str]:
        parts = _path_parts(path)
        if not parts:
            return None
        for root in self._roots():
            candidate = os.path.join(root, *parts)
            if os.path.isfile(candidate):
                return candidate
        return None

    def exists(self, path: str) -> bool:
        return self._find(path) is not None

    def load(self, path: str) -> Optional[bytes]:
        filepath = self._find(path)
        if filepath is None:
            return None
        with open(filepath, "rb") as f:
            return f.read()


class SearchPathResourceLocator(_FileSystemResourceLocator):
    """
    Looks resources up in every directory of a search path, in order. By default the search path
    is sys.path, read at lookup time, so resources shipped next to importable modules are found
    the way modules are.
    """

    def __init__(self, paths: Sequence[str] | None = None) -> None:
        self._paths = list(paths) if paths is not None else None

    def _roots(self) -> Iterator[str]:
        paths = self._paths if self._paths is not None else sys.path
        for entry in paths:
            root = entry or os.getcwd()
            if os.path.isdir(root):
                yield root


class DirectoryResourceLocator(_FileSystemResourceLocator):
    """
    Looks resources up relative to a single directory.
    """

    def __init__(self, root: str | os.PathLike) -> None:
        self._root = os.fspath(root)

    def _roots(self) -> Iterator[str]:
        yield self._root


class PackageResourceLocator(ResourceLocator):
    """
    Looks resources up relative to an importable package, using importlib.resources. Works for
    packages installed as zip files as well.
    """

    def __init__(self, package: str) -> None:
        self._package = package
        self._files = _resources.files(package)

    def _traverse(self, path: str):
        parts = _path_parts(path)
        if not parts:
            return None
        resource = self._files
        for part in parts:
            resource = resource.joinpath(part)
        return resource if resource.is_file() else None

    def exists(self, path: str) -> bool:
        return self._traverse(path) is not None

    def load(self, path: str) -> Optional[bytes]:
        resource = self._traverse(path)
        return resource.read_bytes() if resource is not None else None


class MappingResourceLocator(ResourceLocator):
    """
    Serves resources from an in-memory table of logical path to contents.
    """

    def __init__(self, table: Mapping[str, Union[bytes, str]]) -> None:
        self._table = {"/".join(_path_parts(path)): contents for path, contents in table.items()}

    def exists(self, path: str) -> bool:
        return "/".join(_path_parts(path)) in self._table

    def load(self, path: str) -> Optional[bytes]:
        contents = self._table.get("/".join(_path_parts(path)))
        if isinstance(contents, str):
            return contents.encode("utf-8")
        return contents


class ResourceConfiguration(Configuration):
    """
    A configuration based on the contents of a bundled resource. The contents are cached after
    they are loaded for the first time.
    """

    def __init__(
        self,
        location: str,
        locator: ResourceLocator | None = None,
        encoding: str | None = None,
    ) -> None:
        """
        Args:
            location (str): The logical path of the resource.
            locator (ResourceLocator, optional): How to locate the resource. Defaults to looking
                it up in the directories of sys.path.
            encoding (str, optional): The resource encoding. Defaults to the encoding in the
                toolkit settings.
        """
        self._location = location
        self._locator = locator if locator is not None else SearchPathResourceLocator()
        self._encoding = encoding
        self._content: Optional[str] = None

    @property
    def location(self) -> str:
        return self._location

    def is_set(self) -> bool:
        return self._content is not None or self._locator.exists(self._location)

    def get(self) -> Optional[str]:
        if self._content is None:
            try:
                data = self._locator.load(self._location)
                if data is None:
                    return None
                self._content = data.decode(self._encoding or _default_encoding())
            except (OSError, UnicodeDecodeError, LookupError) as e:
                errmsg = f"Failed to load resource {self._location}: {e}"
                _logger.error(errmsg)
                raise UnbelievableException(errmsg) from e
            _logger.debug(f"Cached contents of resource {self._location}")
        return self._content

    def read(self) -> str:
        content = self.get()
        if content is None:
            raise UnbelievableException(f"Resource {self._location} not found")
        return content

    def __repr__(self) -> str:
        return f"ResourceConfiguration({self._location!r})"
