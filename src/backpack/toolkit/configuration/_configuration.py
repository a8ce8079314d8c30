# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import logging
import os
from abc import abstractmethod
from typing import Callable, List, Mapping, Optional

from ..exceptions import UnbelievableException
from ..text import InputValue
from ._properties import system_properties

__all__ = [
    "NOT_SUPPLIED",
    "Configuration",
    "EnvironmentVariableConfiguration",
    "FileConfiguration",
    "NotSuppliedConfiguration",
    "RawValueConfiguration",
    "SystemPropertyConfiguration",
]

_logger = logging.getLogger(__name__)


def _active_settings():
    # Imported here because the settings package resolves its own files through configurations.
    from ..settings import get_settings

    return get_settings()


def _default_encoding() -> str:
    return _active_settings().encoding


def _read_text(path: str, encoding: str | None) -> str:
    try:
        with open(path, encoding=encoding or _default_encoding()) as f:
            return f.read()
    except (OSError, UnicodeDecodeError, LookupError) as e:
        errmsg = f"Failed to read contents of {path}: {e}"
        _logger.error(errmsg)
        raise UnbelievableException(errmsg) from e


class Configuration(InputValue):
    """
    A configuration value that can be supplied by a single source.
    """

    @abstractmethod
    def is_set(self) -> bool:  # pragma: no cover
        """
        Checks if this source holds any value.
        """
        pass

    def if_set(self, action: Callable[[Configuration], None]) -> Configuration:
        """
        Invokes the given action with this configuration if it is set.

        Returns:
            Configuration: This configuration.
        """
        if self.is_set():
            action(self)
        return self

    def read(self) -> str:
        """
        Assumes this configuration points to a file and reads the file contents.

        Raises:
            UnbelievableException: Raised when the configuration is not set or the file cannot
                be read.
        """
        path = self.as_text()
        if path is None:
            raise UnbelievableException(f"{self!r} does not point to any location")
        return _read_text(path, None)

    def read_lines(self) -> List[str]:
        """
        Same as read(), split into lines without the line terminators.
        """
        return self.read().splitlines()

    def or_else(self, default: Configuration) -> Configuration:
        """
        Returns this configuration if it is set, the given default otherwise.
        """
        return self if self.is_set() else default


class NotSuppliedConfiguration(Configuration):
    """
    A configuration that is never set. Use the NOT_SUPPLIED instance.
    """

    def is_set(self) -> bool:
        return False

    def get(self) -> str:
        return ""

    def read(self) -> str:
        return ""

    def read_lines(self) -> List[str]:
        return []

    def __repr__(self) -> str:
        return "NOT_SUPPLIED"


NOT_SUPPLIED = NotSuppliedConfiguration()


class RawValueConfiguration(Configuration):
    """
    A configuration based solely on a given value. It is always set, even for an empty value.
    """

    def __init__(self, value: str) -> None:
        self._value = value

    def is_set(self) -> bool:
        return True

    def get(self) -> str:
        return self._value

    def read(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"RawValueConfiguration({self._value!r})"


class EnvironmentVariableConfiguration(Configuration):
    """
    A configuration that uses the value of an environment variable. The variable is looked up on
    every call.
    """

    def __init__(self, name: str, environ: Mapping[str, str] | None = None) -> None:
        """
        Args:
            name (str): The name of the environment variable.
            environ (Mapping[str, str], optional): The environment to look the variable up in.
                Defaults to os.environ.
        """
        self._name = name
        self._environ = environ if environ is not None else os.environ

    @property
    def name(self) -> str:
        return self._name

    def is_set(self) -> bool:
        return self._name in self._environ

    def get(self) -> Optional[str]:
        return self._environ.get(self._name)

    def __repr__(self) -> str:
        return f"EnvironmentVariableConfiguration({self._name!r})"


class SystemPropertyConfiguration(Configuration):
    """
    A configuration that uses the value of a property in a properties table. The property is
    looked up on every call.
    """

    def __init__(self, name: str, properties: Mapping[str, str] | None = None) -> None:
        """
        Args:
            name (str): The name of the property.
            properties (Mapping[str, str], optional): The properties table. Defaults to the
                process-wide system_properties.
        """
        self._name = name
        self._properties = properties if properties is not None else system_properties

    @property
    def name(self) -> str:
        return self._name

    def is_set(self) -> bool:
        return self._name in self._properties

    def get(self) -> Optional[str]:
        return self._properties.get(self._name)

    def __repr__(self) -> str:
        return f"SystemPropertyConfiguration({self._name!r})"


class FileConfiguration(Configuration):
    """
    A configuration based on the contents of a local file. The file is read on every call.
    """

    def __init__(self, location: str | os.PathLike, encoding: str | None = None) -> None:
        """
        Args:
            location (str | PathLike): The path to the file.
            encoding (str, optional): The file encoding. Defaults to the encoding in the toolkit
                settings.
        """
        self._location = os.fspath(location)
        self._encoding = encoding

    @property
    def location(self) -> str:
        return self._location

    def is_set(self) -> bool:
        return os.path.isfile(self._location) and os.access(self._location, os.R_OK)

    def get(self) -> Optional[str]:
        if not self.is_set():
            return None
        return _read_text(self._location, self._encoding)

    def read(self) -> str:
        return _read_text(self._location, self._encoding)

    def __repr__(self) -> str:
        return f"FileConfiguration({self._location!r})"
