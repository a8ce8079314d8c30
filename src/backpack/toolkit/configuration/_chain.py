# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import logging
import os
from typing import Iterator, List, Mapping, Optional, Tuple

from ._configuration import (
    NOT_SUPPLIED,
    Configuration,
    EnvironmentVariableConfiguration,
    FileConfiguration,
    RawValueConfiguration,
    SystemPropertyConfiguration,
)
from ._resources import ResourceConfiguration, ResourceLocator
from ._url import UrlConfiguration

__all__ = ["ConfigurationChain"]

_logger = logging.getLogger(__name__)


class ConfigurationChain(Configuration):
    """
    A configuration that delegates to the first set configuration in a priority list.

    The first configuration in the chain has the highest priority. Any other configuration is used
    only if every configuration before it is not set. The chain is evaluated on every call, so a
    configuration that becomes set later (e.g. an environment variable) is picked up.

    Chains are immutable: every chaining method returns a new chain.
    """

    def __init__(self, *configurations: Configuration) -> None:
        """
        Args:
            *configurations (Configuration): The configurations in priority order. Chains are
                flattened, keeping their own priorities.
        """
        entries: List[Configuration] = []
        for configuration in configurations:
            if isinstance(configuration, ConfigurationChain):
                entries.extend(configuration._configurations)
            elif configuration is not NOT_SUPPLIED:
                entries.append(configuration)
        self._configurations: Tuple[Configuration, ...] = tuple(entries)

    def _resolve(self) -> Configuration:
        for configuration in self._configurations:
            if configuration.is_set():
                _logger.debug(f"Configuration resolved by {configuration!r}")
                return configuration
        return NOT_SUPPLIED

    def is_set(self) -> bool:
        return any(configuration.is_set() for configuration in self._configurations)

    def get(self) -> Optional[str]:
        return self._resolve().get()

    def read(self) -> str:
        return self._resolve().read()

    def read_lines(self) -> List[str]:
        return self._resolve().read_lines()

    def or_else(self, default: Configuration) -> ConfigurationChain:
        """
        Chains the given configuration as the lowest priority.

        Returns:
            ConfigurationChain: A new chain.
        """
        return ConfigurationChain(self, default)

    def env(self, name: str, environ: Mapping[str, str] | None = None) -> ConfigurationChain:
        """
        Chains an environment variable configuration.
        """
        return self.or_else(EnvironmentVariableConfiguration(name, environ))

    def system_property(
        self, name: str, properties: Mapping[str, str] | None = None
    ) -> ConfigurationChain:
        """
        Chains a system property configuration.
        """
        return self.or_else(SystemPropertyConfiguration(name, properties))

    def file(self, location: str | os.PathLike, encoding: str | None = None) -> ConfigurationChain:
        """
        Chains a file configuration.
        """
        return self.or_else(FileConfiguration(location, encoding))

    def resource(
        self,
        location: str,
        locator: ResourceLocator | None = None,
        encoding: str | None = None,
    ) -> ConfigurationChain:
        """
        Chains a resource configuration.
        """
        return self.or_else(ResourceConfiguration(location, locator, encoding))

    def url(
        self, location: str, timeout: float | None = None, encoding: str | None = None
    ) -> ConfigurationChain:
        """
        Chains a URL configuration.
        """
        return self.or_else(UrlConfiguration(location, timeout, encoding))

    def value(self, value: str) -> ConfigurationChain:
        """
        Chains a raw value configuration.
        """
        return self.or_else(RawValueConfiguration(value))

    def __iter__(self) -> Iterator[Configuration]:
        return iter(self._configurations)

    def __len__(self) -> int:
        return len(self._configurations)

    def __repr__(self) -> str:
        return f"ConfigurationChain{self._configurations!r}"
