# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import os
from typing import Mapping

from ._chain import ConfigurationChain
from ._configuration import (
    Configuration,
    EnvironmentVariableConfiguration,
    FileConfiguration,
    RawValueConfiguration,
    SystemPropertyConfiguration,
)
from ._resources import ResourceConfiguration, ResourceLocator
from ._url import UrlConfiguration

__all__ = [
    "configuration",
    "env",
    "file",
    "resource",
    "system_property",
    "url",
    "value",
]


def env(name: str, environ: Mapping[str, str] | None = None) -> Configuration:
    return EnvironmentVariableConfiguration(name, environ)


def system_property(name: str, properties: Mapping[str, str] | None = None) -> Configuration:
    return SystemPropertyConfiguration(name, properties)


def value(value: str) -> Configuration:
    return RawValueConfiguration(value)


def file(location: str | os.PathLike, encoding: str | None = None) -> Configuration:
    return FileConfiguration(location, encoding)


def resource(
    location: str,
    locator: ResourceLocator | None = None,
    encoding: str | None = None,
) -> Configuration:
    return ResourceConfiguration(location, locator, encoding)


def url(location: str, timeout: float | None = None, encoding: str | None = None) -> Configuration:
    return UrlConfiguration(location, timeout, encoding)


def configuration() -> ConfigurationChain:
    """
    Starts an empty configuration chain. An empty chain behaves as NOT_SUPPLIED until
    configurations are chained to it, e.g.:

        configuration().env("APP_HOME").system_property("app.home").value("/opt/app")
    """
    return ConfigurationChain()
