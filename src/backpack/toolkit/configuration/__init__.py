# Copyright Backpack Cloud Contributors. All Rights Reserved.

"""
Configuration values that can be supplied by different sources.

A Configuration answers whether its source holds a value (is_set) and what the value is (get).
Configurations are chained to express fallbacks, the first configuration that is set wins:

    from backpack.toolkit.configuration import configuration

    home = configuration().env("APP_HOME").system_property("app.home").value("/opt/app")
    port = configuration().env("APP_PORT").value("8080").as_integer()

Every configuration is an InputValue, so the typed accessors (as_integer, as_boolean, as_enum,
split, ...) are available on any configuration or chain.
"""

from ._chain import ConfigurationChain
from ._configuration import (
    NOT_SUPPLIED,
    Configuration,
    EnvironmentVariableConfiguration,
    FileConfiguration,
    NotSuppliedConfiguration,
    RawValueConfiguration,
    SystemPropertyConfiguration,
)
from ._documents import from_document, to_document
from ._factories import configuration, env, file, resource, system_property, url, value
from ._properties import Properties, system_properties
from ._resources import (
    DirectoryResourceLocator,
    MappingResourceLocator,
    PackageResourceLocator,
    ResourceConfiguration,
    ResourceLocator,
    SearchPathResourceLocator,
)
from ._url import UrlConfiguration

__all__ = [
    "NOT_SUPPLIED",
    "Configuration",
    "ConfigurationChain",
    "DirectoryResourceLocator",
    "EnvironmentVariableConfiguration",
    "FileConfiguration",
    "MappingResourceLocator",
    "NotSuppliedConfiguration",
    "PackageResourceLocator",
    "Properties",
    "RawValueConfiguration",
    "ResourceConfiguration",
    "ResourceLocator",
    "SearchPathResourceLocator",
    "SystemPropertyConfiguration",
    "UrlConfiguration",
    "configuration",
    "env",
    "file",
    "from_document",
    "resource",
    "system_properties",
    "system_property",
    "to_document",
    "url",
    "value",
]
