# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from ..exceptions import UnbelievableException
from ._chain import ConfigurationChain
from ._configuration import Configuration
from ._factories import env, file, resource, system_property, url, value

__all__ = [
    "from_document",
    "to_document",
]

_logger = logging.getLogger(__name__)

_SOURCES: Dict[str, Callable[[str], Configuration]] = {
    "env": env,
    "system_property": system_property,
    "value": value,
    "file": file,
    "resource": resource,
    "url": url,
}


def from_document(data: Any) -> Configuration:
    """
    Builds a configuration from its document form.

    A string is a raw value. A mapping is a chain of sources in mapping order, keyed by the source
    kind (env, system_property, value, file, resource or url). A list is a chain of strings and
    mappings in list order.

    Raises:
        UnbelievableException: Raised when the document is not a valid configuration.
    """
    if isinstance(data, Configuration):
        return data
    if isinstance(data, str):
        return value(data)
    if isinstance(data, dict):
        entries = []
        for kind, argument in data.items():
            factory = _SOURCES.get(kind)
            if factory is None:
                errmsg = (
                    f"Unknown configuration source '{kind}'. Expected one of: "
                    f"{', '.join(_SOURCES)}"
                )
                _logger.error(errmsg)
                raise UnbelievableException(errmsg)
            if not isinstance(argument, str):
                errmsg = f"Configuration source '{kind}' expects a string, got: {argument!r}"
                _logger.error(errmsg)
                raise UnbelievableException(errmsg)
            entries.append(factory(argument))
        return ConfigurationChain(*entries)
    if isinstance(data, list):
        return ConfigurationChain(*(from_document(entry) for entry in data))

    errmsg = f"Expected a string, mapping or list for a configuration, got: {type(data).__name__}"
    _logger.error(errmsg)
    raise UnbelievableException(errmsg)


def to_document(configuration: Configuration) -> Any:
    """
    Returns the document form of a configuration, which is its current value.
    """
    return configuration.get()
