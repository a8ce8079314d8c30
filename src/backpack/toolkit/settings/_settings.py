# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import dataclasses
import logging
from typing import Literal

__all__ = [
    "ToolkitSettings",
    "get_settings",
    "set_settings",
]

_logger = logging.getLogger(__name__)

_TOOLKIT_LOGGER_NAME = "backpack.toolkit"


@dataclasses.dataclass(frozen=True)
class ToolkitSettings:
    """
    Settings that tune how the toolkit reads values.

    Attributes:
        encoding (str): The text encoding used to decode files, resources and URL contents that
            do not declare their own.
        url_timeout (float): How long, in seconds, a URL fetch may block.
        log_level (str): The log level of the "backpack.toolkit" logger.
    """

    encoding: str = "utf-8"
    url_timeout: float = 30.0
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


_active_settings: ToolkitSettings | None = None


def get_settings() -> ToolkitSettings:
    """
    Gets the settings currently in use by the toolkit. Defaults to settings with every value at
    its default.
    """
    return _active_settings if _active_settings is not None else ToolkitSettings()


def set_settings(settings: ToolkitSettings | None) -> None:
    """
    Replaces the settings in use by the toolkit and applies their log level to the
    "backpack.toolkit" logger. Passing None restores the defaults and leaves the logger level to
    the application.
    """
    global _active_settings
    _active_settings = settings
    logging.getLogger(_TOOLKIT_LOGGER_NAME).setLevel(
        settings.log_level if settings is not None else logging.NOTSET
    )
    _logger.debug(f"Toolkit settings in use: {get_settings()}")
