# Copyright Backpack Cloud Contributors. All Rights Reserved.
"""
This module contains the settings of the toolkit itself.

ToolkitSettings is a frozen dataclass whose field defaults are the default settings. A
SettingsManager reads JSON settings files in layers, validates each of them against the bundled
JSON Schema and maps the merged values to ToolkitSettings with a SerialBitter. The settings in
use are replaced with set_settings, e.g.:

    set_settings(create_toolkit_settings_manager().build_settings())
"""

from ._settings import ToolkitSettings, get_settings, set_settings
from ._settings_manager import SettingsManager, create_toolkit_settings_manager

__all__ = [
    "SettingsManager",
    "ToolkitSettings",
    "create_toolkit_settings_manager",
    "get_settings",
    "set_settings",
]
