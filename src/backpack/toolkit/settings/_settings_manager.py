# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Sequence

from ..configuration import Configuration, configuration
from ..exceptions import UnbelievableException
from ..io import SerialBitter
from ._settings import ToolkitSettings

__all__ = [
    "SettingsManager",
    "create_toolkit_settings_manager",
]

_logger = logging.getLogger(__name__)

_DIR = os.path.dirname(os.path.realpath(__file__))

_SCHEMA_PATH = os.path.join(_DIR, "_toolkit_settings.schema.json")

_SETTINGS_ENV_VAR = "BACKPACK_TOOLKIT_SETTINGS"

_SETTINGS_PROPERTY = "backpack.toolkit.settings"


def create_toolkit_settings_manager(
    additional_settings_paths: List[str] | None = None,
) -> SettingsManager:
    """
    Creates a SettingsManager for the toolkit settings. Settings files are applied in this order:

    1. The system settings file, /etc/backpack/toolkit.json (%PROGRAMDATA%\\backpack\\toolkit.json
       on Windows).
    2. The user settings file, named by the BACKPACK_TOOLKIT_SETTINGS environment variable or the
       "backpack.toolkit.settings" system property. Defaults to ~/.backpack/toolkit.json.
    3. The additional settings files, in the order they are provided.

    Args:
        additional_settings_paths (list[str], optional): Paths to additional settings files. These
        have the highest priority.
    """
    if os.name == "posix":
        system_settings_path = os.path.join("/etc", "backpack", "toolkit.json")
    else:
        program_data = (
            configuration().env("PROGRAMDATA").value(os.path.join("C:", os.sep, "ProgramData"))
        )
        system_settings_path = os.path.join(program_data.read(), "backpack", "toolkit.json")

    layers: List[Configuration] = [
        configuration().value(system_settings_path),
        configuration()
        .env(_SETTINGS_ENV_VAR)
        .system_property(_SETTINGS_PROPERTY)
        .value(os.path.join("~", ".backpack", "toolkit.json")),
    ]
    layers.extend(configuration().value(path) for path in additional_settings_paths or [])

    return SettingsManager(layers)


class SettingsManager:
    """
    Builds toolkit settings from layered JSON settings files, in increasing order of priority.

    Each layer is a configuration that resolves to the path of a settings file, so a path can
    come from the environment or a system property as well as from a fixed value. A leading "~"
    is expanded to the user's home directory. Layers that resolve to no existing file are
    skipped, and settings missing from every file keep their defaults.
    """

    def __init__(
        self,
        layers: Sequence[Configuration],
        *,
        schema_path: str | None = _SCHEMA_PATH,
        serializer: SerialBitter | None = None,
    ) -> None:
        """
        Args:
            layers (Sequence[Configuration]): Configurations resolving to the settings file
            paths, lowest priority first.
            schema_path (str, optional): The JSON Schema every settings file is validated with.
            Validation is skipped if None.
            serializer (SerialBitter, optional): The serializer that reads settings files.
            Defaults to a JSON serializer.
        """
        self._layers = list(layers)
        self._schema_path = schema_path
        self._serializer = serializer if serializer is not None else SerialBitter.json()

    @property
    def layers(self) -> List[Configuration]:
        return list(self._layers)

    @staticmethod
    def settings_path(layer: Configuration) -> Optional[str]:
        """
        Gets the settings file path a layer resolves to, None if it resolves to nothing.
        """
        path = layer.as_text()
        return os.path.expanduser(path) if path is not None else None

    def load_layer(self, layer: Configuration) -> Optional[Dict[str, Any]]:
        """
        Loads and validates the settings file of a layer.

        Returns:
            dict | None: The settings in the file, None if the layer has no settings file.

        Raises:
            UnbelievableException: Raised when the file cannot be read, is not valid JSON or
            does not adhere to the settings schema.
        """
        path = self.settings_path(layer)
        if path is None:
            _logger.debug(f"No settings path configured by {layer!r}")
            return None
        if not os.path.isfile(path):
            _logger.debug(f'Settings file at "{path}" does not exist or is not a file.')
            return None
        return self._serializer.deserialize(
            f"file://{path}", Dict[str, Any], schema=self._schema_path
        )

    def build_settings(self) -> ToolkitSettings:
        """
        Builds ToolkitSettings from every layer. Only top-level keys are overridden by later
        layers.

        Raises:
            UnbelievableException: Raised when a settings file cannot be loaded, or the merged
            values do not make valid settings.
        """
        values: Dict[str, Any] = {}
        for layer in self._layers:
            loaded = self.load_layer(layer)
            if loaded is None:
                continue
            _logger.info(f"Applying settings: {self.settings_path(layer)}")
            for key, value in loaded.items():
                if key not in values or values[key] != value:
                    _logger.info(f"Set {key} to {value}")
            values.update(loaded)

        try:
            return self._serializer.mapper.from_document(values, ToolkitSettings)
        except (TypeError, ValueError) as e:
            errmsg = f"Failed to build toolkit settings from {values}: {e}"
            _logger.error(errmsg)
            raise UnbelievableException(errmsg) from e
