# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import json
import jsonschema
import logging
import os
import threading
import yaml
from typing import IO, Any, Callable, Dict, List, Optional, TypeVar, Union

from ..exceptions import UnbelievableException
from ._preference import Preference, PreferenceSpec
from ._preference_type import DECIMAL, FLAG, NUMBER, TEXT, PreferenceType

__all__ = ["UserPreferences"]

_logger = logging.getLogger(__name__)

_DIR = os.path.dirname(os.path.realpath(__file__))

_E = TypeVar("_E")

TableSource = Union[str, "os.PathLike[str]", IO[str], List[Dict[str, Any]]]


def _load_schema() -> dict:
    schema_path = os.path.join(_DIR, "preferences.schema.json")
    with open(schema_path) as schema_file:
        return json.load(schema_file)


def _load_table(source: TableSource) -> Any:
    """
    Loads a YAML/JSON preferences table.

    Note that yaml.safe_load() is capable of loading JSON documents.
    """
    if isinstance(source, list):
        return source
    if isinstance(source, str) and source.startswith("file://"):
        source = source[len("file://") :]
    elif isinstance(source, str):
        return yaml.safe_load(source)

    if isinstance(source, os.PathLike) or isinstance(source, str):
        with open(source) as table_file:
            return yaml.safe_load(table_file)

    with source:
        return yaml.safe_load(source)


def _input_text(default: Any) -> str:
    if isinstance(default, bool):
        return "true" if default else "false"
    return str(default)


class UserPreferences:
    """
    A container that manages user preferences across the application.

    Preferences are keyed by the id of their spec. Registering from multiple threads is safe, and
    the registry lock is never held while listeners run.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._preferences: Dict[str, Preference] = {}
        self._types: Dict[str, PreferenceType] = {}
        for preference_type in (TEXT, FLAG, NUMBER, DECIMAL):
            self.add_type(preference_type)

    def add_type(self, preference_type: PreferenceType) -> UserPreferences:
        """
        Makes a preference type known by its name to preference tables.
        """
        with self._lock:
            self._types[preference_type.name] = preference_type
        return self

    def register(self, spec: PreferenceSpec[_E]) -> Preference[_E]:
        """
        Registers a preference for the given spec, if there is none with the same id yet.

        Returns:
            Preference: The managed preference for the spec id.
        """
        with self._lock:
            preference = self._preferences.get(spec.id)
            if preference is None:
                preference = Preference(spec)
                self._preferences[spec.id] = preference
                _logger.debug(f"Registered preference {spec.id}")
            return preference

    def register_all(self, *specs: PreferenceSpec) -> None:
        for spec in specs:
            self.register(spec)

    def register_table(self, source: TableSource) -> List[Preference]:
        """
        Registers every preference declared in a table.

        The table is a list of entries with the keys "id", "type", "default" and, optionally,
        "description". The type is the name of a known preference type.

        Args:
            source: The table. Can be one of the following:
            - A string containing the table file path. Must be prefixed with "file://".
            - A string-encoded YAML or JSON table.
            - A path to the table file.
            - A readable stream, closed after reading.
            - An already loaded list of entries.

        Raises:
            UnbelievableException: Raised when the table cannot be loaded, does not adhere to the
            preferences schema, or refers to an unknown preference type.
        """
        try:
            table = _load_table(source)
        except OSError as e:
            errmsg = f"Failed to open preferences table: {e}"
            _logger.error(errmsg)
            raise UnbelievableException(errmsg) from e
        except yaml.YAMLError as e:
            errmsg = f"Failed to load preferences table as JSON or YAML: {e}"
            _logger.error(errmsg)
            raise UnbelievableException(errmsg) from e

        try:
            jsonschema.validate(table, _load_schema())
        except jsonschema.ValidationError as e:
            errmsg = f"Preferences table failed to validate: {e.message}"
            _logger.error(errmsg)
            raise UnbelievableException(errmsg) from e

        with self._lock:
            types = dict(self._types)

        specs = []
        for entry in table:
            preference_type = types.get(entry["type"])
            if preference_type is None:
                errmsg = (
                    f"Unknown type '{entry['type']}' for preference {entry['id']}. "
                    f"Expected one of: {', '.join(types)}"
                )
                _logger.error(errmsg)
                raise UnbelievableException(errmsg)
            specs.append(
                PreferenceSpec(
                    id=entry["id"],
                    type=preference_type,
                    default_value=_input_text(entry["default"]),
                    description=entry.get("description", ""),
                )
            )

        preferences = [self.register(spec) for spec in specs]
        _logger.info(f"Registered {len(preferences)} preferences from table")
        return preferences

    def find(self, id: str) -> Optional[Preference]:
        """
        Finds the preference identified by the given id. Returns None if it is not registered.
        """
        with self._lock:
            return self._preferences.get(id)

    def get(self, spec: PreferenceSpec[_E]) -> Preference[_E]:
        """
        Returns the preference for the given spec, registering it if needed.
        """
        return self.register(spec)

    def list(self) -> List[Preference]:
        with self._lock:
            return list(self._preferences.values())

    def watch(self, spec: PreferenceSpec[_E], action: Callable[[_E], None]) -> UserPreferences:
        """
        Listens to value changes of the preference for the given spec. The action is called with
        the current value right away.
        """
        self.get(spec).listen(action)
        return self

    def supplier(self, spec: PreferenceSpec[_E]) -> Callable[[], _E]:
        """
        Returns a function that gets the current value of the preference for the given spec.
        """
        return lambda: self.get(spec).value

    def is_enabled(self, spec: PreferenceSpec[bool]) -> bool:
        return self.supplier(spec)() is True

    def is_disabled(self, spec: PreferenceSpec[bool]) -> bool:
        return not self.is_enabled(spec)
