# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import collections.abc
import dataclasses
import datetime
import types
import typing
from enum import Enum
from typing import Any, Callable, Dict, NamedTuple, Type, TypeVar, Union

from ..configuration import Configuration
from ..configuration import from_document as configuration_from_document
from ..configuration import to_document as configuration_to_document
from ..text import InputValue
from ._versioning import Version

__all__ = [
    "ObjectMapper",
    "TypeAdapter",
]

_T = TypeVar("_T")

_MISSING = object()

_SEQUENCE_ORIGINS = (
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Iterable,
    collections.abc.Collection,
)
_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)
_UNION_ORIGINS = (Union, types.UnionType)


class TypeAdapter(NamedTuple):
    serialize: Callable[[Any], Any]
    deserialize: Callable[[Any], Any]


def _input_value(data: Any) -> InputValue:
    return InputValue.of(None if data is None else str(data))


class ObjectMapper:
    """
    Class that maps objects to plain documents and back.

    Documents are what the JSON and YAML codecs work with: dicts, lists, strings, numbers,
    booleans and None. Objects can be dataclasses (also nested, in lists and dicts, or Optional),
    enums, dates and times, Version, InputValue and Configuration values, or any type with a
    registered adapter.

    When mapping a document to a dataclass, the dataclass type hints drive the conversion of each
    field. Unknown document properties are ignored. A field missing from the document falls back
    to its default value, then to a registered dependency of the field type, e.g.

    ```
    @dataclass
    class Job:
        name: str
        io: IOSilver

    mapper.add_dependency(IOSilver, silver)
    job = mapper.from_document({"name": "render"}, Job)  # job.io is silver
    ```
    """

    def __init__(self) -> None:
        self._adapters: Dict[type, TypeAdapter] = {}
        self._dependencies: Dict[type, Any] = {}
        self.register_type(Version, str, Version.parse)
        self.register_type(Configuration, configuration_to_document, configuration_from_document)
        self.register_type(InputValue, lambda value: value.get(), _input_value)

    def register_type(
        self,
        type_: Type[_T],
        serialize: Callable[[_T], Any],
        deserialize: Callable[[Any], _T],
    ) -> ObjectMapper:
        """
        Registers how objects of the given type (and its subtypes) map to documents.
        """
        self._adapters[type_] = TypeAdapter(serialize, deserialize)
        return self

    def add_dependency(self, type_: Type[_T], dependency: _T) -> ObjectMapper:
        """
        Registers a value to inject into dataclass fields of the given type that are missing from
        the document.
        """
        self._dependencies[type_] = dependency
        return self

    def dependency(self, type_: Any) -> Any:
        """
        Gets the dependency registered for the given type. Returns None if there is none.
        """
        found = self._find_dependency(type_)
        return None if found is _MISSING else found

    def to_document(self, obj: Any) -> Any:
        """
        Maps an object to a plain document.

        Raises:
            TypeError: Raised when the object cannot be mapped.
        """
        adapter = self._find_adapter(type(obj))
        if adapter is not None:
            return adapter.serialize(obj)
        if isinstance(obj, Enum):
            return obj.value
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return {
                field.name: self.to_document(getattr(obj, field.name))
                for field in dataclasses.fields(obj)
            }
        if isinstance(obj, (datetime.date, datetime.time)):
            return obj.isoformat()
        if obj is None or isinstance(obj, (str, int, float, bool)):
            return obj
        if isinstance(obj, collections.abc.Mapping):
            return {self.to_document(key): self.to_document(value) for key, value in obj.items()}
        if isinstance(obj, (list, tuple, set, frozenset)):
            return [self.to_document(value) for value in obj]

        raise TypeError(f"Object of type {type(obj).__name__} cannot be mapped to a document")

    def from_document(self, data: Any, target_type: Any) -> Any:
        """
        Maps a plain document to an object of the given type.

        Raises:
            TypeError: Raised when the document does not have the shape the type expects.
            ValueError: Raised when a value in the document is not valid for its type.
        """
        if target_type is Any or target_type is object:
            return data

        origin = typing.get_origin(target_type)
        args = typing.get_args(target_type)

        if origin in _UNION_ORIGINS:
            return self._map_union(data, target_type, args)
        if origin is typing.Literal:
            if data not in args:
                raise ValueError(f"{data!r} is not one of {args}")
            return data
        if origin in _SEQUENCE_ORIGINS:
            (item_type,) = args or (Any,)
            return [self.from_document(value, item_type) for value in self._as_list(data)]
        if origin in (set, frozenset, collections.abc.Set, collections.abc.MutableSet):
            (item_type,) = args or (Any,)
            items = (self.from_document(value, item_type) for value in self._as_list(data))
            return frozenset(items) if origin is frozenset else set(items)
        if origin is tuple:
            values = self._as_list(data)
            if len(args) == 2 and args[1] is Ellipsis:
                return tuple(self.from_document(value, args[0]) for value in values)
            if len(args) != len(values):
                raise ValueError(f"Expected {len(args)} values for {target_type}, got {values}")
            return tuple(self.from_document(value, arg) for value, arg in zip(values, args))
        if origin in _MAPPING_ORIGINS:
            key_type, value_type = args or (Any, Any)
            if not isinstance(data, collections.abc.Mapping):
                raise TypeError(f"Expected a mapping for {target_type}, got {type(data).__name__}")
            return {
                self.from_document(key, key_type): self.from_document(value, value_type)
                for key, value in data.items()
            }
        if origin is not None:
            raise TypeError(f"Mapping documents to {target_type} is not supported")

        if not isinstance(target_type, type):
            raise TypeError(f"Expected a type to map the document to, got {target_type!r}")

        adapter = self._find_adapter(target_type)
        if adapter is not None:
            return data if isinstance(data, target_type) else adapter.deserialize(data)
        if dataclasses.is_dataclass(target_type):
            return self._map_dataclass(data, target_type)
        if issubclass(target_type, Enum):
            return self._map_enum(data, target_type)
        if issubclass(target_type, (datetime.date, datetime.time)):
            return self._map_temporal(data, target_type)
        return self._map_primitive(data, target_type)

    def _find_adapter(self, type_: type) -> TypeAdapter | None:
        for base in getattr(type_, "__mro__", ()):
            if base in self._adapters:
                return self._adapters[base]
        return None

    def _find_dependency(self, type_: Any) -> Any:
        if typing.get_origin(type_) in _UNION_ORIGINS:
            for arg in typing.get_args(type_):
                found = self._find_dependency(arg)
                if found is not _MISSING:
                    return found
            return _MISSING
        if type_ in self._dependencies:
            return self._dependencies[type_]
        if isinstance(type_, type):
            for registered, dependency in self._dependencies.items():
                if issubclass(registered, type_):
                    return dependency
        return _MISSING

    def _map_union(self, data: Any, target_type: Any, args: tuple) -> Any:
        if data is None and type(None) in args:
            return None
        errors = []
        for arg in args:
            if arg is type(None):
                continue
            try:
                return self.from_document(data, arg)
            except (TypeError, ValueError) as e:
                errors.append(str(e))
        raise ValueError(f"{data!r} could not be mapped to {target_type}: {'; '.join(errors)}")

    def _map_dataclass(self, data: Any, target_type: type) -> Any:
        if isinstance(data, target_type):
            return data
        if not isinstance(data, collections.abc.Mapping):
            raise TypeError(
                f"Expected a mapping for {target_type.__name__}, got {type(data).__name__}"
            )

        hints = typing.get_type_hints(target_type)
        args: Dict[str, Any] = {}
        for field in dataclasses.fields(target_type):
            if not field.init:
                continue
            field_type = hints.get(field.name, Any)
            if field.name in data:
                args[field.name] = self.from_document(data[field.name], field_type)
            elif (
                field.default is not dataclasses.MISSING
                or field.default_factory is not dataclasses.MISSING
            ):
                continue
            else:
                dependency = self._find_dependency(field_type)
                if dependency is _MISSING:
                    raise ValueError(f"Dataclass field {field.name} not found in dict {data}")
                args[field.name] = dependency

        return target_type(**args)

    def _map_enum(self, data: Any, enum_type: Type[Enum]) -> Enum:
        if isinstance(data, enum_type):
            return data
        for member in enum_type:
            if member.value == data:
                return member
        if isinstance(data, str) and data in enum_type.__members__:
            return enum_type[data]
        raise ValueError(f"{data!r} is not a valid {enum_type.__name__}")

    def _map_temporal(self, data: Any, target_type: type) -> Any:
        if issubclass(target_type, datetime.datetime):
            if isinstance(data, datetime.datetime):
                return data
        elif issubclass(target_type, datetime.date):
            if isinstance(data, datetime.datetime):
                return data.date()
            if isinstance(data, datetime.date):
                return data
        elif isinstance(data, datetime.time):
            return data
        if not isinstance(data, str):
            raise TypeError(
                f"Expected an ISO 8601 string for {target_type.__name__}, "
                f"got {type(data).__name__}"
            )
        return target_type.fromisoformat(data)

    def _map_primitive(self, data: Any, target_type: type) -> Any:
        if target_type is type(None):
            if data is not None:
                raise TypeError(f"Expected null, got {data!r}")
            return None
        if target_type is bool:
            if not isinstance(data, bool):
                raise TypeError(f"Expected a boolean, got {data!r}")
            return data
        if target_type in (int, float):
            if isinstance(data, bool) or not isinstance(data, (int, float, str)):
                raise TypeError(f"Expected a number, got {data!r}")
            if target_type is int and isinstance(data, float) and not data.is_integer():
                raise ValueError(f"Expected an integer, got {data!r}")
            return target_type(data)
        if target_type is str:
            if not isinstance(data, str):
                raise TypeError(f"Expected a string, got {data!r}")
            return data
        if isinstance(data, target_type):
            return data
        raise TypeError(f"Cannot map {type(data).__name__} to {target_type.__name__}")

    @staticmethod
    def _as_list(data: Any) -> list:
        if not isinstance(data, (list, tuple)):
            raise TypeError(f"Expected a list, got {type(data).__name__}")
        return list(data)
