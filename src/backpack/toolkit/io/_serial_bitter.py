# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import json
import jsonschema
import logging
import os
from abc import ABC, abstractmethod
from typing import IO, Any, Callable, Type, TypeVar, Union

from ..exceptions import UnbelievableException
from ._codecs import Codec, JsonCodec, XmlCodec, YamlCodec
from ._mapping import ObjectMapper

__all__ = [
    "Deserializer",
    "SerialBitter",
    "Serializer",
]

_logger = logging.getLogger(__name__)

_T = TypeVar("_T")

Source = Union[str, bytes, "os.PathLike[str]", IO[str], IO[bytes]]


def _encoding() -> str:
    # Imported here because the settings package reads its files through this module.
    from ..settings import get_settings

    return get_settings().encoding


class Serializer(ABC):
    """
    A component capable of serializing objects.
    """

    @abstractmethod
    def serialize(self, obj: Any) -> str:  # pragma: no cover
        pass


class Deserializer(ABC):
    """
    A component capable of deserializing contents.
    """

    @abstractmethod
    def deserialize(self, source: Source, target_type: Type[_T]) -> _T:  # pragma: no cover
        """
        Deserializes the given source into an object of the given type.

        Args:
            source: The document content as str or bytes, a path to a file containing the
            document, or a readable stream. Streams are closed after reading.
            target_type: The type of the resulting object.
        """
        pass


class SerialBitter(Serializer, Deserializer):
    """
    A simple and highly opinionated component to perform serialization and deserialization.

    Documents are parsed and written by a Codec (JSON, YAML or XML) and mapped to and from
    objects by an ObjectMapper. Every instance registers itself as a dependency, so dataclasses
    with a SerialBitter field get the instance that deserialized them.
    """

    def __init__(self, codec: Codec, mapper: ObjectMapper | None = None) -> None:
        self._codec = codec
        self._mapper = mapper if mapper is not None else ObjectMapper()
        self.add_dependency(SerialBitter, self)

    @property
    def codec(self) -> Codec:
        return self._codec

    @property
    def mapper(self) -> ObjectMapper:
        return self._mapper

    def add_dependency(self, dependency_type: Type[_T], dependency: _T) -> SerialBitter:
        """
        Adds a dependency using the given type. The dependency is injected into any dataclass
        field of the given type that is missing from a deserialized document.

        Returns:
            SerialBitter: This serializer.
        """
        self._mapper.add_dependency(dependency_type, dependency)
        return self

    def register_type(
        self,
        type_: Type[_T],
        serialize: Callable[[_T], Any],
        deserialize: Callable[[Any], _T],
    ) -> SerialBitter:
        """
        Registers custom functions to map objects of the given type to and from documents.

        Returns:
            SerialBitter: This serializer.
        """
        self._mapper.register_type(type_, serialize, deserialize)
        return self

    def serialize(self, obj: Any) -> str:
        try:
            return self._codec.dump(self._mapper.to_document(obj))
        except (TypeError, ValueError, *self._codec.errors) as e:
            errmsg = f"Failed to serialize {type(obj).__name__} as {self._codec.name}: {e}"
            _logger.error(errmsg)
            raise UnbelievableException(errmsg) from e

    def deserialize(
        self,
        source: Source,
        target_type: Type[_T],
        *,
        schema: dict | str | os.PathLike | None = None,
    ) -> _T:
        """
        Deserializes the given source into an object of the given type.

        Args:
            source: The document content as str or bytes, a path to a file containing the
            document, or a readable stream. Streams are closed after reading. A str prefixed
            with "file://" is a file path.
            target_type: The type of the resulting object.
            schema (dict | str | PathLike, optional): A JSON Schema, or the path to a JSON Schema
            file, to validate the document with before it is mapped.

        Raises:
            UnbelievableException: Raised when the source cannot be read, parsed, validated or
            mapped to the given type.
        """
        document = self.load(source)
        if schema is not None:
            self.validate(document, schema)
        try:
            return self._mapper.from_document(document, target_type)
        except (TypeError, ValueError) as e:
            errmsg = f"Failed to map {self._codec.name} document to {target_type}: {e}"
            _logger.error(errmsg)
            raise UnbelievableException(errmsg) from e

    def load(self, source: Source) -> Any:
        """
        Reads and parses the given source into a plain document, without mapping it.
        """
        try:
            content = self._read(source)
        except (OSError, UnicodeDecodeError, LookupError) as e:
            errmsg = f"Failed to read {self._codec.name} contents: {e}"
            _logger.error(errmsg)
            raise UnbelievableException(errmsg) from e

        try:
            return self._codec.load(content)
        except self._codec.errors as e:
            errmsg = f"Failed to parse {self._codec.name} contents: {e}"
            _logger.error(errmsg)
            raise UnbelievableException(errmsg) from e

    def validate(self, document: Any, schema: dict | str | os.PathLike) -> None:
        """
        Validates a plain document against a JSON Schema.

        Raises:
            UnbelievableException: Raised when the document does not adhere to the schema, or the
            schema itself is not valid.
        """
        if not isinstance(schema, dict):
            try:
                with open(schema) as schema_file:
                    schema = json.load(schema_file)
            except (OSError, json.JSONDecodeError) as e:
                errmsg = f"Failed to load JSON schema at {schema}: {e}"
                _logger.error(errmsg)
                raise UnbelievableException(errmsg) from e

        try:
            jsonschema.validate(document, schema)
        except (jsonschema.ValidationError, jsonschema.SchemaError) as e:
            errmsg = f"{self._codec.name} document failed to validate against the schema: {e}"
            _logger.error(errmsg)
            raise UnbelievableException(errmsg) from e

    @staticmethod
    def _read(source: Source) -> str:
        encoding = _encoding()
        if isinstance(source, str):
            if not source.startswith("file://"):
                return source
            source = source[len("file://") :]
        elif isinstance(source, bytes):
            return source.decode(encoding)
        elif hasattr(source, "read"):
            with source:
                data = source.read()
            return data.decode(encoding) if isinstance(data, bytes) else data
        elif not isinstance(source, os.PathLike):
            raise TypeError(f"Cannot deserialize from {type(source).__name__}")

        with open(source, encoding=encoding) as f:
            return f.read()

    @classmethod
    def json(cls) -> SerialBitter:
        """
        Creates a serializer for JSON contents.
        """
        return cls(JsonCodec())

    @classmethod
    def yaml(cls) -> SerialBitter:
        """
        Creates a serializer for YAML contents.
        """
        return cls(YamlCodec())

    @classmethod
    def xml(cls, root: str = "document") -> SerialBitter:
        """
        Creates a serializer for XML contents, writing documents under the given root element.
        """
        return cls(XmlCodec(root))
