# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import json
import xmltodict
import yaml
from abc import ABC, abstractmethod
from typing import Any, Tuple, Type
from xml.parsers.expat import ExpatError

__all__ = [
    "Codec",
    "JsonCodec",
    "XmlCodec",
    "YamlCodec",
]


class Codec(ABC):
    """
    Converts between text and plain documents (dicts, lists, strings, numbers, booleans and None).
    """

    name: str
    errors: Tuple[Type[Exception], ...]

    @abstractmethod
    def load(self, content: str) -> Any:  # pragma: no cover
        pass

    @abstractmethod
    def dump(self, document: Any) -> str:  # pragma: no cover
        pass


class JsonCodec(Codec):
    name = "JSON"
    errors = (json.JSONDecodeError,)

    def __init__(self, indent: int | None = None) -> None:
        self._indent = indent

    def load(self, content: str) -> Any:
        return json.loads(content)

    def dump(self, document: Any) -> str:
        return json.dumps(document, indent=self._indent)


class YamlCodec(Codec):
    name = "YAML"
    errors = (yaml.YAMLError,)

    def load(self, content: str) -> Any:
        return yaml.safe_load(content)

    def dump(self, document: Any) -> str:
        return yaml.safe_dump(document, sort_keys=False)


class XmlCodec(Codec):
    """
    Reads and writes XML with xmltodict. A document is the content of the root element: child
    elements become keys, repeated elements become lists and attributes become "@" prefixed keys.
    XML has no value types, so every value loads as a string and the mapper converts it.
    """

    name = "XML"
    errors = (ExpatError, ValueError)

    def __init__(self, root: str = "document") -> None:
        """
        Args:
            root (str): The name of the root element written by dump.
        """
        self._root = root

    def load(self, content: str) -> Any:
        (document,) = xmltodict.parse(content).values()
        return document

    def dump(self, document: Any) -> str:
        return xmltodict.unparse({self._root: document}, pretty=True)
