# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import dataclasses
from typing import Callable, Generic, TypeVar

from ..exceptions import UnbelievableException

__all__ = [
    "DECIMAL",
    "FLAG",
    "NUMBER",
    "PreferenceType",
    "TEXT",
]

_E = TypeVar("_E")


@dataclasses.dataclass(frozen=True)
class PreferenceType(Generic[_E]):
    """
    A type that can be assigned to a preference.

    Attributes:
        name (str): The name of this type, used to refer to it in preference tables.
        converter (Callable[[str], E]): How to convert the user input into a value.
    """

    name: str
    converter: Callable[[str], _E]

    def convert(self, input: str) -> _E:
        """
        Converts an input text into a value that this type of preference can hold.

        Raises:
            UnbelievableException: Raised when the input is not valid for this type.
        """
        try:
            return self.converter(input)
        except (TypeError, ValueError) as e:
            raise UnbelievableException(f"Invalid input for {self.name}: {input!r}") from e


def _flag(input: str) -> bool:
    if input in ("true", "on", "yes"):
        return True
    if input in ("false", "off", "no"):
        return False
    raise UnbelievableException("Invalid input!")


TEXT: PreferenceType[str] = PreferenceType("text", str)
FLAG: PreferenceType[bool] = PreferenceType("flag", _flag)
NUMBER: PreferenceType[int] = PreferenceType("number", int)
DECIMAL: PreferenceType[float] = PreferenceType("decimal", float)
