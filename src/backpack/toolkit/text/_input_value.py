# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Callable, ClassVar, List, Optional, Sequence, Type, TypeVar, Union

__all__ = ["InputValue"]

_T = TypeVar("_T")
_E = TypeVar("_E", bound=Enum)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_DOUBLE_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[dDfF]?|Infinity)|NaN"
)
_ENUM_SEPARATORS_RE = re.compile(r"[- .]")
_DEFAULT_SPLIT_RE = re.compile(r"\s*,\s*")

_INTEGER_BOUNDS = (-(2**31), 2**31 - 1)
_LONG_BOUNDS = (-(2**63), 2**63 - 1)


class InputValue(ABC):
    """
    A value that is external to the source code and provided as text, like a configuration
    parameter or something typed by a user.

    The raw text is available through get(). Every other accessor returns None when the text is
    missing, empty or cannot be converted, so callers never have to guard conversions with
    try/except blocks.
    """

    EMPTY: ClassVar[InputValue]

    @abstractmethod
    def get(self) -> Optional[str]:  # pragma: no cover
        """
        Gets the value as it is. Might be None.
        """
        pass

    def as_text(self) -> Optional[str]:
        """
        Gets the value as text. Empty strings and None both yield None.
        """
        value = self.get()
        return value if value else None

    def map(self, mapper: Callable[[str], _T]) -> Optional[_T]:
        """
        Short for applying the mapper to as_text() when it is present.
        """
        text = self.as_text()
        return None if text is None else mapper(text)

    def as_integer(self) -> Optional[int]:
        """
        Converts the text to a signed 32-bit integer.
        """
        return self._as_bounded_int(_INTEGER_BOUNDS)

    def as_long(self) -> Optional[int]:
        """
        Converts the text to a signed 64-bit integer.
        """
        return self._as_bounded_int(_LONG_BOUNDS)

    def as_double(self) -> Optional[float]:
        """
        Converts the text to a float. Accepts decimal and scientific notation, "Infinity" and
        "NaN", ignoring surrounding whitespace.
        """
        text = self.as_text()
        if text is None:
            return None
        text = text.strip()
        if not _DOUBLE_RE.fullmatch(text):
            return None
        return float(text.rstrip("dDfF"))

    def as_boolean(self) -> Optional[bool]:
        """
        Converts the text to a boolean. Only "true" (ignoring case) is True, any other text is
        False. This conversion does not fail.
        """
        return self.map(lambda text: text.lower() == "true")

    def as_temporal(
        self, pattern: str, query: Optional[Callable[[datetime], _T]] = None
    ) -> Union[datetime, _T, None]:
        """
        Parses the text with the given strptime pattern.

        Args:
            pattern (str): The strptime pattern, e.g. "%Y-%m-%d".
            query (Callable[[datetime], T], optional): Extracts the temporal object to return
                from the parsed datetime. Defaults to returning the datetime itself.
        """
        text = self.as_text()
        if text is None:
            return None
        try:
            parsed = datetime.strptime(text, pattern)
            return query(parsed) if query is not None else parsed
        except (ValueError, TypeError):
            return None

    def as_datetime(self, pattern: str) -> Optional[datetime]:
        return self.as_temporal(pattern)

    def as_date(self, pattern: str) -> Optional[date]:
        return self.as_temporal(pattern, lambda parsed: parsed.date())

    def as_time(self, pattern: str) -> Optional[time]:
        return self.as_temporal(pattern, lambda parsed: parsed.time())

    def as_enum(self, enum_type: Type[_E]) -> Optional[_E]:
        """
        Converts the text to a member of the given enum, looked up by name.

        To increase the chances of a match, the text is upper cased and any "-", " " or "."
        is replaced by "_" before the lookup.
        """
        text = self.as_text()
        if text is None:
            return None
        name = _ENUM_SEPARATORS_RE.sub("_", text.upper())
        try:
            return enum_type[name]
        except KeyError:
            return None

    def split(self, splitter: Optional[Callable[[str], Sequence[str]]] = None) -> List[InputValue]:
        """
        Splits this value in multiple values.

        Args:
            splitter (Callable[[str], Sequence[str]], optional): The function that splits the
                text. Defaults to treating the text as a comma-separated list, ignoring the
                whitespace around each comma.
        """
        text = self.as_text()
        if text is None:
            return []
        pieces = splitter(text) if splitter is not None else _DEFAULT_SPLIT_RE.split(text)
        return [InputValue.of(piece) for piece in pieces]

    def _as_bounded_int(self, bounds: tuple[int, int]) -> Optional[int]:
        text = self.as_text()
        if text is None or not _INTEGER_RE.fullmatch(text):
            return None
        number = int(text)
        lower, upper = bounds
        return number if lower <= number <= upper else None

    @staticmethod
    def of(value: Union[str, None, Callable[[], Optional[str]]]) -> InputValue:
        """
        Creates an InputValue around the given text, or around a supplier that is called every
        time the value is needed.
        """
        if callable(value):
            return _SuppliedInputValue(value)
        return _TextInputValue(value)


class _TextInputValue(InputValue):
    def __init__(self, value: Optional[str]) -> None:
        self._value = value

    def get(self) -> Optional[str]:
        return self._value

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, _TextInputValue):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"InputValue({self._value!r})"


class _SuppliedInputValue(InputValue):
    def __init__(self, supplier: Callable[[], Optional[str]]) -> None:
        self._supplier = supplier

    def get(self) -> Optional[str]:
        return self._supplier()


InputValue.EMPTY = _TextInputValue(None)
