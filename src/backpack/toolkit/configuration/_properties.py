# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import threading
from typing import Dict, Iterator, Mapping, MutableMapping

__all__ = [
    "Properties",
    "system_properties",
]


class Properties(MutableMapping[str, str]):
    """
    A thread-safe table of string properties.

    The process-wide instance, system_properties, plays the role of a property table that can be
    set at startup (e.g. from command-line flags) and read through SystemPropertyConfiguration.
    """

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._lock = threading.Lock()
        self._table: Dict[str, str] = {}
        if initial:
            self.update(initial)

    def __getitem__(self, key: str) -> str:
        with self._lock:
            return self._table[key]

    def __setitem__(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Property {key} must be a str, got {type(value).__name__}")
        with self._lock:
            self._table[key] = value

    def __delitem__(self, key: str) -> None:
        with self._lock:
            del self._table[key]

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._table

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            keys = list(self._table)
        return iter(keys)

    def __len__(self) -> int:
        with self._lock:
            return len(self._table)

    def __repr__(self) -> str:
        with self._lock:
            return f"Properties({self._table!r})"


system_properties = Properties()
