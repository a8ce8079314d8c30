# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import dataclasses
import logging
from typing import Callable, Generic, List, Optional, TypeVar

from ..text import InputValue
from ._preference_type import PreferenceType

__all__ = [
    "Preference",
    "PreferenceSpec",
]

_logger = logging.getLogger(__name__)

_E = TypeVar("_E")


@dataclasses.dataclass(frozen=True)
class PreferenceSpec(Generic[_E]):
    """
    The definition of a preference: what identifies it, what it holds and its default input.
    """

    id: str
    type: PreferenceType[_E]
    default_value: str
    description: str = ""


class Preference(Generic[_E]):
    """
    A configuration that can be changed by a user at runtime.

    Listeners are notified on the thread that changes the value, in the order they were added.
    """

    def __init__(self, spec: PreferenceSpec[_E]) -> None:
        self._spec = spec
        self._listeners: List[Callable[[_E], None]] = []
        self._value: Optional[_E] = None
        self._input: Optional[str] = None
        self.reset()

    @property
    def spec(self) -> PreferenceSpec[_E]:
        return self._spec

    @property
    def value(self) -> _E:
        return self._value  # type: ignore

    @property
    def input_value(self) -> InputValue:
        """
        The input which produced the current value.
        """
        return InputValue.of(self._input)

    def set(self, input: str) -> None:
        """
        Changes the value by converting the given input with the preference type.

        Raises:
            UnbelievableException: Raised when the input is not valid for the preference type. The
            current value is kept.
        """
        self._value = self._spec.type.convert(input)
        self._input = input
        _logger.debug(f"Preference {self._spec.id} set to {self._value!r}")
        for listener in list(self._listeners):
            listener(self._value)

    def reset(self) -> None:
        """
        Reverts the value back to the default one.
        """
        self.set(self._spec.default_value)

    def listen(self, listener: Callable[[_E], None]) -> None:
        """
        Listens to any value change of this preference. The listener is notified of the current
        value as soon as it is added.
        """
        listener(self._value)  # type: ignore
        self._listeners.append(listener)

    def __repr__(self) -> str:
        return f"Preference({self._spec.id!r}, value={self._value!r})"
