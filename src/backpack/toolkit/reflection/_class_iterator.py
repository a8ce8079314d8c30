# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

from typing import Any, Iterator

__all__ = [
    "class_hierarchy",
    "type_of",
]


def type_of(target: Any) -> type:
    """
    Returns the target itself if it is a type, the type of the target otherwise.
    """
    return target if isinstance(target, type) else type(target)


def class_hierarchy(target: Any) -> Iterator[type]:
    """
    Iterates over the type of the target and its ancestors, in method resolution order.
    """
    yield from type_of(target).__mro__
