# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import inspect
from typing import Any, List, Optional, Tuple

from ._class_iterator import type_of
from ._members import (
    ReflectedConstructor,
    ReflectedField,
    ReflectedMethod,
    _split_annotated,
    _type_hints,
)

__all__ = ["Mirror"]


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _is_data(value: Any) -> bool:
    return not (
        inspect.isroutine(value)
        or inspect.isclass(value)
        or isinstance(value, (classmethod, staticmethod, property))
    )


class Mirror:
    """
    A helper for basic reflection operations over a type and its ancestors.

    Lookups go through the hierarchy in method resolution order, so when a member is declared more
    than once the declaration closest to the target type wins.
    """

    def __init__(self, target_type: type) -> None:
        self._target_type = target_type
        self._hierarchy: Tuple[type, ...] = target_type.__mro__

    @classmethod
    def reflect(cls, target: Any) -> Mirror:
        """
        Creates a Mirror targeting the given type, or the type of the given object.
        """
        return cls(type_of(target))

    @property
    def target_type(self) -> type:
        return self._target_type

    def _declared_fields(self, owner: type) -> List[ReflectedField]:
        annotations = inspect.get_annotations(owner)
        hints = _type_hints(owner) if annotations else {}
        fields = []
        for name, annotation in annotations.items():
            annotation, metadata = _split_annotated(hints.get(name, annotation))
            fields.append(ReflectedField(name, owner, annotation, metadata))
        for name, value in vars(owner).items():
            if name in annotations or _is_dunder(name) or not _is_data(value):
                continue
            fields.append(ReflectedField(name, owner, Any))
        return fields

    def fields(self) -> List[ReflectedField]:
        """
        Reflects the fields declared in the target type and its ancestors.
        """
        return [field for owner in self._hierarchy for field in self._declared_fields(owner)]

    def field(self, name: str) -> Optional[ReflectedField]:
        """
        Reflects the field declared with the given name. Returns None if there is none.
        """
        for owner in self._hierarchy:
            for field in self._declared_fields(owner):
                if field.name == name:
                    return field
        return None

    def _declared_methods(self, owner: type) -> List[ReflectedMethod]:
        return [
            ReflectedMethod(name, owner, member)
            for name, member in vars(owner).items()
            if inspect.isroutine(member)
        ]

    def methods(self) -> List[ReflectedMethod]:
        """
        Reflects the methods declared in the target type and its ancestors.
        """
        return [method for owner in self._hierarchy for method in self._declared_methods(owner)]

    def method(self, name: str, *parameter_types: Any) -> Optional[ReflectedMethod]:
        """
        Reflects the method declared with the given name. If parameter types are given, only a
        method whose positional parameter annotations (after self or cls) are exactly those types
        matches. Returns None if there is no match.
        """
        for owner in self._hierarchy:
            member = vars(owner).get(name)
            if member is None or not inspect.isroutine(member):
                continue
            method = ReflectedMethod(name, owner, member)
            if not parameter_types or method.parameter_types == parameter_types:
                return method
        return None

    def constructors(self) -> List[ReflectedConstructor]:
        """
        Reflects the constructors of the target type: the type itself, then every class method
        declared in the type whose return annotation is the type.
        """
        target = self._target_type
        result = [ReflectedConstructor(target, target)]
        for name, member in vars(target).items():
            if not isinstance(member, classmethod):
                continue
            returns = _type_hints(member.__func__).get("return")
            if returns is None:
                returns = member.__func__.__annotations__.get("return")
            if returns is target or returns in (target.__name__, target.__qualname__):
                result.append(ReflectedConstructor(target, getattr(target, name), name))
        return result

    def constructor(self, *parameter_types: Any) -> Optional[ReflectedConstructor]:
        """
        Reflects the constructor whose positional parameter annotations are exactly the given
        types. Returns None if there is none.
        """
        for constructor in self.constructors():
            if constructor.parameter_types == parameter_types:
                return constructor
        return None
