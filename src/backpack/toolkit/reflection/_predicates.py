# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

from typing import Any, Callable

from ._members import ReflectedMethod, ReflectedParameter

__all__ = [
    "MethodPredicates",
    "ParameterPredicates",
]


class ParameterPredicates:
    """
    Predicates to use with reflected parameters.
    """

    @staticmethod
    def of_name(name: str) -> Callable[[ReflectedParameter], bool]:
        return lambda parameter: parameter.name == name

    @staticmethod
    def of_type(type_: type) -> Callable[[ReflectedParameter], bool]:
        """
        Tests if a parameter is annotated with the given type or one of its subtypes.
        """

        def test(parameter: ReflectedParameter) -> bool:
            annotation = parameter.annotation
            return isinstance(annotation, type) and issubclass(annotation, type_)

        return test

    @staticmethod
    def annotated_with(marker: Any) -> Callable[[ReflectedParameter], bool]:
        """
        Tests if a parameter carries the given typing.Annotated metadata. The marker can be the
        metadata object itself or its type, e.g. both match Annotated[int, Deprecated()] when
        given Deprecated.
        """

        def test(parameter: ReflectedParameter) -> bool:
            for metadata in parameter.metadata:
                if metadata is marker or metadata == marker:
                    return True
                if isinstance(marker, type) and isinstance(metadata, marker):
                    return True
            return False

        return test


class MethodPredicates:
    """
    Predicates to use with reflected methods.
    """

    @staticmethod
    def of_name(name: str) -> Callable[[ReflectedMethod], bool]:
        return lambda method: method.name == name

    @staticmethod
    def decorated_with(attribute: str) -> Callable[[ReflectedMethod], bool]:
        """
        Tests if a method was marked by a decorator that sets the given attribute to a truthy
        value on the function.
        """
        return lambda method: bool(getattr(method.function, attribute, False))
