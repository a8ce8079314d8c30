# Copyright Backpack Cloud Contributors. All Rights Reserved.

from ._class_iterator import class_hierarchy, type_of
from ._context import Context
from ._members import (
    ReflectedConstructor,
    ReflectedField,
    ReflectedMethod,
    ReflectedParameter,
    reflect_parameters,
)
from ._mirror import Mirror
from ._predicates import MethodPredicates, ParameterPredicates

__all__ = [
    "Context",
    "MethodPredicates",
    "Mirror",
    "ParameterPredicates",
    "ReflectedConstructor",
    "ReflectedField",
    "ReflectedMethod",
    "ReflectedParameter",
    "class_hierarchy",
    "reflect_parameters",
    "type_of",
]
