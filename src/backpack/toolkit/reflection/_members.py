# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import dataclasses
import inspect
import logging
import typing
from typing import Annotated, Any, Callable, Dict, List, Tuple

__all__ = [
    "ReflectedConstructor",
    "ReflectedField",
    "ReflectedMethod",
    "ReflectedParameter",
    "reflect_parameters",
]

_logger = logging.getLogger(__name__)

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def _type_hints(obj: Any) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(obj, include_extras=True)
    except (NameError, TypeError, AttributeError) as e:
        # Unresolvable forward references are left as written.
        _logger.debug(f"Could not resolve type hints of {obj!r}: {e}")
        return {}


def _split_annotated(annotation: Any) -> Tuple[Any, Tuple[Any, ...]]:
    if typing.get_origin(annotation) is Annotated:
        base, *metadata = typing.get_args(annotation)
        return base, tuple(metadata)
    return annotation, ()


@dataclasses.dataclass(frozen=True)
class ReflectedParameter:
    """
    A parameter of a function, with its annotation resolved.

    Attributes:
        name (str): The parameter name.
        annotation (Any): The resolved annotation, without any typing.Annotated wrapper. Any when
        the parameter is not annotated.
        metadata (tuple): The typing.Annotated metadata of the annotation.
        kind: The inspect.Parameter kind.
        default (Any): The default value, inspect.Parameter.empty when there is none.
        position (int): The position of the parameter in the signature.
    """

    name: str
    annotation: Any
    metadata: Tuple[Any, ...]
    kind: Any
    default: Any
    position: int

    @property
    def has_default(self) -> bool:
        return self.default is not inspect.Parameter.empty

    @property
    def is_variadic(self) -> bool:
        return self.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def reflect_parameters(
    function: Callable,
    *,
    skip_first: bool = False,
    hints_from: Any = None,
) -> List[ReflectedParameter]:
    """
    Reflects the parameters of a callable.

    Args:
        function (Callable): The callable to reflect.
        skip_first (bool): Whether to leave out the first parameter (self or cls).
        hints_from (Any, optional): The object to resolve type hints from. Defaults to the callable.

    Returns:
        list[ReflectedParameter]: The parameters, empty if the callable has no signature.
    """
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        return []

    hints = _type_hints(hints_from if hints_from is not None else function)
    parameters = list(signature.parameters.values())
    if skip_first:
        parameters = parameters[1:]

    result = []
    for position, parameter in enumerate(parameters):
        annotation = hints.get(parameter.name, parameter.annotation)
        if annotation is inspect.Parameter.empty:
            annotation = Any
        annotation, metadata = _split_annotated(annotation)
        result.append(
            ReflectedParameter(
                name=parameter.name,
                annotation=annotation,
                metadata=metadata,
                kind=parameter.kind,
                default=parameter.default,
                position=position,
            )
        )
    return result


def _parameter_types(parameters: List[ReflectedParameter]) -> Tuple[Any, ...]:
    return tuple(p.annotation for p in parameters if p.kind in _POSITIONAL_KINDS)


@dataclasses.dataclass(frozen=True)
class ReflectedField:
    """
    A class-level data attribute or annotated name.
    """

    name: str
    declaring_type: type
    annotation: Any
    metadata: Tuple[Any, ...] = ()

    def get(self, target: Any = None) -> Any:
        """
        Gets the value of this field in the target, or in the declaring type if no target is given.
        """
        return getattr(self.declaring_type if target is None else target, self.name)

    def set(self, target: Any, value: Any) -> None:
        setattr(target, self.name, value)


class ReflectedMethod:
    """
    A routine declared in a class: an instance method, a class method or a static method.
    """

    def __init__(self, name: str, declaring_type: type, member: Any) -> None:
        self._name = name
        self._declaring_type = declaring_type
        if isinstance(member, classmethod):
            self._kind = "class"
        elif isinstance(member, staticmethod):
            self._kind = "static"
        else:
            self._kind = "instance"
        self._function = getattr(member, "__func__", member)
        self._parameters: List[ReflectedParameter] | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def declaring_type(self) -> type:
        return self._declaring_type

    @property
    def kind(self) -> str:
        """
        One of "instance", "class" or "static".
        """
        return self._kind

    @property
    def function(self) -> Callable:
        """
        The underlying function, unwrapped from any classmethod or staticmethod.
        """
        return self._function

    @property
    def parameters(self) -> List[ReflectedParameter]:
        """
        The parameters of this method, without self or cls.
        """
        if self._parameters is None:
            self._parameters = reflect_parameters(
                self._function, skip_first=self._kind != "static"
            )
        return self._parameters

    @property
    def parameter_types(self) -> Tuple[Any, ...]:
        return _parameter_types(self.parameters)

    @property
    def return_annotation(self) -> Any:
        return _type_hints(self._function).get("return", Any)

    def invoke(self, target: Any, *args, **kwargs) -> Any:
        """
        Invokes this method. The target is ignored by static methods, and class methods get the
        type of the target.
        """
        if self._kind == "static":
            return self._function(*args, **kwargs)
        if self._kind == "class":
            owner = target if isinstance(target, type) else type(target)
            return self._function(owner, *args, **kwargs)
        return self._function(target, *args, **kwargs)

    def __repr__(self) -> str:
        return f"ReflectedMethod({self._declaring_type.__qualname__}.{self._name})"


class ReflectedConstructor:
    """
    A way of creating instances of a type: the type itself, or an alternative constructor class
    method.
    """

    def __init__(self, declaring_type: type, factory: Callable, name: str | None = None) -> None:
        self._declaring_type = declaring_type
        self._factory = factory
        self._name = name or declaring_type.__name__
        self._parameters: List[ReflectedParameter] | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def declaring_type(self) -> type:
        return self._declaring_type

    @property
    def parameters(self) -> List[ReflectedParameter]:
        if self._parameters is None:
            if self._factory is self._declaring_type:
                init = self._declaring_type.__init__
                if dataclasses.is_dataclass(self._declaring_type):
                    hints_from = self._declaring_type
                else:
                    hints_from = init if inspect.isfunction(init) else None
                self._parameters = reflect_parameters(self._declaring_type, hints_from=hints_from)
            else:
                self._parameters = reflect_parameters(self._factory)
        return self._parameters

    @property
    def parameter_types(self) -> Tuple[Any, ...]:
        return _parameter_types(self.parameters)

    def new_instance(self, *args, **kwargs) -> Any:
        return self._factory(*args, **kwargs)

    def __repr__(self) -> str:
        return f"ReflectedConstructor({self._declaring_type.__qualname__}, {self._name!r})"
