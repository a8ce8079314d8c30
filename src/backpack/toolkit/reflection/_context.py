# Copyright Backpack Cloud Contributors. All Rights Reserved.

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Dict, List, Sequence, Tuple, TypeVar, Union

from ..exceptions import UnbelievableException
from ._members import ReflectedConstructor, ReflectedMethod, ReflectedParameter, reflect_parameters
from ._mirror import Mirror

__all__ = ["Context"]

_logger = logging.getLogger(__name__)

_T = TypeVar("_T")

Condition = Callable[[ReflectedParameter], bool]
Resolver = Callable[[ReflectedParameter], Any]
Target = Union[Callable, ReflectedMethod, ReflectedConstructor, Sequence[ReflectedParameter]]


class Context:
    """
    Resolves arguments for parameters based on rules.

    Rules are checked in the order they were added and only the first matching rule is used. A
    parameter no rule matches is resolved by the default rule. None means the parameter could not
    be resolved.

        context = (
            Context()
            .when(ParameterPredicates.of_type(str), "foo")
            .when_supplied(ParameterPredicates.of_name("error"), RuntimeError)
        )
        service = context.create(Service)
    """

    def __init__(
        self,
        default: Any = None,
        *,
        supplier: Callable[[], Any] | None = None,
        function: Resolver | None = None,
    ) -> None:
        """
        Args:
            default (Any, optional): The value to resolve parameters to by default.
            supplier (Callable[[], Any], optional): Supplies the value to resolve parameters to by
            default. Takes precedence over the default value.
            function (Callable[[ReflectedParameter], Any], optional): Resolves parameters by
            default. Takes precedence over the supplier and the default value.
        """
        if function is not None:
            self._default: Resolver = function
        elif supplier is not None:
            self._default = lambda parameter: supplier()
        else:
            self._default = lambda parameter: default
        self._rules: List[Tuple[Condition, Resolver]] = []

    def when(self, condition: Condition, value: Any) -> Context:
        """
        Resolves parameters that match the condition to the given value.
        """
        return self.when_resolved(condition, lambda parameter: value)

    def when_supplied(self, condition: Condition, supplier: Callable[[], Any]) -> Context:
        """
        Resolves parameters that match the condition to the value the supplier returns.
        """
        return self.when_resolved(condition, lambda parameter: supplier())

    def when_resolved(self, condition: Condition, function: Resolver) -> Context:
        """
        Resolves parameters that match the condition with the given function.
        """
        self._rules.append((condition, function))
        return self

    def resolve(self, parameter: ReflectedParameter) -> Any:
        for condition, function in self._rules:
            if condition(parameter):
                return function(parameter)
        return self._default(parameter)

    def resolve_all(self, target: Target) -> List[Any]:
        """
        Resolves every parameter of a callable, a reflected method or constructor, or a list of
        parameters, in order.
        """
        return [self.resolve(parameter) for parameter in self._parameters_of(target)]

    def create(self, cls: type[_T]) -> _T:
        """
        Creates an instance of the given type, resolving the constructor arguments with this
        context.

        If the type has a single constructor, it is used with whatever arguments were resolved.
        Otherwise the first constructor whose required parameters all resolve to something other
        than None is used. Parameters with a default value are left out when they resolve to None.

        Raises:
            UnbelievableException: Raised when there is no usable constructor or the constructor
            fails.
        """
        constructors = Mirror(cls).constructors()
        if len(constructors) == 1:
            args, kwargs = self._arguments(constructors[0], strict=False)  # type: ignore
            return self._new_instance(constructors[0], args, kwargs)

        for constructor in constructors:
            arguments = self._arguments(constructor, strict=True)
            if arguments is not None:
                return self._new_instance(constructor, *arguments)

        errmsg = f"Unable to create an instance of {cls.__qualname__}"
        _logger.error(errmsg)
        raise UnbelievableException(errmsg)

    def _arguments(
        self, constructor: ReflectedConstructor, *, strict: bool
    ) -> Tuple[List[Any], Dict[str, Any]] | None:
        args: List[Any] = []
        kwargs: Dict[str, Any] = {}
        for parameter in constructor.parameters:
            if parameter.is_variadic:
                continue
            value = self.resolve(parameter)
            if value is None and parameter.has_default:
                continue
            if value is None and strict:
                return None
            if parameter.kind == inspect.Parameter.POSITIONAL_ONLY:
                args.append(value)
            else:
                kwargs[parameter.name] = value
        return args, kwargs

    def _new_instance(
        self, constructor: ReflectedConstructor, args: List[Any], kwargs: Dict[str, Any]
    ) -> Any:
        try:
            return constructor.new_instance(*args, **kwargs)
        except Exception as e:
            errmsg = f"Failed to create an instance with {constructor!r}: {e}"
            _logger.error(errmsg)
            raise UnbelievableException(errmsg) from e

    @staticmethod
    def _parameters_of(target: Any) -> List[ReflectedParameter]:
        if isinstance(target, (ReflectedMethod, ReflectedConstructor)):
            return target.parameters
        if isinstance(target, Sequence):
            return list(target)
        return reflect_parameters(target)
