# Copyright Backpack Cloud Contributors. All Rights Reserved.

import dataclasses
from typing import Annotated, List

import pytest

from backpack.toolkit.exceptions import UnbelievableException
from backpack.toolkit.reflection import (
    Context,
    Mirror,
    ParameterPredicates,
    ReflectedParameter,
    reflect_parameters,
)


class Deprecated:
    pass


class Worker:
    def do_with_text(self, text: str) -> None:
        pass

    def do_with_error(self, error: Exception) -> None:
        pass

    def do_all(
        self, text: str, error: Exception, number: Annotated[int, Deprecated()]
    ) -> None:
        pass


def standalone(text: str, count: int) -> None:
    pass


class Greeter:
    def __init__(self, name: str, punctuation: str = "!") -> None:
        self.message = f"Hello {name}{punctuation}"


class Holder:
    def __init__(self, value: int) -> None:
        self.value = value


class Endpoint:
    def __init__(self, host: str, port: int) -> None:
        self.host = host
        self.port = port

    @classmethod
    def of_port(cls, port: int) -> "Endpoint":
        return cls("localhost", port)


class Fails:
    def __init__(self) -> None:
        raise ValueError("boom")


class WithVariadics:
    def __init__(self, name: str, *args, **kwargs) -> None:
        self.name = name
        self.args = args
        self.kwargs = kwargs


@dataclasses.dataclass
class Job:
    name: Annotated[str, Deprecated()]
    retries: int = 3


@pytest.fixture
def context() -> Context:
    return (
        Context()
        .when(ParameterPredicates.of_type(str), "foo")
        .when_supplied(ParameterPredicates.of_type(Exception), UnbelievableException)
        .when(ParameterPredicates.annotated_with(Deprecated), 10)
    )


class TestResolve:
    def test_single_parameter(self, context: Context):
        # GIVEN
        method = Mirror(Worker).method("do_with_text", str)

        # WHEN
        args = context.resolve_all(method)

        # THEN
        assert args == ["foo"]

    def test_supplied_values(self, context: Context):
        # GIVEN
        method = Mirror(Worker).method("do_with_error", Exception)

        # WHEN
        args = context.resolve_all(method)
        other_args = context.resolve_all(method)

        # THEN
        assert len(args) == 1
        assert isinstance(args[0], UnbelievableException)
        assert args[0] is not other_args[0]

    def test_multiple_parameters(self, context: Context):
        # GIVEN
        method = Mirror(Worker).method("do_all", str, Exception, int)

        # WHEN
        args = context.resolve_all(method)

        # THEN
        assert len(args) == 3
        assert args[0] == "foo"
        assert isinstance(args[1], UnbelievableException)
        assert args[2] == 10

    def test_first_matching_rule_wins(self):
        # GIVEN
        context = (
            Context()
            .when(ParameterPredicates.of_name("text"), "by name")
            .when(ParameterPredicates.of_type(str), "by type")
        )

        # WHEN
        args = context.resolve_all(standalone)

        # THEN
        assert args == ["by name", None]

    def test_default_value(self):
        # THEN
        assert Context("x").resolve_all(standalone) == ["x", "x"]

    def test_default_supplier(self):
        # GIVEN
        supplied: List[int] = []

        def supplier() -> int:
            supplied.append(1)
            return len(supplied)

        # WHEN
        args = Context(supplier=supplier).resolve_all(standalone)

        # THEN
        assert args == [1, 2]

    def test_default_function(self):
        # WHEN
        args = Context(function=lambda parameter: parameter.name).resolve_all(standalone)

        # THEN
        assert args == ["text", "count"]

    def test_when_resolved(self):
        # GIVEN
        context = Context().when_resolved(
            ParameterPredicates.of_type(int), lambda parameter: parameter.position
        )

        # WHEN
        args = context.resolve_all(reflect_parameters(standalone))

        # THEN
        assert args == [None, 1]

    def test_resolve(self, context: Context):
        # GIVEN
        parameter: ReflectedParameter = reflect_parameters(standalone)[0]

        # THEN
        assert context.resolve(parameter) == "foo"


class TestCreate:
    def test_single_constructor(self):
        # GIVEN
        context = Context().when(ParameterPredicates.of_name("name"), "ana")

        # WHEN
        result = context.create(Greeter)

        # THEN
        assert result.message == "Hello ana!"

    def test_single_constructor_gets_unresolved_arguments(self):
        # WHEN
        result = Context().create(Holder)

        # THEN
        assert result.value is None

    def test_first_fully_resolved_constructor(self):
        # GIVEN
        context = Context().when(ParameterPredicates.of_type(int), 8080)

        # WHEN
        result = context.create(Endpoint)

        # THEN
        assert result.host == "localhost"
        assert result.port == 8080

    def test_primary_constructor_first(self):
        # GIVEN
        context = (
            Context()
            .when(ParameterPredicates.of_type(int), 8080)
            .when(ParameterPredicates.of_type(str), "example.com")
        )

        # WHEN
        result = context.create(Endpoint)

        # THEN
        assert result.host == "example.com"

    def test_no_usable_constructor(self, caplog: pytest.LogCaptureFixture):
        # WHEN
        with pytest.raises(UnbelievableException) as raised_err:
            Context().create(Endpoint)

        # THEN
        assert str(raised_err.value) == "Unable to create an instance of Endpoint"
        assert "Unable to create an instance of Endpoint" in caplog.text

    def test_constructor_failure_is_wrapped(self):
        # WHEN
        with pytest.raises(UnbelievableException) as raised_err:
            Context().create(Fails)

        # THEN
        assert isinstance(raised_err.value.__cause__, ValueError)
        assert str(raised_err.value) == (
            "Failed to create an instance with ReflectedConstructor(Fails, 'Fails'): boom"
        )

    def test_dataclass(self):
        # GIVEN
        context = Context().when(ParameterPredicates.annotated_with(Deprecated), "nightly")

        # WHEN
        result = context.create(Job)

        # THEN
        assert result == Job("nightly", 3)

    def test_variadic_parameters_are_skipped(self):
        # WHEN
        result = Context("value").create(WithVariadics)

        # THEN
        assert result.name == "value"
        assert result.args == ()
        assert result.kwargs == {}
