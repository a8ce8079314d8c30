# Copyright Backpack Cloud Contributors. All Rights Reserved.

from typing import Annotated, Optional

from backpack.toolkit.reflection import (
    MethodPredicates,
    Mirror,
    ParameterPredicates,
    reflect_parameters,
)


class Marker:
    def __init__(self, label: str = "") -> None:
        self.label = label

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Marker) and other.label == self.label

    def __hash__(self) -> int:
        return hash(self.label)


def command(fn):
    fn.is_command = True
    return fn


class Shell:
    @command
    def run(self) -> None:
        pass

    def help(self) -> None:
        pass


def target(
    error: ValueError,
    text: Annotated[str, Marker("text")],
    maybe: Optional[int],
    plain,
    flagged: Annotated[bool, "flag"],
):
    pass


PARAMETERS = {parameter.name: parameter for parameter in reflect_parameters(target)}


class TestParameterPredicates:
    def test_of_name(self):
        # GIVEN
        predicate = ParameterPredicates.of_name("text")

        # THEN
        assert predicate(PARAMETERS["text"])
        assert not predicate(PARAMETERS["error"])

    def test_of_type_matches_subtypes(self):
        # THEN
        assert ParameterPredicates.of_type(ValueError)(PARAMETERS["error"])
        assert ParameterPredicates.of_type(Exception)(PARAMETERS["error"])
        assert not ParameterPredicates.of_type(TypeError)(PARAMETERS["error"])

    def test_of_type_ignores_non_class_annotations(self):
        # THEN
        assert not ParameterPredicates.of_type(int)(PARAMETERS["maybe"])
        assert not ParameterPredicates.of_type(int)(PARAMETERS["plain"])

    def test_annotated_with(self):
        # THEN
        assert ParameterPredicates.annotated_with(Marker)(PARAMETERS["text"])
        assert ParameterPredicates.annotated_with(Marker("text"))(PARAMETERS["text"])
        assert not ParameterPredicates.annotated_with(Marker("other"))(PARAMETERS["text"])
        assert ParameterPredicates.annotated_with("flag")(PARAMETERS["flagged"])
        assert not ParameterPredicates.annotated_with(Marker)(PARAMETERS["plain"])


class TestMethodPredicates:
    def test_of_name(self):
        # GIVEN
        method = Mirror(Shell).method("run")

        # THEN
        assert MethodPredicates.of_name("run")(method)
        assert not MethodPredicates.of_name("help")(method)

    def test_decorated_with(self):
        # GIVEN
        predicate = MethodPredicates.decorated_with("is_command")

        # WHEN
        result = [method.name for method in Mirror(Shell).methods() if predicate(method)]

        # THEN
        assert result == ["run"]
