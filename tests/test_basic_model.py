"""Leaf models: validation, assertions, defaults, composition and reporting."""

from __future__ import annotations

import logging
import math
import re

import pytest

from object_model import BasicModel, DefinitionError, ErrorRecord, ValidationError


def test_model_requires_a_definition() -> None:
    with pytest.raises(DefinitionError):
        BasicModel()


def test_calling_the_model_returns_a_valid_value() -> None:
    Name = BasicModel(str)

    assert Name("joe") == "joe"
    with pytest.raises(ValidationError) as exc_info:
        Name(42)
    assert str(exc_info.value) == "expecting str, got int 42"


def test_validation_error_is_a_type_error_carrying_records() -> None:
    with pytest.raises(TypeError) as exc_info:
        BasicModel(int)("1")

    records = exc_info.value.errors
    assert len(records) == 1
    assert isinstance(records[0], ErrorRecord)
    assert records[0].received == "1"


@pytest.mark.parametrize(
    ("definition", "value", "expected"),
    [
        (int, 1, True),
        (int, 1.5, False),
        (int, True, False),
        (float, 1, True),
        (float, 1.5, True),
        (float, math.nan, False),
        (float, False, False),
        (bool, True, True),
        (str, "", True),
        (1, 1, True),
        (1, True, False),
        (["a", "b"], "b", True),
        (["a", "b"], "c", False),
        (["a", "b"], None, False),
        ([str], None, True),
        (re.compile(r"^\d+$"), "123", True),
        (re.compile(r"^\d+$"), 123, True),
        (re.compile(r"^\d+$"), "12a", False),
        (None, None, True),
    ],
)
def test_matching_rules(definition, value, expected) -> None:
    assert BasicModel(definition).test(value) is expected


def test_assertions_run_after_structural_checks() -> None:
    Age = BasicModel(float).assert_(lambda value: value >= 0, "non negative")

    assert Age(3) == 3
    with pytest.raises(ValidationError) as exc_info:
        Age(-1)
    assert str(exc_info.value) == 'assertion "non negative" returned False for value -1'


def test_assertion_raising_is_recorded_as_failure() -> None:
    def explode(value):
        raise RuntimeError("boom")

    Model = BasicModel([int]).assert_(explode)

    with pytest.raises(ValidationError) as exc_info:
        Model(1)
    assert 'assertion "explode" returned RuntimeError: boom for value 1' in str(exc_info.value)


def test_assertion_must_return_exactly_true() -> None:
    Model = BasicModel(str).assert_(lambda value: value)

    assert not Model.test("truthy")


def test_callable_description_builds_the_message() -> None:
    Even = BasicModel(int).assert_(
        lambda value: value % 2 == 0,
        lambda result, value: f"{value} is odd",
    )

    with pytest.raises(ValidationError, match="^3 is odd$"):
        Even(3)


def test_all_errors_of_a_pass_are_reported_together() -> None:
    Model = BasicModel(int).assert_(lambda v: False, "first").assert_(lambda v: False, "second")

    with pytest.raises(ValidationError) as exc_info:
        Model("x")
    assert len(exc_info.value.errors) == 3


def test_default_is_used_without_argument() -> None:
    Greeting = BasicModel(str).default_to("hello")

    assert Greeting() == "hello"


def test_extend_creates_a_wider_model_and_keeps_the_parent() -> None:
    Number = BasicModel(float)
    Label = BasicModel(str)

    Either = Number.extend(Label)

    assert Either.test("a")
    assert not Number.test("a")
    assert Either.parent is Number
    assert str(Either) == "float or str"


def test_extend_concatenates_assertions() -> None:
    Short = BasicModel(str).assert_(lambda v: len(v) < 5, "short")
    Lower = BasicModel(str).assert_(lambda v: v == v.lower(), "lower")

    Both = Short.extend(Lower)

    assert Both.test("abc")
    assert not Both.test("ABC")
    assert not Both.test("abcdef")
    assert len(Short.assertions) == 1


def test_error_collector_receives_the_batch(collected) -> None:
    Model = BasicModel(int)

    Model.validate("x", error_collector=collected.append)

    assert len(collected) == 1
    assert collected[0][0].describe() == 'expecting int, got str "x"'


def test_error_collector_is_not_called_without_errors(collected) -> None:
    BasicModel(int).validate(1, error_collector=collected.append)

    assert collected == []


def test_log_strategy_does_not_raise(logging_settings, caplog) -> None:
    Model = BasicModel(int, settings=logging_settings)

    with caplog.at_level(logging.ERROR, logger="object_model.reporting"):
        assert Model("x") == "x"

    assert 'expecting int, got str "x"' in caplog.text


def test_named_model_renders_its_name() -> None:
    Age = BasicModel(int, name="Age")

    assert str(Age) == "int"
    assert Age.label() == "Age"
    assert repr(Age) == "<BasicModel Age>"
