"""Property-based checks of the validation engine."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from object_model import ArrayModel, BasicModel, ObjectModel, ValidationError

_DEFINITIONS = st.sampled_from([int, float, str, bool, [int], [str, int], "a", 0])

_VALUES = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.floats(allow_nan=True),
    st.text(max_size=5),
    st.lists(st.integers(), max_size=3),
    st.dictionaries(st.text(max_size=3), st.integers(), max_size=3),
)


@settings(max_examples=200, deadline=None)
@given(definition=_DEFINITIONS, value=_VALUES)
def test_test_agrees_with_validate(definition, value) -> None:
    model = BasicModel(definition)
    batches = []

    model.validate(value, error_collector=batches.append)

    assert model.test(value) is (batches == [])


@settings(deadline=None)
@given(definition=st.sampled_from([int, float, str, bool, bytes, "x", 3]))
def test_single_member_union_accepts_none(definition) -> None:
    assert BasicModel([definition]).test(None)


@settings(deadline=None)
@given(values=st.lists(st.integers(), max_size=6))
def test_revalidation_keeps_cast_identity(values) -> None:
    Item = ObjectModel({"n": int})
    Items = ArrayModel(Item)
    items = Items([{"n": value} for value in values])
    before = [id(item) for item in items]

    assert Items.collect_errors(items) == []
    assert [id(item) for item in items] == before


@settings(deadline=None)
@given(
    low=st.integers(-100, 100),
    high=st.integers(-100, 100),
    proposed=st.one_of(st.integers(-200, 200), st.text(max_size=3), st.none()),
)
def test_rejected_writes_are_atomic(low, high, proposed) -> None:
    Range = ObjectModel({"low": int, "high": int, "label": [str]}).assert_(
        lambda r: r.low <= r.high, "ordered"
    )
    lo, hi = min(low, high), max(low, high)
    instance = Range(low=lo, high=hi)
    before = (instance.low, instance.high, list(instance))

    try:
        instance.low = proposed
    except ValidationError:
        assert (instance.low, instance.high, list(instance)) == before
    else:
        assert isinstance(proposed, int) and proposed <= hi
        assert instance.low == proposed


def test_bool_is_not_an_int() -> None:
    with pytest.raises(ValidationError):
        BasicModel(int)(True)
