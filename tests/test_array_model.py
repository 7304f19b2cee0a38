"""Array models and guarded lists."""

from __future__ import annotations

import pytest

from object_model import ArrayModel, GuardedList, ObjectModel, ValidationError


def test_rejected_append_leaves_the_list_unchanged() -> None:
    Numbers = ArrayModel(float)
    numbers = Numbers([1, 2, 3])

    with pytest.raises(ValidationError, match='expecting Array\\[3\\] to be float, got str "x"'):
        numbers.append("x")
    assert numbers == [1, 2, 3]

    numbers.append(4)
    assert numbers == [1, 2, 3, 4]


def test_construction_copies_and_validates() -> None:
    Numbers = ArrayModel(int)
    source = [1, 2]

    numbers = Numbers(source)
    numbers.append(3)

    assert isinstance(numbers, GuardedList)
    assert isinstance(numbers, Numbers)
    assert source == [1, 2]
    assert Numbers(numbers) is numbers
    with pytest.raises(ValidationError, match="expecting Array\\[1\\] to be int"):
        Numbers([1, "2"])
    with pytest.raises(ValidationError, match='expecting Array of int, got str "12"'):
        Numbers("12")


def test_whole_list_assertions_guard_every_mutator() -> None:
    Sorted = ArrayModel(int).assert_(lambda items: items == sorted(items), "sorted")
    values = Sorted([1, 2, 3])

    for mutate in (
        lambda: values.append(0),
        lambda: values.insert(0, 9),
        lambda: values.reverse(),
        lambda: values.extend([5, 4]),
        lambda: values.__setitem__(0, 7),
        lambda: values.sort(reverse=True),
    ):
        with pytest.raises(ValidationError, match="sorted"):
            mutate()
        assert values == [1, 2, 3]

    values.insert(0, 0)
    values += [4, 5]
    del values[-1]
    assert values == [0, 1, 2, 3, 4]
    assert values.pop() == 4
    values.remove(0)
    values[0:2] = [1, 1]
    assert values == [1, 1, 3]


def test_length_assertion_checks_removals() -> None:
    NonEmpty = ArrayModel(str).assert_(lambda items: len(items) > 0, "not empty")
    words = NonEmpty(["a"])

    with pytest.raises(ValidationError):
        words.clear()
    with pytest.raises(ValidationError):
        words.pop()
    assert list(words) == ["a"]


def test_rejected_mutation_returns_none_with_a_collecting_strategy(collecting_settings, collected) -> None:
    Numbers = ArrayModel(int, settings=collecting_settings)
    numbers = Numbers([1])

    assert numbers.pop() == 1
    numbers.append(2)
    assert numbers.append("x") is None
    assert numbers == [2]
    assert len(collected) == 1


def test_elements_are_cast_to_models() -> None:
    Person = ObjectModel({"name": str, "age": [int]}, name="Person")
    People = ArrayModel(Person)

    people = People([{"name": "Joe"}])
    people.append({"name": "Ann", "age": 3})

    assert all(isinstance(person, Person) for person in people)
    assert people[1].age == 3
    with pytest.raises(ValidationError):
        people[0].name = 5


def test_optional_elements_and_rendering() -> None:
    Maybe = ArrayModel([int])

    assert Maybe.test([1, None])
    assert str(Maybe) == "Array of int or None"
    assert str(ArrayModel(ArrayModel(str))) == "Array of Array of str"
    assert repr(Maybe([1])) == "Array([1])"


def test_extend_unions_element_definitions() -> None:
    Numbers = ArrayModel(int)
    Mixed = Numbers.extend(str)

    assert Mixed.test([1, "a"])
    assert not Numbers.test([1, "a"])
