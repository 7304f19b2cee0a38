"""Map and set models and their guarded containers."""

from __future__ import annotations

import pytest

from object_model import GuardedDict, GuardedSet, MapModel, ObjectModel, SetModel, ValidationError


def test_map_values_are_validated() -> None:
    Scores = MapModel(float)
    scores = Scores({"ann": 1})

    with pytest.raises(ValidationError, match='expecting Map\\[bob\\] to be float, got str "x"'):
        scores["bob"] = "x"
    assert "bob" not in scores

    scores["bob"] = 2.5
    scores.update(cid=3)
    assert dict(scores) == {"ann": 1, "bob": 2.5, "cid": 3}
    assert isinstance(scores, GuardedDict)
    assert isinstance(scores, Scores)


def test_map_keys_are_validated_when_declared() -> None:
    Scores = MapModel(float, keys=str)
    scores = Scores([("ann", 1)])

    with pytest.raises(ValidationError, match="expecting Map\\[1\\] to be str, got int 1"):
        scores[1] = 2
    assert str(Scores) == "Map of str : float"
    assert str(MapModel(int)) == "Map of int"


def test_map_assertions_guard_removals() -> None:
    Required = MapModel(str).assert_(lambda entries: "id" in entries, "has id")
    record = Required({"id": "1", "name": "x"})

    with pytest.raises(ValidationError, match="has id"):
        del record["id"]
    with pytest.raises(ValidationError):
        record.pop("id")
    with pytest.raises(ValidationError):
        record.clear()
    assert record.pop("name") == "x"
    assert record.pop("missing", None) is None
    assert record.setdefault("id", "2") == "1"
    assert record.setdefault("extra", "e") == "e"
    assert record == {"id": "1", "extra": "e"}


def test_map_values_are_cast() -> None:
    Point = ObjectModel({"x": int, "y": int})
    Places = MapModel(Point)

    places = Places({"home": {"x": 1, "y": 2}})
    places["work"] = {"x": 3, "y": 4}

    assert isinstance(places["home"], Point)
    assert isinstance(places["work"], Point)


def test_set_membership_is_validated() -> None:
    Tags = SetModel(str)
    tags = Tags(["a", "a"])

    with pytest.raises(ValidationError, match="expecting Set to be str, got int 1"):
        tags.add(1)
    tags.add("b")

    assert tags == {"a", "b"}
    assert isinstance(tags, GuardedSet)
    assert isinstance(tags, Tags)
    assert (tags | {"c"}) == {"a", "b", "c"}


def test_set_in_place_operators_are_transactional() -> None:
    Small = SetModel(int).assert_(lambda members: len(members) <= 3, "at most three")
    numbers = Small({1, 2})

    with pytest.raises(ValidationError, match="at most three"):
        numbers |= {3, 4}
    assert numbers == {1, 2}

    numbers |= {3}
    numbers -= {1}
    numbers &= {2, 3, 9}
    numbers ^= {2}
    assert numbers == {3}
    numbers.discard(3)
    assert len(numbers) == 0
    with pytest.raises(KeyError):
        numbers.pop()


def test_set_rendering() -> None:
    assert str(SetModel([str])) == "Set of str or None"
