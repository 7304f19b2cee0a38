# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Guarded views over lists, dicts and sets.

Every mutator is replayed on a copy of the backing container first. The copy
is validated against the owning model and the live container is only touched
when the copy passed, so a rejected mutation leaves no trace.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping, MutableSequence, MutableSet
from typing import Any, Callable, Iterable

from ..utils.format import format_value
from .base import GuardedInstance, unwrap

logger = logging.getLogger(__name__)

_MISSING = object()


class GuardedContainer(GuardedInstance):
    """Shared test-then-commit logic of container views."""

    __slots__ = ()

    def _replay(self, operation: Callable[[Any], Any]) -> Any:
        model = self._model
        live = self._target
        trial = type(live)(live)
        operation(trial)

        errors = model.collect_errors(trial)
        if errors:
            logger.debug("Rejected %s mutation: %d error(s)", model.label(), len(errors))
            model.report(errors)
            return None

        result = operation(live)
        model.recast(live)
        return result

    def to_string(self, stack=()) -> str:
        return format_value(self._target, (self,) + tuple(stack))

    def __repr__(self) -> str:
        return f"{self.type_label()}({self._target!r})"


class GuardedList(GuardedContainer, MutableSequence):
    """Live list instance of an ``ArrayModel``."""

    __slots__ = ()

    def __getitem__(self, index):
        return self._target[index]

    def __len__(self) -> int:
        return len(self._target)

    def __iter__(self):
        return iter(self._target)

    def __contains__(self, value: Any) -> bool:
        return value in self._target

    def __eq__(self, other: Any) -> bool:
        other = unwrap(other)
        if isinstance(other, (list, tuple)):
            return self._target == list(other)
        return NotImplemented

    __hash__ = None

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            value = list(value)
        self._replay(lambda items: items.__setitem__(index, value))

    def __delitem__(self, index) -> None:
        self._replay(lambda items: items.__delitem__(index))

    def insert(self, index: int, value: Any) -> None:
        self._replay(lambda items: items.insert(index, value))

    def append(self, value: Any) -> None:
        self._replay(lambda items: items.append(value))

    def extend(self, values: Iterable[Any]) -> None:
        values = list(values)
        self._replay(lambda items: items.extend(values))

    def __iadd__(self, values: Iterable[Any]) -> "GuardedList":
        self.extend(values)
        return self

    def pop(self, index: int = -1) -> Any:
        return self._replay(lambda items: items.pop(index))

    def remove(self, value: Any) -> None:
        self._replay(lambda items: items.remove(value))

    def clear(self) -> None:
        self._replay(lambda items: items.clear())

    def reverse(self) -> None:
        self._replay(lambda items: items.reverse())

    def sort(self, *, key=None, reverse: bool = False) -> None:
        self._replay(lambda items: items.sort(key=key, reverse=reverse))


class GuardedDict(GuardedContainer, MutableMapping):
    """Live dict instance of a ``MapModel``."""

    __slots__ = ()

    def __getitem__(self, key):
        return self._target[key]

    def __len__(self) -> int:
        return len(self._target)

    def __iter__(self):
        return iter(self._target)

    def __contains__(self, key: Any) -> bool:
        return key in self._target

    def __setitem__(self, key, value) -> None:
        self._replay(lambda entries: entries.__setitem__(key, value))

    def __delitem__(self, key) -> None:
        self._replay(lambda entries: entries.__delitem__(key))

    def pop(self, key, default=_MISSING):
        if default is _MISSING:
            return self._replay(lambda entries: entries.pop(key))
        if key not in self._target:
            return default
        return self._replay(lambda entries: entries.pop(key))

    def popitem(self):
        return self._replay(lambda entries: entries.popitem())

    def setdefault(self, key, default=None):
        if key in self._target:
            return self._target[key]
        self._replay(lambda entries: entries.setdefault(key, default))
        return self._target.get(key)

    def update(self, *args, **kwargs) -> None:
        other = dict(*args, **kwargs)
        self._replay(lambda entries: entries.update(other))

    def clear(self) -> None:
        self._replay(lambda entries: entries.clear())


class GuardedSet(GuardedContainer, MutableSet):
    """Live set instance of a ``SetModel``."""

    __slots__ = ()

    @classmethod
    def _from_iterable(cls, iterable):
        return set(iterable)

    def __contains__(self, value: Any) -> bool:
        return value in self._target

    def __iter__(self):
        return iter(self._target)

    def __len__(self) -> int:
        return len(self._target)

    def add(self, value: Any) -> None:
        self._replay(lambda members: members.add(value))

    def discard(self, value: Any) -> None:
        self._replay(lambda members: members.discard(value))

    def remove(self, value: Any) -> None:
        self._replay(lambda members: members.remove(value))

    def pop(self) -> Any:
        # pick from the live set so the trial removes the same member
        value = next(iter(self._target)) if self._target else self._target.pop()
        self.discard(value)
        return None if value in self._target else value

    def clear(self) -> None:
        self._replay(lambda members: members.clear())

    def update(self, *others: Iterable[Any]) -> None:
        others = [list(other) for other in others]
        self._replay(lambda members: members.update(*others))

    def __ior__(self, other):
        self.update(other)
        return self

    def __iand__(self, other):
        other = list(other)
        self._replay(lambda members: members.intersection_update(other))
        return self

    def __isub__(self, other):
        other = list(other)
        self._replay(lambda members: members.difference_update(other))
        return self

    def __ixor__(self, other):
        other = list(other)
        self._replay(lambda members: members.symmetric_difference_update(other))
        return self
