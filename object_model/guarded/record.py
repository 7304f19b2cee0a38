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

"""Raw records backing guarded objects, and the deep merge filling them."""

import reprlib
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional, Tuple

from ..utils.format import Describable, format_fields
from .base import GuardedInstance


class InstanceRecord(Describable):
    """Attribute bag holding the raw fields of an object instance.

    Each object model derives its own subclass, so class attributes act as
    instance defaults and functions declared there become methods.
    """

    def to_string(self, stack=()) -> str:
        return format_fields(vars(self).items(), (self,) + tuple(stack))

    def type_label(self) -> str:
        return "Object"

    @reprlib.recursive_repr()
    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in vars(self).items())
        return f"{type(self).__name__}({fields})"


def is_plain(value: Any) -> bool:
    """Plain data is deep-copied on merge; model instances and other objects are not."""
    return isinstance(value, Mapping) or type(value) is InstanceRecord


def own_fields(source: Any) -> Iterable[Tuple[str, Any]]:
    if source is None:
        return ()
    if isinstance(source, Mapping):
        return list(source.items())
    if isinstance(source, GuardedInstance):
        return list(type(source).own_items(source))
    if hasattr(source, "__dict__") and not isinstance(source, type):
        return list(vars(source).items())
    return ()


def merge_into(
    target: InstanceRecord,
    source: Any,
    deep: bool = True,
    memo: Optional[Dict[int, InstanceRecord]] = None,
) -> InstanceRecord:
    """Copy the fields of ``source`` into ``target``.

    With ``deep``, nested plain data is copied into fresh records so the
    target never aliases the caller's nested mappings. ``memo`` maps each
    source already copied to its record, so cyclic input yields cyclic records.
    """
    if memo is None:
        memo = {}
    memo[id(source)] = target
    attrs = vars(target)
    for key, value in own_fields(source):
        if deep and is_plain(value):
            if id(value) in memo:
                attrs[key] = memo[id(value)]
                continue
            nested = InstanceRecord()
            existing = getattr(target, key, None)
            if is_plain(existing):
                merge_into(nested, existing, deep, {})
            merge_into(nested, value, deep, memo)
            attrs[key] = nested
        else:
            attrs[key] = value
    return target
