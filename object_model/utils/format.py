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

"""Rendering helpers for values and definitions in error messages."""

import math
from collections.abc import Mapping
from typing import Any, Tuple

MAX_RENDER_DEPTH = 15


class Describable:
    """Base for objects that render themselves as a type expression.

    Implementations are looked up on the class so that guarded views, whose
    attribute access is intercepted, can still be rendered.
    """

    __slots__ = ()

    def to_string(self, stack: Tuple[Any, ...] = ()) -> str:
        raise NotImplementedError

    def type_label(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        return type(self).to_string(self)


def _in_stack(obj: Any, stack: Tuple[Any, ...]) -> bool:
    return any(obj is item for item in stack)


def format_value(obj: Any, stack: Tuple[Any, ...] = ()) -> str:
    """Render a value the way error messages quote it."""
    if len(stack) > MAX_RENDER_DEPTH or _in_stack(obj, stack):
        return "..."
    if obj is None:
        return "None"
    if isinstance(obj, str):
        return f'"{obj}"'
    if isinstance(obj, Describable):
        return type(obj).to_string(obj, stack)
    stack = (obj,) + stack
    if isinstance(obj, BaseException):
        return f"{type(obj).__name__}: {obj}"
    if isinstance(obj, type):
        return obj.__name__
    if isinstance(obj, float) and math.isnan(obj):
        return "nan"
    if isinstance(obj, (list, tuple)):
        return "[" + ", ".join(format_value(item, stack) for item in obj) + "]"
    if isinstance(obj, (set, frozenset)):
        return "{" + ", ".join(sorted(format_value(item, stack) for item in obj)) + "}"
    if isinstance(obj, Mapping):
        return format_fields(obj.items(), stack)
    if callable(obj):
        return getattr(obj, "__name__", None) or repr(obj)
    if type(obj).__repr__ is object.__repr__ and hasattr(obj, "__dict__"):
        return format_fields(vars(obj).items(), stack)
    return repr(obj)


def format_fields(items, stack: Tuple[Any, ...] = ()) -> str:
    parts = [f"{key}: {format_value(value, stack)}" for key, value in items]
    if not parts:
        return "{}"
    return "{ " + ", ".join(parts) + " }"


def type_name(obj: Any) -> str:
    """Runtime type name shown next to a received value."""
    if isinstance(obj, Describable):
        return type(obj).type_label(obj)
    return type(obj).__name__
