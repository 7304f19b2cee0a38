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

"""Read-only inspection of models and their instances.

Nothing here triggers validation or reporting.
"""

from typing import Any, List

from .guarded.base import model_of
from .guarded.object_view import GuardedObject
from .guarded.object_view import enumerable_keys as _view_keys

__all__ = [
    "definition_of",
    "describe",
    "enumerable_keys",
    "is_constant_key",
    "is_private_key",
    "model_of",
]


def definition_of(model: Any) -> Any:
    """Return the parsed definition node of ``model``."""
    return model.definition


def describe(model: Any) -> str:
    return model.to_string()


def is_private_key(model: Any, key: str) -> bool:
    return model.settings.convention_for_private(key)


def is_constant_key(model: Any, key: str) -> bool:
    return model.settings.convention_for_constant(key)


def enumerable_keys(instance: Any) -> List[Any]:
    """Keys an inspector may list for ``instance``.

    Object instances list their stored, declared, non-private fields; other
    containers list their keys or indices.
    """
    if isinstance(instance, GuardedObject):
        return _view_keys(instance)
    if hasattr(instance, "keys"):
        return list(instance.keys())
    if hasattr(instance, "__len__") and hasattr(instance, "__getitem__"):
        return list(range(len(instance)))
    return []
