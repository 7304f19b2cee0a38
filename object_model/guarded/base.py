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

"""Common base of guarded views."""

from typing import Any, Iterable, Tuple

from ..utils.format import Describable


class GuardedInstance(Describable):
    """A live view enforcing its model on every mutation.

    The model and the raw backing structure live in slots and are read with
    ``object.__getattribute__`` so that views intercepting attribute access
    never expose them by accident.
    """

    __slots__ = ("_model", "_target")

    def __init__(self, model: Any, target: Any):
        object.__setattr__(self, "_model", model)
        object.__setattr__(self, "_target", target)

    def own_items(self) -> Iterable[Tuple[str, Any]]:
        return ()

    def type_label(self) -> str:
        model = object.__getattribute__(self, "_model")
        return model.name or model.kind


def model_of(value: Any) -> Any:
    """Return the model a guarded instance belongs to, or None."""
    if isinstance(value, GuardedInstance):
        return object.__getattribute__(value, "_model")
    return None


def unwrap(value: Any) -> Any:
    """Return the raw backing structure of a guarded instance, or the value itself."""
    if isinstance(value, GuardedInstance):
        return object.__getattribute__(value, "_target")
    return value
