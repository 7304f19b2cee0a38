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

"""Array models: homogeneous lists returned as guarded lists."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from ..caster import cast
from ..checker import check_assertions, check_definition
from ..guarded.base import unwrap
from ..guarded.containers import GuardedList
from ..reporting import ErrorRecord
from ..utils.format import format_value
from .basic_model import MISSING, BasicModel


class ArrayModel(BasicModel):
    """Model for lists whose every element matches one definition."""

    kind = "Array"

    def __call__(self, value: Any = MISSING) -> Any:
        if value is MISSING:
            value = self.default
        if isinstance(value, self):
            return value

        raw = unwrap(value)
        items = list(raw) if isinstance(raw, (list, tuple)) else raw
        self.validate(items)
        if isinstance(items, list):
            return GuardedList(self, items)
        return items

    def _validate(self, value: Any, path: Optional[str], errors: List[ErrorRecord], call_stack: Tuple) -> None:
        items = unwrap(value)
        if not isinstance(items, list):
            errors.append(ErrorRecord(expected=self, received=value, path=path))
            check_assertions(value, self, path, errors)
            return

        for index, item in enumerate(items):
            items[index] = check_definition(
                item,
                self.definition,
                f"{path or 'Array'}[{index}]",
                errors,
                call_stack,
                should_cast=True,
                on_diagnostic=self.settings.on_diagnostic,
            )
        check_assertions(items, self, path, errors)

    def recast(self, items: list) -> None:
        for index, item in enumerate(items):
            items[index] = cast(item, self.definition, self.settings.on_diagnostic)

    def to_string(self, stack=()) -> str:
        if any(self is item for item in stack):
            return "..."
        return f"Array of {format_value(self.definition, (self,) + tuple(stack))}"
