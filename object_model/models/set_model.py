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

"""Set models: sets of hashable members matching one definition."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from ..caster import cast
from ..checker import check_assertions, check_definition
from ..guarded.base import unwrap
from ..guarded.containers import GuardedSet
from ..reporting import ErrorRecord
from ..utils.format import format_value
from .basic_model import MISSING, BasicModel


class SetModel(BasicModel):
    kind = "Set"

    def __call__(self, value: Any = MISSING) -> Any:
        if value is MISSING:
            value = self.default
        if isinstance(value, self):
            return value

        raw = unwrap(value)
        members = set() if raw is None else set(raw)
        self.validate(members)
        return GuardedSet(self, members)

    def _validate(self, value: Any, path: Optional[str], errors: List[ErrorRecord], call_stack: Tuple) -> None:
        members = unwrap(value)
        if not isinstance(members, (set, frozenset)):
            errors.append(ErrorRecord(expected=self, received=value, path=path))
            check_assertions(value, self, path, errors)
            return

        original = list(members)
        checked = [
            check_definition(member, self.definition, path or "Set", errors, call_stack,
                             should_cast=True, on_diagnostic=self.settings.on_diagnostic)
            for member in original
        ]
        if isinstance(members, set) and any(a is not b for a, b in zip(checked, original)):
            members.clear()
            members.update(checked)
        check_assertions(members, self, path, errors)

    def recast(self, members: set) -> None:
        converted = [cast(member, self.definition, self.settings.on_diagnostic) for member in members]
        members.clear()
        members.update(converted)

    def to_string(self, stack=()) -> str:
        if any(self is item for item in stack):
            return "..."
        return f"Set of {format_value(self.definition, (self,) + tuple(stack))}"
