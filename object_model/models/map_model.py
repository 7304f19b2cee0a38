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

"""Map models: dicts with validated values and, optionally, validated keys."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from ..caster import cast
from ..checker import check_assertions, check_definition
from ..definition import parse_definition
from ..guarded.base import unwrap
from ..guarded.containers import GuardedDict
from ..reporting import ErrorRecord
from ..utils.format import format_value
from .basic_model import _NO_DEFINITION, MISSING, BasicModel


class MapModel(BasicModel):
    """Model for dicts whose values (and optionally keys) match a definition.

    Args:
        definition: Definition every value must match.
        keys: Optional definition every key must match.
    """

    kind = "Map"

    def __init__(self, definition: Any = _NO_DEFINITION, keys: Any = None, *, name: Optional[str] = None, settings=None):
        super().__init__(definition, name=name, settings=settings)
        self.key_definition = parse_definition(keys) if keys is not None else None

    def __call__(self, value: Any = MISSING) -> Any:
        if value is MISSING:
            value = self.default
        if isinstance(value, self):
            return value

        raw = unwrap(value)
        entries = {} if raw is None else dict(raw)
        self.validate(entries)
        return GuardedDict(self, entries)

    def _validate(self, value: Any, path: Optional[str], errors: List[ErrorRecord], call_stack: Tuple) -> None:
        entries = unwrap(value)
        if not isinstance(entries, dict):
            errors.append(ErrorRecord(expected=self, received=value, path=path))
            check_assertions(value, self, path, errors)
            return

        on_diagnostic = self.settings.on_diagnostic
        for key in list(entries):
            entry_path = f"{path or 'Map'}[{key}]"
            if self.key_definition is not None:
                check_definition(key, self.key_definition, entry_path, errors, call_stack,
                                 on_diagnostic=on_diagnostic)
            entries[key] = check_definition(entries[key], self.definition, entry_path, errors, call_stack,
                                            should_cast=True, on_diagnostic=on_diagnostic)
        check_assertions(entries, self, path, errors)

    def recast(self, entries: dict) -> None:
        for key, item in entries.items():
            entries[key] = cast(item, self.definition, self.settings.on_diagnostic)

    def to_string(self, stack=()) -> str:
        if any(self is item for item in stack):
            return "..."
        stack = (self,) + tuple(stack)
        values = format_value(self.definition, stack)
        if self.key_definition is None:
            return f"Map of {values}"
        return f"Map of {format_value(self.key_definition, stack)} : {values}"
