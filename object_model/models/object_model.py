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

"""Object models: structured definitions producing guarded object instances."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from ..checker import check_assertions, check_definition
from ..definition import StructureSpec, merge_structures, parse_definition
from ..exceptions import DefinitionError
from ..guarded.base import unwrap
from ..guarded.object_view import GuardedObject, _is_dunder
from ..guarded.record import InstanceRecord, merge_into
from ..reporting import ErrorRecord
from .basic_model import BasicModel

_SCALARS = (str, bytes, bytearray, int, float, complex, bool, list, tuple, set, frozenset)


def _is_object(value: Any) -> bool:
    if value is None or isinstance(value, _SCALARS) or isinstance(value, type):
        return False
    return hasattr(value, "__dict__") and not callable(value)


class ObjectModel(BasicModel):
    """Model for structured objects.

    Calling the model deep-merges the given mapping and keyword fields into a
    fresh record, validates it and returns a ``GuardedObject``.
    """

    kind = "Object"

    def __init__(self, definition: Any = None, *, name: Optional[str] = None, settings=None):
        if definition is None:
            raise DefinitionError("Model definition is required")
        super().__init__(definition, name=name, settings=settings)
        if not isinstance(self.definition, StructureSpec):
            raise DefinitionError(
                f"ObjectModel definition must be a mapping of field names, got: {definition!r}"
            )
        self.prototype = type(f"{name or 'Object'}Record", (InstanceRecord,), {})

    def __call__(self, *args: Any, **fields: Any) -> Any:
        if len(args) > 1:
            raise TypeError(f"{self.label()} takes at most one positional argument, got {len(args)}")
        value = args[0] if args else self.default
        if isinstance(value, self) and not fields:
            return value

        record = self.prototype()
        merge_into(record, value)
        merge_into(record, fields)
        self.validate(record)
        return GuardedObject(self, record)

    def defaults(self, **fields: Any) -> "ObjectModel":
        """Set instance defaults; functions become methods of the raw record."""
        for key, value in fields.items():
            setattr(self.prototype, key, value)
        return self

    def define(self, key: str, definition: Any) -> "ObjectModel":
        """Declare one more field, e.g. a field referencing this very model."""
        self.definition.fields[key] = parse_definition(definition)
        return self

    def extend(self, *parts: Any) -> "ObjectModel":
        """Derive a model whose definition deep-merges ``parts`` into this one.

        Args:
            parts: Object models, mappings of field definitions, or classes
                whose attributes become instance defaults.

        Returns:
            A new model; this model is left untouched.
        """
        definition = StructureSpec(dict(self.definition.fields))
        prototype_fields = {}
        inherited: List[Any] = []

        for part in parts:
            if isinstance(part, BasicModel):
                if isinstance(part.definition, StructureSpec):
                    definition = merge_structures(definition, part.definition)
                if isinstance(part, ObjectModel):
                    prototype_fields.update(
                        (key, value) for key, value in vars(part.prototype).items() if not _is_dunder(key)
                    )
                inherited.extend(part.assertions)
            elif isinstance(part, type):
                prototype_fields.update(
                    (key, value) for key, value in vars(part).items() if not _is_dunder(key)
                )
            elif isinstance(part, Mapping):
                definition = merge_structures(definition, parse_definition(part))
            else:
                raise DefinitionError(f"Cannot extend an object model with {part!r}")

        child = self._derive(definition)
        child.prototype = type(f"{self.prototype.__name__}Extension", (self.prototype,), prototype_fields)
        child.assertions.extend(inherited)
        return child

    def _subject(self, value: Any) -> Any:
        if isinstance(value, GuardedObject):
            return unwrap(value)
        if isinstance(value, InstanceRecord):
            return value
        if isinstance(value, Mapping):
            return merge_into(self.prototype(), value, deep=False)
        if _is_object(value):
            return value
        return None

    def _validate(self, value: Any, path: Optional[str], errors: List[ErrorRecord], call_stack: Tuple) -> None:
        subject = self._subject(value)
        if subject is None:
            errors.append(ErrorRecord(expected=self, received=value, path=path))
            subject = value
        else:
            check_definition(subject, self.definition, path, errors, call_stack,
                             on_diagnostic=self.settings.on_diagnostic)
        check_assertions(subject, self, path, errors)
