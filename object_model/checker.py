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

"""Structural validator and assertion pipeline."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any, Callable, List, Optional, Tuple

from .caster import cast
from .definition import (
    ClassSpec,
    DefinitionSpec,
    LiteralSpec,
    ModelSpec,
    PatternSpec,
    StructureSpec,
    union_parts,
)
from .guarded.base import unwrap
from .reporting import ErrorRecord, join_path

logger = logging.getLogger(__name__)

CallStack = Tuple[Any, ...]


def field_value(obj: Any, key: str) -> Any:
    """Raw value of ``key`` in ``obj``; guarded objects are read without enforcement."""
    obj = unwrap(obj)
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


def _occurrences(call_stack: CallStack, model: Any) -> int:
    return sum(1 for item in call_stack if item is model)


def check_definition(
    value: Any,
    node: DefinitionSpec,
    path: Optional[str],
    errors: List[ErrorRecord],
    call_stack: CallStack = (),
    should_cast: bool = False,
    on_diagnostic: Optional[Callable] = None,
) -> Any:
    """Check ``value`` against ``node``, appending to ``errors``. Returns the (possibly cast) value."""
    if isinstance(node, ModelSpec) and _occurrences(call_stack, node.model) >= 2:
        # found twice in the call stack: cycle, skip
        logger.debug("Cycle detected at %s, skipping validation", path or "<root>")
        return value

    if should_cast:
        value = cast(value, node, on_diagnostic)

    if isinstance(node, ModelSpec):
        node.model._validate(value, path, errors, call_stack + (node.model,))
    elif isinstance(node, StructureSpec):
        for key, child in node.fields.items():
            check_definition(
                field_value(value, key),
                child,
                join_path(path, key),
                errors,
                call_stack,
                on_diagnostic=on_diagnostic,
            )
    else:
        parts = union_parts(node)
        if not any(check_part(value, part, path, call_stack) for part in parts):
            errors.append(ErrorRecord(expected=node, received=value, path=path))

    return value


def check_part(value: Any, part: DefinitionSpec, path: Optional[str], call_stack: CallStack) -> bool:
    if value is None:
        return isinstance(part, LiteralSpec) and part.value is None
    if isinstance(part, (StructureSpec, ModelSpec)):
        part_errors: List[ErrorRecord] = []
        check_definition(value, part, path, part_errors, call_stack)
        return not part_errors
    if isinstance(part, PatternSpec):
        return part.pattern.search(str(value)) is not None
    if isinstance(part, ClassSpec):
        return _matches_class(value, part.cls)
    if isinstance(part, LiteralSpec):
        return value is part.value or (type(value) is type(part.value) and value == part.value)
    return False


def _matches_class(value: Any, cls: type) -> bool:
    if cls is int or cls is float:
        if isinstance(value, bool):
            return False
        accepted = (int, float) if cls is float else int
        if not isinstance(value, accepted):
            return False
        return not (isinstance(value, float) and math.isnan(value))
    return isinstance(value, cls)


def check_assertions(value: Any, model: Any, path: Optional[str], errors: List[ErrorRecord]) -> None:
    """Run every assertion of ``model``; all failures are recorded."""
    for assertion in model.assertions:
        try:
            result = assertion.evaluate(value, model)
        except Exception as exc:
            result = exc
        if result is not True:
            errors.append(
                ErrorRecord(
                    expected=assertion,
                    received=value,
                    path=path,
                    message=assertion.failure_message(result, value, model),
                )
            )
