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

"""Automatic promotion of raw values into model instances."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from .definition import DefinitionSpec, ModelSpec, StructureSpec, union_parts
from .guarded.base import model_of
from .utils.format import format_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AmbiguousCast:
    """Emitted when more than one model accepts a raw value."""

    value: Any
    candidates: Tuple[Any, ...]

    def message(self) -> str:
        names = " or ".join(model.label() for model in self.candidates)
        return f"Ambiguous model for value {format_value(self.value)}, could be {names}"


def log_diagnostic(event: AmbiguousCast) -> None:
    logger.warning(event.message())


def ignore_diagnostic(event: AmbiguousCast) -> None:
    logger.debug("Ignored diagnostic: %s", event.message())


def cast(
    value: Any,
    node: DefinitionSpec,
    on_diagnostic: Optional[Callable[[AmbiguousCast], None]] = None,
) -> Any:
    """Return ``value`` as an instance of the only model of ``node`` accepting it."""
    if value is None or isinstance(node, StructureSpec) or model_of(value) is not None:
        return value

    candidates = tuple(
        part.model
        for part in union_parts(node)
        if isinstance(part, ModelSpec) and part.model.test(value)
    )

    if len(candidates) == 1:
        return candidates[0](value)

    if len(candidates) > 1:
        (on_diagnostic or log_diagnostic)(AmbiguousCast(value, candidates))

    return value
