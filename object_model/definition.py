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

"""Definition tree nodes.

A raw definition is written with plain Python values and parsed once into a
tree of tagged nodes:

- ``dict``            -> StructureSpec (keys are the allowed fields)
- ``list``            -> UnionSpec (a single element also accepts ``None``)
- ``re.Pattern``      -> PatternSpec
- a class             -> ClassSpec
- a model             -> ModelSpec
- anything else       -> LiteralSpec
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple

from .exceptions import DefinitionError
from .utils.format import MAX_RENDER_DEPTH, Describable, format_fields, format_value


class DefinitionSpec(Describable):
    """Base class of every definition node."""


@dataclass(frozen=True, eq=False)
class LiteralSpec(DefinitionSpec):
    value: Any

    def to_string(self, stack=()) -> str:
        return format_value(self.value, stack)


@dataclass(frozen=True, eq=False)
class ClassSpec(DefinitionSpec):
    cls: type

    def to_string(self, stack=()) -> str:
        return self.cls.__name__


@dataclass(frozen=True, eq=False)
class PatternSpec(DefinitionSpec):
    pattern: "re.Pattern[str]"

    def to_string(self, stack=()) -> str:
        return repr(self.pattern)


@dataclass(frozen=True, eq=False)
class ModelSpec(DefinitionSpec):
    model: Any

    def to_string(self, stack=()) -> str:
        return self.model.label(stack)


@dataclass(eq=False)
class StructureSpec(DefinitionSpec):
    # Mutable so that a model can declare a field referencing itself
    fields: Dict[str, DefinitionSpec]

    def to_string(self, stack=()) -> str:
        if len(stack) > MAX_RENDER_DEPTH or any(self is item for item in stack):
            return "..."
        return format_fields(self.fields.items(), (self,) + stack)


@dataclass(frozen=True, eq=False)
class UnionSpec(DefinitionSpec):
    options: Tuple[DefinitionSpec, ...]

    def to_string(self, stack=()) -> str:
        return " or ".join(format_value(option, stack) for option in self.options)


@dataclass(frozen=True)
class SignatureSpec:
    """Definition of a function model: argument nodes and optional return node."""

    arguments: Tuple[DefinitionSpec, ...]
    returns: DefinitionSpec = None
    defaults: Tuple[Any, ...] = ()


OPTIONAL = LiteralSpec(None)


def parse_definition(raw: Any) -> DefinitionSpec:
    """Parse a raw definition into a definition node."""
    from .models.basic_model import BasicModel

    if isinstance(raw, DefinitionSpec):
        return raw
    if isinstance(raw, BasicModel):
        return ModelSpec(raw)
    if isinstance(raw, Mapping):
        fields: Dict[str, DefinitionSpec] = {}
        for key, value in raw.items():
            if not isinstance(key, str):
                raise DefinitionError(f"Field names must be strings, got: {key!r}")
            fields[key] = parse_definition(value)
        return StructureSpec(fields)
    if isinstance(raw, list):
        options: List[DefinitionSpec] = []
        for item in raw:
            options.extend(union_parts(parse_definition(item)))
        if len(raw) == 1:
            options.append(OPTIONAL)
        return UnionSpec(tuple(dedupe_specs(options)))
    if isinstance(raw, re.Pattern):
        if isinstance(raw.pattern, bytes):
            raise DefinitionError(f"Patterns must match text, got bytes pattern {raw.pattern!r}")
        return PatternSpec(raw)
    if isinstance(raw, type):
        return ClassSpec(raw)
    return LiteralSpec(raw)


def union_parts(node: DefinitionSpec) -> Tuple[DefinitionSpec, ...]:
    if isinstance(node, UnionSpec):
        return node.options
    return (node,)


def same_spec(a: DefinitionSpec, b: DefinitionSpec) -> bool:
    if a is b:
        return True
    if type(a) is not type(b):
        return False
    if isinstance(a, LiteralSpec):
        return type(a.value) is type(b.value) and a.value == b.value
    if isinstance(a, ClassSpec):
        return a.cls is b.cls
    if isinstance(a, PatternSpec):
        return a.pattern == b.pattern
    if isinstance(a, ModelSpec):
        return a.model is b.model
    if isinstance(a, UnionSpec):
        return len(a.options) == len(b.options) and all(
            same_spec(x, y) for x, y in zip(a.options, b.options)
        )
    return False


def dedupe_specs(nodes: Iterable[DefinitionSpec]) -> List[DefinitionSpec]:
    unique: List[DefinitionSpec] = []
    for node in nodes:
        if not any(same_spec(node, seen) for seen in unique):
            unique.append(node)
    return unique


def union_of(*nodes: DefinitionSpec) -> DefinitionSpec:
    """Union of several nodes, flattened and without duplicates."""
    parts = dedupe_specs(part for node in nodes for part in union_parts(node))
    if len(parts) == 1:
        return parts[0]
    return UnionSpec(tuple(parts))


def merge_structures(base: StructureSpec, other: StructureSpec) -> StructureSpec:
    """Deep merge per field; ``other`` wins for leaf fields. Inputs are left untouched."""
    fields = dict(base.fields)
    for key, node in other.fields.items():
        current = fields.get(key)
        if isinstance(current, StructureSpec) and isinstance(node, StructureSpec):
            fields[key] = merge_structures(current, node)
        else:
            fields[key] = node
    return StructureSpec(fields)


def render_definition(node: Any, stack=()) -> str:
    """Render a definition node (or raw definition) as a type expression."""
    if not isinstance(node, DefinitionSpec):
        node = parse_definition(node)
    return format_value(node, stack)
