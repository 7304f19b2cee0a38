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

"""Guarded view over an object record.

Reads enforce privacy and cast stored values lazily; writes and deletes are
applied to the live record, re-checked, and rolled back when any error was
recorded.
"""

from __future__ import annotations

import logging
import reprlib
from typing import Any, Iterable, List, Optional, Tuple

from ..caster import cast
from ..checker import check_assertions, check_definition
from ..definition import StructureSpec, union_parts
from ..reporting import ErrorRecord, join_path, unstack_errors
from ..utils.format import format_fields
from .base import GuardedInstance, model_of
from .record import InstanceRecord, is_plain, merge_into

logger = logging.getLogger(__name__)

_DELETE = object()


def _is_dunder(key: str) -> bool:
    return len(key) > 4 and key.startswith("__") and key.endswith("__")


class GuardedObject(GuardedInstance):
    """Live object instance of an ``ObjectModel``.

    Nested structure fields are served as child views sharing the owning
    model; their assertions run against the owning record.
    """

    __slots__ = ("_node", "_path", "_root")

    def __init__(self, model: Any, target: InstanceRecord, node: Optional[StructureSpec] = None,
                 path: Optional[str] = None, root: Optional[InstanceRecord] = None):
        super().__init__(model, target)
        object.__setattr__(self, "_node", node if node is not None else model.definition)
        object.__setattr__(self, "_path", path)
        object.__setattr__(self, "_root", root if root is not None else target)

    def __getattribute__(self, key: str) -> Any:
        if _is_dunder(key):
            return object.__getattribute__(self, key)
        return _read(self, key)

    def __setattr__(self, key: str, value: Any) -> None:
        _mutate(self, key, value)

    def __delattr__(self, key: str) -> None:
        _mutate(self, key, _DELETE)

    def __getitem__(self, key: str) -> Any:
        try:
            return _read(self, key)
        except AttributeError as exc:
            raise KeyError(key) from exc

    def __setitem__(self, key: str, value: Any) -> None:
        _mutate(self, key, value)

    def __delitem__(self, key: str) -> None:
        _mutate(self, key, _DELETE)

    def __iter__(self):
        return iter(enumerable_keys(self))

    def __contains__(self, key: Any) -> bool:
        model, target, node, _, _ = _state(self)
        return (
            isinstance(key, str)
            and key in node.fields
            and not model.settings.convention_for_private(key)
            and hasattr(target, key)
        )

    def __dir__(self) -> List[str]:
        return enumerable_keys(self)

    @reprlib.recursive_repr()
    def __repr__(self) -> str:
        model, target, _, path, _ = _state(self)
        fields = ", ".join(f"{key}={value!r}" for key, value in GuardedObject.own_items(self))
        label = model.name or ("Object" if path is None else path)
        return f"{label}({fields})"

    def own_items(self) -> Iterable[Tuple[str, Any]]:
        target = object.__getattribute__(self, "_target")
        attrs = vars(target)
        return [(key, attrs[key]) for key in enumerable_keys(self)]

    def to_string(self, stack=()) -> str:
        return format_fields(GuardedObject.own_items(self), (self,) + tuple(stack))


def _state(view: GuardedObject):
    get = object.__getattribute__
    return (get(view, "_model"), get(view, "_target"), get(view, "_node"),
            get(view, "_path"), get(view, "_root"))


def enumerable_keys(view: GuardedObject) -> List[str]:
    """Stored keys that are declared and not private."""
    model, target, node, _, _ = _state(view)
    is_private = model.settings.convention_for_private
    return [key for key in vars(target) if key in node.fields and not is_private(key)]


def _read(view: GuardedObject, key: str) -> Any:
    model, target, node, path, root = _state(view)
    new_path = join_path(path, key)
    declared = key in node.fields
    child = node.fields.get(key)
    structure = structure_member(child) if declared else None

    if declared and model.settings.convention_for_private(key):
        unstack_errors(
            [ErrorRecord(path=new_path, message=f"cannot access private property {new_path}")],
            model.settings.error_collector,
        )
        return None

    attrs = vars(target)
    if key in attrs:
        value = attrs[key]
        if (
            value is not None
            and declared
            and not (structure is not None and is_plain(value))
            and not isinstance(child, StructureSpec)
            and model_of(value) is None
        ):
            value = cast(value, child, model.settings.on_diagnostic)
            attrs[key] = value
    elif declared:
        value = getattr(target, key, None)
    else:
        try:
            value = getattr(target, key)
        except AttributeError:
            raise AttributeError(f"{model.label()} has no property {key!r}") from None

    if structure is not None and isinstance(value, InstanceRecord):
        return GuardedObject(model, value, structure, new_path, root)
    return value


def structure_member(node: Any) -> Optional[StructureSpec]:
    """The structure a field holds: the node itself, or the only structure of a union."""
    if isinstance(node, StructureSpec):
        return node
    structures = [part for part in union_parts(node) if isinstance(part, StructureSpec)]
    return structures[0] if len(structures) == 1 else None


def _prepare(value: Any, node: Any, model: Any) -> Any:
    if structure_member(node) is not None and (is_plain(value) or isinstance(value, GuardedObject)):
        return merge_into(InstanceRecord(), value)
    if isinstance(node, StructureSpec):
        return value
    return cast(value, node, model.settings.on_diagnostic)


def _mutate(view: GuardedObject, key: str, value: Any) -> bool:
    model, target, node, path, root = _state(view)
    settings = model.settings
    new_path = join_path(path, key)
    errors: List[ErrorRecord] = []

    declared = key in node.fields
    is_private = settings.convention_for_private(key)
    is_constant = settings.convention_for_constant(key)

    if declared and (is_private or (is_constant and getattr(target, key, None) is not None)):
        kind = "private" if is_private else "constant"
        errors.append(ErrorRecord(path=new_path, message=f"cannot modify {kind} property {new_path}"))
    elif not declared:
        errors.append(
            ErrorRecord(path=new_path, message=f"cannot find property {new_path} in the model definition")
        )
    else:
        child = node.fields[key]
        attrs = vars(target)
        had_value = key in attrs
        previous = attrs.get(key)

        if value is _DELETE:
            attrs.pop(key, None)
        else:
            attrs[key] = _prepare(value, child, model)

        check_definition(getattr(target, key, None), child, new_path, errors,
                         on_diagnostic=settings.on_diagnostic)
        check_assertions(root, model, new_path, errors)

        if errors:
            if had_value:
                attrs[key] = previous
            else:
                attrs.pop(key, None)
            logger.debug("Rolled back mutation of %s", new_path)

    if errors:
        unstack_errors(errors, settings.error_collector)
        return False
    return True
