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

"""Function models: contracts on positional arguments and return values."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, List, Optional, Tuple

from ..assertions import ArityAssertion
from ..definition import SignatureSpec, parse_definition, union_of
from ..guarded.function import GuardedFunction
from ..reporting import ErrorRecord
from ..utils.format import format_value
from .basic_model import MISSING, BasicModel


class FunctionModel(BasicModel):
    """Model for callables.

    Calling the model with a callable returns a ``GuardedFunction`` which
    checks every call against the declared signature.
    """

    kind = "Function"
    default_assertions = (ArityAssertion(),)

    def __init__(self, *arguments: Any, name: Optional[str] = None, settings=None):
        super().__init__(None, name=name, settings=settings)
        self.definition = SignatureSpec(tuple(parse_definition(argument) for argument in arguments))

    @property
    def signature(self) -> SignatureSpec:
        return self.definition

    def __call__(self, fn: Any = MISSING) -> Any:
        if fn is MISSING:
            fn = self.default
        if isinstance(fn, self):
            return fn
        self.validate(fn)
        return GuardedFunction(self, fn)

    def returns(self, definition: Any) -> "FunctionModel":
        self.definition = replace(self.definition, returns=parse_definition(definition))
        return self

    def defaults(self, *values: Any) -> "FunctionModel":
        """Declare argument defaults, by position from the first argument."""
        self.definition = replace(self.definition, defaults=tuple(values))
        return self

    def extend(self, arguments: Iterable[Any] = (), returns: Any = None) -> "FunctionModel":
        """Derive a model whose argument and return nodes are widened by union."""
        current = self.definition.arguments
        added = [parse_definition(argument) for argument in arguments]
        widened = []
        for index in range(max(len(current), len(added))):
            parts = [nodes[index] for nodes in (current, added) if index < len(nodes)]
            widened.append(union_of(*parts))

        return_node = self.definition.returns
        if returns is not None:
            extra = parse_definition(returns)
            return_node = extra if return_node is None else union_of(return_node, extra)

        return self._derive(replace(self.definition, arguments=tuple(widened), returns=return_node))

    def _validate(self, value: Any, path: Optional[str], errors: List[ErrorRecord], call_stack: Tuple) -> None:
        if not callable(value):
            errors.append(ErrorRecord(expected=self, received=value, path=path))

    def to_string(self, stack=()) -> str:
        if any(self is item for item in stack):
            return "..."
        stack = (self,) + tuple(stack)
        arguments = ", ".join(format_value(node, stack) for node in self.definition.arguments)
        out = f"Function({arguments})"
        if self.definition.returns is not None:
            out += f" => {format_value(self.definition.returns, stack)}"
        return out
