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

"""Assertions evaluated against a whole value after structural checks."""

from __future__ import annotations

from typing import Any, Callable, Optional, Union

from .utils.format import format_value

Description = Union[str, Callable[[Any, Any], str]]


class Assertion:
    """A named predicate. Anything other than ``True`` is a failure."""

    def __init__(self, predicate: Callable[[Any], Any], description: Optional[Description] = None):
        self.predicate = predicate
        if description is None:
            description = getattr(predicate, "__name__", None) or repr(predicate)
        self.description = description

    def evaluate(self, value: Any, model: Any) -> Any:
        return self.predicate(value)

    def failure_message(self, result: Any, value: Any, model: Any) -> str:
        if callable(self.description):
            return self.description(result, value)
        return (
            f'assertion "{self.description}" returned {format_value(result)} '
            f"for value {format_value(value)}"
        )

    def __repr__(self) -> str:
        return f"Assertion({self.description!r})"


class ArityAssertion(Assertion):
    """Rejects calls passing more positional arguments than declared."""

    def __init__(self):
        super().__init__(predicate=None, description="arity")

    def evaluate(self, args: Any, model: Any) -> Any:
        if len(args) > len(model.signature.arguments):
            return args
        return True

    def failure_message(self, result: Any, args: Any, model: Any) -> str:
        return (
            f"expecting {len(model.signature.arguments)} arguments for "
            f"{model.to_string()}, got {len(args)}"
        )
