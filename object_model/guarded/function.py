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

"""Guarded callables enforcing a function model's signature."""

from __future__ import annotations

import functools
import logging
from typing import Any, Dict, List, Tuple

from ..checker import check_assertions, check_definition
from ..reporting import ErrorRecord
from .base import GuardedInstance

logger = logging.getLogger(__name__)


class GuardedFunction(GuardedInstance):
    """Callable instance of a ``FunctionModel``.

    Positional arguments are checked (and cast) against the declared argument
    nodes before the wrapped callable runs; the result is checked against the
    return node afterwards. Keyword arguments are forwarded unchecked.
    """

    def __init__(self, model: Any, fn: Any):
        super().__init__(model, fn)
        functools.update_wrapper(self, fn)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return invoke(self._model, self._target, args, kwargs)

    def to_string(self, stack=()) -> str:
        return self._model.label(stack)

    def __repr__(self) -> str:
        name = getattr(self._target, "__name__", type(self._target).__name__)
        return f"<{self.type_label()} {name}>"


def _backfill(model: Any, args: Tuple[Any, ...]) -> List[Any]:
    # defaults line up with the arguments from the first one; given arguments win
    signature = model.signature
    defaults = signature.defaults[: len(signature.arguments)]
    return list(args) + list(defaults[len(args):])


def invoke(model: Any, fn: Any, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
    """Call ``fn`` under the contract of ``model``.

    Returns:
        The checked result, or None when the call was rejected and the
        reporting strategy did not raise.
    """
    signature = model.signature
    on_diagnostic = model.settings.on_diagnostic
    errors: List[ErrorRecord] = []

    call_args = _backfill(model, args)
    for index, node in enumerate(signature.arguments):
        present = index < len(call_args)
        checked = check_definition(
            call_args[index] if present else None,
            node,
            f"arguments[{index}]",
            errors,
            should_cast=True,
            on_diagnostic=on_diagnostic,
        )
        if present:
            call_args[index] = checked
    check_assertions(tuple(call_args), model, "arguments", errors)

    if errors:
        logger.debug("Rejected call of %s", model.label())
        model.report(errors)
        return None

    result = fn(*call_args, **kwargs)
    if signature.returns is not None:
        result = check_definition(result, signature.returns, "return value", errors,
                                  should_cast=True, on_diagnostic=on_diagnostic)
        model.report(errors)
    return result
