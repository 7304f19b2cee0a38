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

"""Base model: a definition tree, assertions, a default and a reporting strategy."""

from __future__ import annotations

import copy
import logging
from typing import Any, List, Optional, Tuple

from ..assertions import Assertion, Description
from ..checker import check_assertions, check_definition
from ..config.settings import ModelSettings
from ..definition import parse_definition, union_of
from ..exceptions import DefinitionError
from ..guarded.base import model_of
from ..reporting import ErrorCollector, ErrorRecord, unstack_errors
from ..utils.format import Describable, format_value

logger = logging.getLogger(__name__)

_NO_DEFINITION = object()
MISSING = object()


class BasicModel(Describable):
    """Model validating leaf values.

    Calling the model validates its argument (or its default) and returns it.
    """

    kind = "Basic"
    default_assertions: Tuple[Assertion, ...] = ()

    def __init__(self, definition: Any = _NO_DEFINITION, *, name: Optional[str] = None,
                 settings: Optional[ModelSettings] = None):
        if definition is _NO_DEFINITION:
            raise DefinitionError("Model definition is required")
        self.definition = parse_definition(definition)
        self.name = name
        self.settings = settings.copy() if settings is not None else ModelSettings()
        self.assertions: List[Assertion] = list(type(self).default_assertions)
        self.default: Any = None
        self.parent: Optional[BasicModel] = None

    def __call__(self, value: Any = MISSING) -> Any:
        if value is MISSING:
            value = self.default
        self.validate(value)
        return value

    # -- validation ------------------------------------------------------

    def validate(self, value: Any, error_collector: Optional[ErrorCollector] = None) -> None:
        """Validate ``value``; a failure is handed to the reporting strategy."""
        errors = self.collect_errors(value)
        self.report(errors, error_collector)

    def test(self, value: Any) -> bool:
        """Return whether ``value`` validates, without reporting anything."""
        failures: List[ErrorRecord] = []
        self.validate(value, error_collector=failures.extend)
        return not failures

    def collect_errors(self, value: Any) -> List[ErrorRecord]:
        errors: List[ErrorRecord] = []
        self._validate(value, None, errors, ())
        return errors

    def report(self, errors: List[ErrorRecord], error_collector: Optional[ErrorCollector] = None) -> None:
        if errors:
            logger.debug("%s failed validation with %d error(s)", self.label(), len(errors))
        unstack_errors(errors, error_collector or self.settings.error_collector)

    def _validate(self, value: Any, path: Optional[str], errors: List[ErrorRecord], call_stack: Tuple) -> None:
        check_definition(value, self.definition, path, errors, call_stack,
                         on_diagnostic=self.settings.on_diagnostic)
        check_assertions(value, self, path, errors)

    # -- composition -----------------------------------------------------

    def extend(self, *parts: Any) -> "BasicModel":
        """Derive a model accepting this model's definition or any of ``parts``."""
        definition = union_of(self.definition, *(parse_definition(part) for part in parts))
        child = self._derive(definition)
        for part in parts:
            if isinstance(part, BasicModel):
                child.assertions.extend(part.assertions)
        return child

    def _derive(self, definition: Any) -> "BasicModel":
        child = copy.copy(self)
        child.definition = definition
        child.name = None
        child.parent = self
        child.settings = self.settings.copy()
        child.assertions = list(self.assertions)
        return child

    def assert_(self, predicate: Any, description: Optional[Description] = None) -> "BasicModel":
        """Attach an assertion run against the whole value; returns the model."""
        self.assertions = self.assertions + [Assertion(predicate, description)]
        return self

    def default_to(self, value: Any) -> "BasicModel":
        self.default = value
        return self

    # -- rendering -------------------------------------------------------

    def to_string(self, stack=()) -> str:
        if any(self is item for item in stack):
            return "..."
        return format_value(self.definition, (self,) + tuple(stack))

    def label(self, stack=()) -> str:
        """Name of the model, or its type expression when anonymous."""
        return self.name or self.to_string(stack)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.label()}>"

    def __instancecheck__(self, instance: Any) -> bool:
        model = model_of(instance)
        while model is not None:
            if model is self:
                return True
            model = model.parent
        return False
