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

"""Runtime schema validation with guarded model instances.

Example:
    >>> from object_model import ObjectModel
    >>> Person = ObjectModel({"name": str, "age": [int]}, name="Person")
    >>> joe = Person(name="Joe", age=42)
    >>> joe.age = "42"
    Traceback (most recent call last):
    ...
    object_model.exceptions.ValidationError: expecting age to be int or None, got str "42"
"""

from .assertions import Assertion
from .caster import AmbiguousCast, ignore_diagnostic, log_diagnostic
from .config import ModelSettings, SettingsIssue, load_settings, settings_from_dict
from .exceptions import DefinitionError, ObjectModelError, SettingsError, ValidationError
from .guarded.containers import GuardedDict, GuardedList, GuardedSet
from .guarded.function import GuardedFunction
from .guarded.object_view import GuardedObject
from .introspection import (
    definition_of,
    describe,
    enumerable_keys,
    is_constant_key,
    is_private_key,
    model_of,
)
from .models import ArrayModel, BasicModel, FunctionModel, MapModel, ObjectModel, SetModel
from .reporting import ErrorRecord, log_errors, raise_aggregated_errors

__version__ = "1.0.0"

__all__ = [
    "AmbiguousCast",
    "ArrayModel",
    "Assertion",
    "BasicModel",
    "DefinitionError",
    "ErrorRecord",
    "FunctionModel",
    "GuardedDict",
    "GuardedFunction",
    "GuardedList",
    "GuardedObject",
    "GuardedSet",
    "MapModel",
    "ModelSettings",
    "ObjectModel",
    "ObjectModelError",
    "SetModel",
    "SettingsError",
    "SettingsIssue",
    "ValidationError",
    "definition_of",
    "describe",
    "enumerable_keys",
    "ignore_diagnostic",
    "is_constant_key",
    "is_private_key",
    "load_settings",
    "log_diagnostic",
    "log_errors",
    "model_of",
    "raise_aggregated_errors",
    "settings_from_dict",
]
