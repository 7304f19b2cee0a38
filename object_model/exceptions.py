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

"""Custom exceptions for the object model system."""


class ObjectModelError(Exception):
    """Base exception for object-model related errors."""
    pass


class DefinitionError(ObjectModelError):
    """Exception raised for invalid or missing model definitions."""
    pass


class ValidationError(ObjectModelError, TypeError):
    """Exception raised when a value does not satisfy its model.

    Carries every error record collected during the failed validation pass.
    """

    def __init__(self, message: str, errors=None):
        super().__init__(message)
        self.errors = list(errors or [])


class SettingsError(ObjectModelError):
    """Exception raised for invalid settings documents."""

    def __init__(self, message: str, issues=None):
        super().__init__(message)
        self.issues = list(issues or [])
