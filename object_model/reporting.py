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

"""Error records and reporting strategies."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from .exceptions import ValidationError
from .utils.format import format_value, type_name

logger = logging.getLogger(__name__)

ErrorCollector = Callable[[List["ErrorRecord"]], None]


@dataclass
class ErrorRecord:
    expected: Any = None
    received: Any = None
    path: Optional[str] = None
    message: Optional[str] = None

    def describe(self) -> str:
        """Assemble the human-readable message, once."""
        if self.message is None:
            self.message = _structural_message(self)
        return self.message


def _structural_message(error: ErrorRecord) -> str:
    expected = error.expected
    if hasattr(expected, "label"):
        expected_text = expected.label()
    else:
        expected_text = format_value(expected)

    message = "expecting "
    if error.path:
        message += f"{error.path} to be "
    message += f"{expected_text}, got "
    if error.received is not None:
        message += f"{type_name(error.received)} "
    return message + format_value(error.received)


def join_path(path: Optional[str], key: Any) -> str:
    return f"{path}.{key}" if path else str(key)


def raise_aggregated_errors(errors: List[ErrorRecord]) -> None:
    """Default reporting strategy: raise one exception carrying every error."""
    raise ValidationError("\n".join(error.describe() for error in errors), errors)


def log_errors(errors: List[ErrorRecord]) -> None:
    """Reporting strategy that logs every error and lets the caller continue."""
    for error in errors:
        logger.error(error.describe())


def unstack_errors(errors: List[ErrorRecord], collector: ErrorCollector) -> None:
    """Hand a non-empty batch to the reporting strategy."""
    if not errors:
        return
    for error in errors:
        error.describe()
    collector(list(errors))
