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

"""Per-model settings and the YAML settings loader."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

import jsonschema
import yaml

from ..caster import AmbiguousCast, ignore_diagnostic, log_diagnostic
from ..conventions import (
    constant_pattern_convention,
    is_constant_name,
    is_private_name,
    private_prefix_convention,
)
from ..exceptions import SettingsError
from ..reporting import ErrorCollector, log_errors, raise_aggregated_errors
from .json_schema_loader import load_schema

logger = logging.getLogger(__name__)

REPORTING_STRATEGIES = {
    "raise": raise_aggregated_errors,
    "log": log_errors,
}

DIAGNOSTIC_HANDLERS = {
    "warn": log_diagnostic,
    "ignore": ignore_diagnostic,
}


@dataclass
class ModelSettings:
    """Hooks consulted by one model. Derived models receive a copy."""

    error_collector: ErrorCollector = raise_aggregated_errors
    convention_for_constant: Callable[[str], bool] = is_constant_name
    convention_for_private: Callable[[str], bool] = is_private_name
    on_diagnostic: Callable[[AmbiguousCast], None] = log_diagnostic

    def copy(self) -> "ModelSettings":
        return replace(self)


@dataclass(frozen=True)
class SettingsIssue:
    message: str
    yaml_path: Optional[str] = None


def _format_issues(issues: List[SettingsIssue]) -> str:
    return "\n".join(
        f"  - {i.message}" + (f" (yaml_path={i.yaml_path})" if i.yaml_path else "")
        for i in issues
    )


def validate_settings_document(data: Any) -> List[SettingsIssue]:
    """Validate a settings mapping against the packaged JSON Schema."""
    if data is None:
        return []
    if not isinstance(data, dict):
        return [SettingsIssue(message="Root must be a mapping/object", yaml_path="")]

    issues: List[SettingsIssue] = []
    validator = jsonschema.Draft7Validator(load_schema())
    for error in sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path]):
        path = "/" + "/".join(str(p) for p in error.absolute_path) if error.absolute_path else ""
        issues.append(SettingsIssue(message=error.message, yaml_path=path))

    conventions = data.get("conventions")
    if isinstance(conventions, dict) and isinstance(conventions.get("constant_pattern"), str):
        try:
            re.compile(conventions["constant_pattern"])
        except re.error as exc:
            issues.append(
                SettingsIssue(
                    message=f"Invalid regular expression: {exc}",
                    yaml_path="/conventions/constant_pattern",
                )
            )
    return issues


def settings_from_dict(data: Any) -> ModelSettings:
    """Build model settings from an in-memory settings document."""
    issues = validate_settings_document(data)
    if issues:
        raise SettingsError(f"Invalid settings document:\n{_format_issues(issues)}", issues)

    data = data or {}
    settings = ModelSettings()

    conventions = data.get("conventions", {})
    if "private_prefix" in conventions:
        settings.convention_for_private = private_prefix_convention(conventions["private_prefix"])
    if "constant_pattern" in conventions:
        settings.convention_for_constant = constant_pattern_convention(
            re.compile(conventions["constant_pattern"])
        )

    strategy = data.get("reporting", {}).get("strategy")
    if strategy is not None:
        settings.error_collector = REPORTING_STRATEGIES[strategy]

    ambiguous_cast = data.get("diagnostics", {}).get("ambiguous_cast")
    if ambiguous_cast is not None:
        settings.on_diagnostic = DIAGNOSTIC_HANDLERS[ambiguous_cast]

    return settings


def load_settings(path: Union[str, Path]) -> ModelSettings:
    """Load model settings from a YAML file."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise SettingsError(f"Cannot read settings file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in settings file {path}: {e}") from e

    logger.debug("Loaded settings from %s", path)
    return settings_from_dict(data)
