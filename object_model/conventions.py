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

"""Naming conventions consulted by guarded objects."""

PRIVATE_PREFIX = "_"


def is_constant_name(key: str) -> bool:
    # 'MAX_SIZE' -> True, 'maxSize' -> False
    return key.upper() == key


def is_private_name(key: str) -> bool:
    return bool(key) and key[0] == PRIVATE_PREFIX


def private_prefix_convention(prefix: str):
    """Build a privacy predicate for a custom leading marker."""
    def _is_private(key: str) -> bool:
        return bool(key) and key.startswith(prefix)

    return _is_private


def constant_pattern_convention(pattern):
    """Build a constancy predicate from a compiled regular expression."""
    def _is_constant(key: str) -> bool:
        return pattern.fullmatch(key) is not None

    return _is_constant
