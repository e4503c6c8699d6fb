# Copyright 2026 Firefly Software Solutions Inc.
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
"""Constraint groups — named subsets of rules selected per operation."""

from __future__ import annotations

from enum import Enum


class ConstraintGroup(str, Enum):
    """Operation a set of constraints applies to."""

    CREATE = "create"
    UPDATE = "update"

    @classmethod
    def parse(cls, value: ConstraintGroup | str) -> ConstraintGroup:
        """Accept a member or its name/value in any case (``"Create"``, ``"UPDATE"``)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(member.name for member in cls)
            raise ValueError(f"Unknown constraint group '{value}', expected one of: {allowed}") from None


ALL_GROUPS: frozenset[ConstraintGroup] = frozenset(ConstraintGroup)
