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
"""Violation value types: object-level and field-level."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ObjectViolation:
    """A rule failure scoped to the whole object.

    ``codes`` are ordered most-specific first; a message collaborator tries
    them in order and falls back to ``default_message``.
    """

    object_name: str
    codes: tuple[str, ...]
    arguments: tuple[Any, ...] = ()
    default_message: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.codes, str):
            raise TypeError(
                f"Violation on object '{self.object_name}' expects a sequence of codes, got the string {self.codes!r}"
            )
        if not self.codes:
            raise ValueError(f"Violation on object '{self.object_name}' must carry at least one code")
        # Accept any sequence from callers but store tuples.
        object.__setattr__(self, "codes", tuple(self.codes))
        object.__setattr__(self, "arguments", tuple(self.arguments or ()))

    @property
    def code(self) -> str:
        """The least specific code, i.e. the raw error code."""
        return self.codes[-1]

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)

    def __str__(self) -> str:
        return f"Error in object '{self.object_name}': {self._describe()}"

    def _describe(self) -> str:
        return (
            f"codes [{','.join(self.codes)}]; "
            f"arguments [{','.join(repr(a) for a in self.arguments)}]; "
            f"default message [{self.default_message}]"
        )


@dataclass(frozen=True)
class FieldViolation(ObjectViolation):
    """A rule failure scoped to one field.

    ``rejected_value`` is whatever the user supplied. For binding failures
    it is the raw, unconverted input.
    """

    field: str = ""
    rejected_value: Any = None
    binding_failure: bool = False

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.field:
            raise ValueError(f"Field violation on object '{self.object_name}' requires a field name")

    def __str__(self) -> str:
        return (
            f"Field error in object '{self.object_name}' on field '{self.field}': "
            f"rejected value [{self.rejected_value}]; {self._describe()}"
        )
