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
"""Message code resolution — expands one error code into fallback lookup keys.

For an object error with code ``required`` on object ``item``::

    required.item
    required

For a field error on ``item.name`` declared as ``str``::

    required.item.name
    required.name
    required.str
    required

A message collaborator tries the keys in order and uses the first hit.
"""

from __future__ import annotations

import builtins
from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from formcheck.validation.properties import ValidationProperties

_SEPARATOR = "."


class MessageCodeFormat(str, Enum):
    """Where the error code sits relative to the object/field qualifiers."""

    PREFIX_ERROR_CODE = "prefix"
    POSTFIX_ERROR_CODE = "postfix"

    def join(self, code: str, *qualifiers: str) -> str:
        parts = [code, *qualifiers] if self is MessageCodeFormat.PREFIX_ERROR_CODE else [*qualifiers, code]
        return _SEPARATOR.join(part for part in parts if part)


@runtime_checkable
class MessageCodeResolver(Protocol):
    """Port for building message codes from validation error codes."""

    def resolve_object_codes(self, code: str, object_name: str) -> list[str]: ...

    def resolve_field_codes(
        self,
        code: str,
        object_name: str,
        field: str,
        field_type: type | str | None = None,
    ) -> list[str]: ...


def type_name(field_type: type | str) -> str:
    """Render a declared field type as a message-code qualifier.

    Builtins render unqualified (``str``, ``int``); other classes render as
    ``module.QualName``. Strings pass through unchanged.
    """
    if isinstance(field_type, str):
        return field_type
    module = getattr(field_type, "__module__", None)
    name = getattr(field_type, "__qualname__", None) or getattr(field_type, "__name__", str(field_type))
    if module in (None, builtins.__name__):
        return name
    return f"{module}.{name}"


class DefaultMessageCodeResolver:
    """Stateless resolver producing codes most-specific first.

    Args:
        prefix: Prepended verbatim to every generated code.
        code_format: Placement of the error code within each generated key.
    """

    def __init__(
        self,
        prefix: str = "",
        code_format: MessageCodeFormat = MessageCodeFormat.PREFIX_ERROR_CODE,
    ) -> None:
        self._prefix = prefix
        self._format = code_format

    @classmethod
    def from_properties(cls, properties: ValidationProperties) -> DefaultMessageCodeResolver:
        return cls(
            prefix=properties.message_code_prefix,
            code_format=MessageCodeFormat(properties.message_code_format.lower()),
        )

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def code_format(self) -> MessageCodeFormat:
        return self._format

    def resolve_object_codes(self, code: str, object_name: str) -> list[str]:
        return [
            self._postprocess(self._format.join(code, object_name)),
            self._postprocess(code),
        ]

    def resolve_field_codes(
        self,
        code: str,
        object_name: str,
        field: str,
        field_type: type | str | None = None,
    ) -> list[str]:
        candidates = [
            self._format.join(code, object_name, field),
            self._format.join(code, field),
        ]
        if field_type is not None:
            candidates.append(self._format.join(code, type_name(field_type)))
        candidates.append(code)
        return [self._postprocess(candidate) for candidate in candidates]

    def resolve_message_codes(
        self,
        code: str,
        object_name: str,
        field: str | None = None,
        field_type: type | str | None = None,
    ) -> list[str]:
        """Object codes when *field* is ``None``, field codes otherwise."""
        if field is None:
            return self.resolve_object_codes(code, object_name)
        return self.resolve_field_codes(code, object_name, field, field_type)

    def _postprocess(self, code: str) -> str:
        return f"{self._prefix}{code}"
