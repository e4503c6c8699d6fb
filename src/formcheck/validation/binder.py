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
"""DataBinder — converts raw request input into a typed target.

Conversion uses pydantic ``TypeAdapter`` in lax mode, so ``"1500"`` binds
to ``1500`` for an ``int`` field. Booleans are only accepted by ``bool``
fields, so ``True`` for an ``int`` field fails instead of binding ``1``.
Input that cannot be converted becomes a ``typeMismatch`` binding failure
carrying the raw text, and the field is left as ``None`` on the target.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import ConfigDict, TypeAdapter, ValidationError

from formcheck.validation.dispatcher import default_object_name
from formcheck.validation.error_bag import ErrorBag
from formcheck.validation.errors import FieldViolation
from formcheck.validation.message_codes import DefaultMessageCodeResolver, MessageCodeResolver, type_name

T = TypeVar("T")

TYPE_MISMATCH = "typeMismatch"

_LAX = ConfigDict(coerce_numbers_to_str=True)

_UNCONVERTIBLE = object()


@dataclass(frozen=True)
class BindingResult(Generic[T]):
    """The bound target plus a bag pre-filled with any binding failures."""

    target: T
    errors: ErrorBag


class DataBinder(Generic[T]):
    """Binds a mapping of raw values onto *target_type* by keyword construction.

    Args:
        target_type: Class constructed with the converted values as keywords.
        field_types: Declared type of every bindable field.
        object_name: Name for message codes; derived from the class otherwise.
        resolver: Code resolver for binding failures and the returned bag.
    """

    def __init__(
        self,
        target_type: type[T],
        field_types: Mapping[str, type],
        object_name: str | None = None,
        resolver: MessageCodeResolver | None = None,
    ) -> None:
        self._target_type = target_type
        self._field_types = dict(field_types)
        self._object_name = object_name or default_object_name(target_type)
        self._resolver: MessageCodeResolver = resolver or DefaultMessageCodeResolver()
        self._adapters: dict[str, TypeAdapter[Any]] = {
            field: TypeAdapter(field_type, config=_LAX) for field, field_type in self._field_types.items()
        }

    @property
    def object_name(self) -> str:
        return self._object_name

    def bind(self, raw: Mapping[str, Any]) -> BindingResult[T]:
        """Convert *raw*; unknown keys are ignored and absent fields bind to ``None``."""
        values: dict[str, Any] = {}
        failures: list[FieldViolation] = []

        for field, field_type in self._field_types.items():
            raw_value = raw.get(field)
            if self._is_empty(raw_value, field_type):
                values[field] = None
                continue
            converted = self._convert(field, field_type, raw_value)
            if converted is not _UNCONVERTIBLE:
                values[field] = converted
            else:
                values[field] = None
                failures.append(
                    FieldViolation(
                        object_name=self._object_name,
                        codes=tuple(
                            self._resolver.resolve_field_codes(TYPE_MISMATCH, self._object_name, field, field_type)
                        ),
                        arguments=(field,),
                        default_message=(
                            f"Failed to convert value '{raw_value}' to required type "
                            f"'{type_name(field_type)}' for field '{field}'"
                        ),
                        field=field,
                        rejected_value=raw_value,
                        binding_failure=True,
                    )
                )

        target = self._target_type(**values)
        errors = ErrorBag(self._object_name, target=target, resolver=self._resolver, field_types=self._field_types)
        for failure in failures:
            errors.add_error(failure)
        return BindingResult(target=target, errors=errors)

    def _convert(self, field: str, field_type: type, raw_value: Any) -> Any:
        # Lax mode would turn True into 1 or "True".
        if isinstance(raw_value, bool) and field_type is not bool:
            return _UNCONVERTIBLE
        try:
            return self._adapters[field].validate_python(raw_value)
        except ValidationError:
            return _UNCONVERTIBLE

    @staticmethod
    def _is_empty(raw_value: Any, field_type: type) -> bool:
        if raw_value is None:
            return True
        return field_type is not str and isinstance(raw_value, str) and not raw_value.strip()
