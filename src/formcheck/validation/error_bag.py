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
"""ErrorBag — ordered accumulator of violations for one validation target."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any, overload

from formcheck.kernel.exceptions import BindException
from formcheck.validation.errors import FieldViolation, ObjectViolation
from formcheck.validation.message_codes import DefaultMessageCodeResolver, MessageCodeResolver


class ViolationSequence(Sequence[ObjectViolation]):
    """Read-only, restartable view over a bag's violations in insertion order.

    Nothing is copied; each iteration walks the bag's current contents.
    """

    __slots__ = ("_items",)

    def __init__(self, items: list[ObjectViolation]) -> None:
        self._items = items

    @overload
    def __getitem__(self, index: int) -> ObjectViolation: ...
    @overload
    def __getitem__(self, index: slice) -> Sequence[ObjectViolation]: ...

    def __getitem__(self, index: int | slice) -> ObjectViolation | Sequence[ObjectViolation]:
        if isinstance(index, slice):
            return tuple(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ObjectViolation]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"ViolationSequence({self._items!r})"


class ErrorBag:
    """Collects every violation found for one object; never drops or merges entries.

    Object and field violations are kept in a single insertion-ordered list
    so :meth:`all_errors` interleaves them exactly as they were added.

    Args:
        object_name: Name used in message codes (e.g. ``"item"``).
        target: The object under validation, used for :meth:`reject_value`
            and :meth:`field_value`. May be ``None``.
        resolver: Expands error codes for :meth:`reject` / :meth:`reject_value`.
        field_types: Declared field types, used for the type-specific code.
    """

    def __init__(
        self,
        object_name: str,
        target: Any = None,
        resolver: MessageCodeResolver | None = None,
        field_types: Mapping[str, type] | None = None,
    ) -> None:
        self._object_name = object_name
        self._target = target
        self._resolver: MessageCodeResolver = resolver or DefaultMessageCodeResolver()
        self._field_types: dict[str, type] = dict(field_types or {})
        self._errors: list[ObjectViolation] = []

    @property
    def object_name(self) -> str:
        return self._object_name

    @property
    def target(self) -> Any:
        return self._target

    @property
    def resolver(self) -> MessageCodeResolver:
        return self._resolver

    # ── recording ──────────────────────────────────────────────

    def add_error(self, violation: ObjectViolation) -> None:
        """Append a prebuilt violation belonging to this bag's object."""
        if violation.object_name != self._object_name:
            raise ValueError(
                f"Cannot add error for object '{violation.object_name}' "
                f"to bag for object '{self._object_name}'"
            )
        self._errors.append(violation)

    def add_field_error(
        self,
        object_name: str,
        field: str,
        rejected_value: Any,
        binding_failure: bool,
        codes: Sequence[str],
        arguments: Sequence[Any] = (),
        default_message: str | None = None,
    ) -> FieldViolation:
        violation = FieldViolation(
            object_name=object_name,
            codes=codes,  # type: ignore[arg-type]
            arguments=tuple(arguments),
            default_message=default_message,
            field=field,
            rejected_value=rejected_value,
            binding_failure=binding_failure,
        )
        self.add_error(violation)
        return violation

    def add_object_error(
        self,
        object_name: str,
        codes: Sequence[str],
        arguments: Sequence[Any] = (),
        default_message: str | None = None,
    ) -> ObjectViolation:
        violation = ObjectViolation(
            object_name=object_name,
            codes=codes,  # type: ignore[arg-type]
            arguments=tuple(arguments),
            default_message=default_message,
        )
        self.add_error(violation)
        return violation

    def reject(
        self,
        code: str,
        arguments: Sequence[Any] = (),
        default_message: str | None = None,
    ) -> ObjectViolation:
        """Record an object error, expanding *code* through the resolver."""
        codes = self._resolver.resolve_object_codes(code, self._object_name)
        return self.add_object_error(self._object_name, codes, arguments, default_message)

    def reject_value(
        self,
        field: str,
        code: str,
        arguments: Sequence[Any] = (),
        default_message: str | None = None,
    ) -> FieldViolation:
        """Record a field error; the rejected value is read from the target."""
        codes = self._resolver.resolve_field_codes(code, self._object_name, field, self._field_types.get(field))
        rejected = getattr(self._target, field, None) if self._target is not None else None
        return self.add_field_error(self._object_name, field, rejected, False, codes, arguments, default_message)

    def merge(self, other: ErrorBag) -> None:
        """Append every violation of *other*, preserving its order."""
        for violation in other.all_errors():
            self.add_error(violation)

    # ── queries ────────────────────────────────────────────────

    def has_errors(self) -> bool:
        return bool(self._errors)

    def has_field_errors(self, field: str | None = None) -> bool:
        return any(True for _ in self._iter_field_errors(field))

    def has_global_errors(self) -> bool:
        return any(not isinstance(e, FieldViolation) for e in self._errors)

    def has_binding_failure(self, field: str) -> bool:
        return any(e.binding_failure for e in self._iter_field_errors(field))

    def all_errors(self) -> ViolationSequence:
        return ViolationSequence(self._errors)

    def field_errors(self, field: str | None = None) -> list[FieldViolation]:
        return list(self._iter_field_errors(field))

    def field_error(self, field: str | None = None) -> FieldViolation | None:
        return next(self._iter_field_errors(field), None)

    def global_errors(self) -> list[ObjectViolation]:
        return [e for e in self._errors if not isinstance(e, FieldViolation)]

    def global_error(self) -> ObjectViolation | None:
        return next((e for e in self._errors if not isinstance(e, FieldViolation)), None)

    @property
    def error_count(self) -> int:
        return len(self._errors)

    @property
    def global_error_count(self) -> int:
        return len(self.global_errors())

    def field_error_count(self, field: str | None = None) -> int:
        return sum(1 for _ in self._iter_field_errors(field))

    def field_value(self, field: str) -> Any:
        """Value to redisplay for *field*.

        The first rejected value recorded for the field wins, so raw text
        from a failed conversion is shown back to the user unchanged.
        """
        first = self.field_error(field)
        if first is not None:
            return first.rejected_value
        if self._target is None:
            return None
        return getattr(self._target, field, None)

    def raise_if_errors(self) -> None:
        if self._errors:
            raise BindException(self)

    def to_dict(self) -> dict[str, Any]:
        field_errors: dict[str, list[dict[str, Any]]] = {}
        for violation in self._iter_field_errors(None):
            field_errors.setdefault(violation.field, []).append(violation.to_dict())
        return {
            "object_name": self._object_name,
            "global_errors": [e.to_dict() for e in self.global_errors()],
            "field_errors": field_errors,
        }

    def _iter_field_errors(self, field: str | None) -> Iterator[FieldViolation]:
        for violation in self._errors:
            if isinstance(violation, FieldViolation) and (field is None or violation.field == field):
                yield violation

    def __repr__(self) -> str:
        lines = [f"ErrorBag for object '{self._object_name}': {len(self._errors)} errors"]
        lines.extend(str(violation) for violation in self._errors)
        return "\n".join(lines)
