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
"""Declarative constraint rules and the group-aware evaluator that runs them.

Rules are plain records: which field they read (``None`` for object-level
rules), a predicate returning ``True`` when the value is acceptable, the
error code to report, message arguments, and the groups they belong to.

Usage::

    evaluator = GroupedConstraintEvaluator({
        Item: (
            not_blank("name", groups={ConstraintGroup.CREATE, ConstraintGroup.UPDATE}),
            max_value("quantity", 9999, groups={ConstraintGroup.CREATE}),
        ),
    })
    evaluator.evaluate(item, ConstraintGroup.CREATE, errors)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from formcheck.validation.error_bag import ErrorBag
from formcheck.validation.groups import ALL_GROUPS, ConstraintGroup
from formcheck.validation.message_codes import DefaultMessageCodeResolver, MessageCodeResolver

logger = logging.getLogger(__name__)

Arguments = Sequence[Any] | Callable[[Any], Sequence[Any]]


@dataclass(frozen=True)
class ConstraintRule:
    """One declared constraint.

    For field rules ``is_valid`` receives the field's current value; for
    object rules (``field is None``) it receives the whole target. The same
    applies to ``arguments`` when it is callable.
    """

    field: str | None
    code: str
    is_valid: Callable[[Any], bool]
    groups: frozenset[ConstraintGroup] = ALL_GROUPS
    arguments: Arguments = ()
    field_type: type | None = None
    default_message: str | None = None

    @property
    def is_object_rule(self) -> bool:
        return self.field is None

    def applies_to(self, group: ConstraintGroup) -> bool:
        return group in self.groups

    def arguments_for(self, subject: Any) -> tuple[Any, ...]:
        if callable(self.arguments):
            return tuple(self.arguments(subject))
        return tuple(self.arguments)


# ---------------------------------------------------------------------------
# Rule factories
# ---------------------------------------------------------------------------


def _groups(groups: Iterable[ConstraintGroup] | None) -> frozenset[ConstraintGroup]:
    return ALL_GROUPS if groups is None else frozenset(ConstraintGroup.parse(g) for g in groups)


def not_null(
    field: str,
    field_type: type | None = None,
    *,
    groups: Iterable[ConstraintGroup] | None = None,
    code: str = "required",
    message: str | None = "must not be null",
) -> ConstraintRule:
    return ConstraintRule(
        field=field,
        code=code,
        is_valid=lambda value: value is not None,
        groups=_groups(groups),
        field_type=field_type,
        default_message=message,
    )


def not_blank(
    field: str,
    *,
    groups: Iterable[ConstraintGroup] | None = None,
    code: str = "required",
    message: str | None = "must not be blank",
) -> ConstraintRule:
    """Rejects ``None``, the empty string, and whitespace-only text."""
    return ConstraintRule(
        field=field,
        code=code,
        is_valid=lambda value: value is not None and bool(str(value).strip()),
        groups=_groups(groups),
        field_type=str,
        default_message=message,
    )


def value_range(
    field: str,
    minimum: int,
    maximum: int,
    field_type: type | None = int,
    *,
    groups: Iterable[ConstraintGroup] | None = None,
    code: str = "range",
    message: str | None = "must be between {0} and {1}",
) -> ConstraintRule:
    """Inclusive bounds; ``None`` passes (pair with :func:`not_null`)."""
    return ConstraintRule(
        field=field,
        code=code,
        is_valid=lambda value: value is None or minimum <= value <= maximum,
        groups=_groups(groups),
        arguments=(minimum, maximum),
        field_type=field_type,
        default_message=message,
    )


def max_value(
    field: str,
    maximum: int,
    field_type: type | None = int,
    *,
    groups: Iterable[ConstraintGroup] | None = None,
    code: str = "max",
    message: str | None = "must be less than or equal to {0}",
) -> ConstraintRule:
    return ConstraintRule(
        field=field,
        code=code,
        is_valid=lambda value: value is None or value <= maximum,
        groups=_groups(groups),
        arguments=(maximum,),
        field_type=field_type,
        default_message=message,
    )


def min_value(
    field: str,
    minimum: int,
    field_type: type | None = int,
    *,
    groups: Iterable[ConstraintGroup] | None = None,
    code: str = "min",
    message: str | None = "must be greater than or equal to {0}",
) -> ConstraintRule:
    return ConstraintRule(
        field=field,
        code=code,
        is_valid=lambda value: value is None or value >= minimum,
        groups=_groups(groups),
        arguments=(minimum,),
        field_type=field_type,
        default_message=message,
    )


def object_rule(
    code: str,
    is_valid: Callable[[Any], bool],
    *,
    groups: Iterable[ConstraintGroup] | None = None,
    arguments: Arguments = (),
    message: str | None = None,
) -> ConstraintRule:
    """A rule over the whole target, reported as an object error."""
    return ConstraintRule(
        field=None,
        code=code,
        is_valid=is_valid,
        groups=_groups(groups),
        arguments=arguments,
        default_message=message,
    )


# ---------------------------------------------------------------------------
# Evaluator
# ---------------------------------------------------------------------------


class GroupedConstraintEvaluator:
    """Runs the rules declared for a target type that belong to one group.

    Rule tables are fixed at registration time and only read afterwards, so
    one evaluator can serve concurrent callers; each call writes into the
    caller's own ErrorBag.
    """

    def __init__(
        self,
        constraints: Mapping[type, Iterable[ConstraintRule]] | None = None,
        resolver: MessageCodeResolver | None = None,
    ) -> None:
        self._resolver: MessageCodeResolver = resolver or DefaultMessageCodeResolver()
        self._constraints: dict[type, tuple[ConstraintRule, ...]] = {}
        for target_type, rules in (constraints or {}).items():
            self.register(target_type, rules)

    @property
    def resolver(self) -> MessageCodeResolver:
        return self._resolver

    def register(self, target_type: type, rules: Iterable[ConstraintRule]) -> None:
        """Declare (or replace) the rules for *target_type*, in evaluation order."""
        self._constraints[target_type] = tuple(rules)

    def supports(self, target_type: type) -> bool:
        return self._lookup(target_type) is not None

    def rules_for(self, target_type: type, group: ConstraintGroup | str | None = None) -> tuple[ConstraintRule, ...]:
        rules = self._lookup(target_type) or ()
        if group is None:
            return rules
        active = ConstraintGroup.parse(group)
        return tuple(rule for rule in rules if rule.applies_to(active))

    def evaluate(self, target: Any, group: ConstraintGroup | str, errors: ErrorBag) -> None:
        """Run every active rule against *target*, appending failures to *errors*.

        All rules run; a field may collect several violations. Field rules
        are skipped for fields whose raw input already failed to bind.
        """
        object_name = errors.object_name
        for rule in self.rules_for(type(target), group):
            if rule.field is None:
                if not rule.is_valid(target):
                    errors.add_object_error(
                        object_name,
                        self._resolver.resolve_object_codes(rule.code, object_name),
                        rule.arguments_for(target),
                        rule.default_message,
                    )
                    logger.debug("Object rule '%s' failed for '%s'", rule.code, object_name)
                continue

            if errors.has_binding_failure(rule.field):
                continue

            value = getattr(target, rule.field, None)
            if not rule.is_valid(value):
                errors.add_field_error(
                    object_name,
                    rule.field,
                    value,
                    False,
                    self._resolver.resolve_field_codes(rule.code, object_name, rule.field, rule.field_type),
                    rule.arguments_for(value),
                    rule.default_message,
                )
                logger.debug("Rule '%s' failed on '%s.%s'", rule.code, object_name, rule.field)

    def _lookup(self, target_type: type) -> tuple[ConstraintRule, ...] | None:
        rules = self._constraints.get(target_type)
        if rules is not None:
            return rules
        for registered, registered_rules in self._constraints.items():
            if issubclass(target_type, registered):
                return registered_rules
        return None
