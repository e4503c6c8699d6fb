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
"""ValidationDispatcher — runs constraints and custom validators into one ErrorBag."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from formcheck.core.config import Config
from formcheck.kernel.exceptions import UnsupportedTargetException
from formcheck.validation.constraints import GroupedConstraintEvaluator
from formcheck.validation.error_bag import ErrorBag
from formcheck.validation.groups import ConstraintGroup
from formcheck.validation.message_codes import DefaultMessageCodeResolver, MessageCodeResolver
from formcheck.validation.properties import ValidationProperties
from formcheck.validation.validator import Validator

logger = logging.getLogger(__name__)


def default_object_name(target_type: type) -> str:
    """``Item`` -> ``item``, ``OrderLine`` -> ``orderLine``."""
    name = target_type.__name__
    return name[:1].lower() + name[1:]


class ValidationDispatcher:
    """Single entry point: ``validate(target, group)`` returns a fresh ErrorBag.

    Pipeline:
    1. Declared constraints for the active group (when the evaluator has a
       table for the target type)
    2. Every registered validator whose ``supports()`` accepts the type, in
       registration order
    3. Callers branch on ``errors.has_errors()``

    Args:
        evaluator: Group-aware constraint evaluator.
        validators: Custom validators; several may apply to one type.
        resolver: Code resolver handed to each new ErrorBag. Defaults to the
            evaluator's resolver.
        object_names: Per-type object names; otherwise derived from the
            class name.
        field_types: Per-type declared field types for type-specific codes.
        log_errors: Log the full bag at INFO when violations are found.
    """

    def __init__(
        self,
        evaluator: GroupedConstraintEvaluator | None = None,
        validators: Iterable[Validator] = (),
        resolver: MessageCodeResolver | None = None,
        object_names: Mapping[type, str] | None = None,
        field_types: Mapping[type, Mapping[str, type]] | None = None,
        log_errors: bool = True,
    ) -> None:
        if evaluator is not None and resolver is not None and evaluator.resolver is not resolver:
            raise ValueError("Pass the resolver to the evaluator as well; one bag must not mix code formats")
        self._evaluator = evaluator or GroupedConstraintEvaluator(resolver=resolver)
        self._validators: tuple[Validator, ...] = tuple(validators)
        self._resolver: MessageCodeResolver = resolver or self._evaluator.resolver
        self._object_names: dict[type, str] = dict(object_names or {})
        self._field_types: dict[type, Mapping[str, type]] = dict(field_types or {})
        self._log_errors = log_errors

    @classmethod
    def from_config(
        cls,
        config: Config,
        constraints: Mapping[type, Iterable[Any]] | None = None,
        validators: Iterable[Validator] = (),
        object_names: Mapping[type, str] | None = None,
        field_types: Mapping[type, Mapping[str, type]] | None = None,
    ) -> ValidationDispatcher:
        """Build a dispatcher whose resolver and logging follow ``formcheck.validation``."""
        properties = config.bind(ValidationProperties)
        resolver = DefaultMessageCodeResolver.from_properties(properties)
        return cls(
            evaluator=GroupedConstraintEvaluator(constraints, resolver=resolver),
            validators=validators,
            resolver=resolver,
            object_names=object_names,
            field_types=field_types,
            log_errors=properties.log_errors,
        )

    @property
    def evaluator(self) -> GroupedConstraintEvaluator:
        return self._evaluator

    @property
    def resolver(self) -> MessageCodeResolver:
        return self._resolver

    @property
    def validators(self) -> tuple[Validator, ...]:
        return self._validators

    def object_name_for(self, target_type: type) -> str:
        return self._object_names.get(target_type) or default_object_name(target_type)

    def new_error_bag(self, target: Any, object_name: str | None = None) -> ErrorBag:
        target_type = type(target)
        return ErrorBag(
            object_name or self.object_name_for(target_type),
            target=target,
            resolver=self._resolver,
            field_types=self._field_types.get(target_type),
        )

    def supports(self, target_type: type) -> bool:
        return self._evaluator.supports(target_type) or any(v.supports(target_type) for v in self._validators)

    def validate(
        self,
        target: Any,
        group: ConstraintGroup | str,
        errors: ErrorBag | None = None,
    ) -> ErrorBag:
        """Validate *target* for *group*.

        A fresh ErrorBag is created unless *errors* is given (e.g. a bag
        already holding binding failures), in which case results are
        appended to it and it is returned.

        Raises:
            UnsupportedTargetException: Neither the evaluator nor any
                validator handles the target's type.
        """
        active = ConstraintGroup.parse(group)
        target_type = type(target)
        applicable = [v for v in self._validators if v.supports(target_type)]
        has_constraints = self._evaluator.supports(target_type)
        if not has_constraints and not applicable:
            raise UnsupportedTargetException(
                f"No constraints or validators registered for {target_type.__name__}",
                code="UNSUPPORTED_TARGET",
                context={"target_type": target_type.__qualname__, "group": active.value},
            )

        if errors is None:
            errors = self.new_error_bag(target)

        if has_constraints:
            self._evaluator.evaluate(target, active, errors)
        for validator in applicable:
            validator.validate(target, errors)

        logger.debug(
            "Validated '%s' for group %s: %d error(s)",
            errors.object_name,
            active.name,
            errors.error_count,
        )
        if self._log_errors and errors.has_errors():
            logger.info("errors=%r", errors)
        return errors
