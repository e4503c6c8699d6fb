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
"""Tests for ValidationDispatcher — constraints plus custom validators."""

import logging
from dataclasses import dataclass
from typing import Any

import pytest

from formcheck.core.config import Config
from formcheck.kernel.exceptions import UnsupportedTargetException
from formcheck.validation.constraints import GroupedConstraintEvaluator, not_blank, not_null
from formcheck.validation.dispatcher import ValidationDispatcher, default_object_name
from formcheck.validation.error_bag import ErrorBag
from formcheck.validation.groups import ConstraintGroup
from formcheck.validation.message_codes import DefaultMessageCodeResolver
from formcheck.validation.validator import Validator


@dataclass(frozen=True)
class OrderLine:
    sku: str | None = None
    count: int | None = None


class EvenCountValidator:
    def supports(self, target_type: type) -> bool:
        return issubclass(target_type, OrderLine)

    def validate(self, target: Any, errors: ErrorBag) -> None:
        if target.count is not None and target.count % 2:
            errors.reject_value("count", "even", (target.count,))


class NeverValidator:
    def supports(self, target_type: type) -> bool:
        return False

    def validate(self, target: Any, errors: ErrorBag) -> None:
        raise AssertionError("must not be called")


def _dispatcher(**kwargs) -> ValidationDispatcher:
    evaluator = GroupedConstraintEvaluator(
        {OrderLine: (not_blank("sku"), not_null("count", int, groups={ConstraintGroup.UPDATE}))}
    )
    return ValidationDispatcher(evaluator, **kwargs)


class TestDispatch:
    def test_clean_target_has_no_errors(self):
        bag = _dispatcher().validate(OrderLine(sku="A1", count=2), ConstraintGroup.CREATE)
        assert not bag.has_errors()
        assert bag.object_name == "orderLine"

    def test_constraints_run_before_validators(self):
        dispatcher = _dispatcher(validators=[NeverValidator(), EvenCountValidator()])
        bag = dispatcher.validate(OrderLine(sku="", count=3), "create")
        assert [(v.field, v.code) for v in bag.all_errors()] == [("sku", "required"), ("count", "even")]

    def test_validators_see_field_types(self):
        dispatcher = _dispatcher(
            validators=[EvenCountValidator()],
            field_types={OrderLine: {"sku": str, "count": int}},
        )
        bag = dispatcher.validate(OrderLine(sku="A1", count=3), "create")
        assert bag.field_error("count").codes == ("even.orderLine.count", "even.count", "even.int", "even")

    def test_group_selects_rules(self):
        dispatcher = _dispatcher()
        assert not dispatcher.validate(OrderLine(sku="A1"), ConstraintGroup.CREATE).has_errors()
        assert dispatcher.validate(OrderLine(sku="A1"), ConstraintGroup.UPDATE).has_field_errors("count")

    def test_validator_only_dispatch(self):
        dispatcher = ValidationDispatcher(validators=[EvenCountValidator()])
        assert dispatcher.validate(OrderLine(count=1), "update").has_field_errors("count")

    def test_unsupported_target_raises(self):
        with pytest.raises(UnsupportedTargetException) as exc_info:
            _dispatcher().validate("not a form", ConstraintGroup.CREATE)
        assert exc_info.value.code == "UNSUPPORTED_TARGET"

    def test_each_call_gets_a_fresh_bag(self):
        dispatcher = _dispatcher()
        first = dispatcher.validate(OrderLine(), "create")
        second = dispatcher.validate(OrderLine(), "create")
        assert first is not second
        assert list(first.all_errors()) == list(second.all_errors())

    def test_appends_to_given_bag(self):
        dispatcher = _dispatcher()
        bag = ErrorBag("orderLine")
        bag.add_object_error("orderLine", ["earlier"])
        result = dispatcher.validate(OrderLine(), "create", errors=bag)
        assert result is bag
        assert [v.code for v in bag.all_errors()] == ["earlier", "required"]

    def test_object_name_override(self):
        dispatcher = _dispatcher(object_names={OrderLine: "line"})
        bag = dispatcher.validate(OrderLine(), "create")
        assert bag.field_error("sku").codes[0] == "required.line.sku"

    def test_protocol_conformance(self):
        assert isinstance(EvenCountValidator(), Validator)


class TestLogging:
    def test_logs_bag_when_errors(self, caplog):
        with caplog.at_level(logging.INFO, logger="formcheck.validation.dispatcher"):
            _dispatcher().validate(OrderLine(), "create")
        assert "errors=ErrorBag for object 'orderLine'" in caplog.text

    def test_log_errors_disabled(self, caplog):
        with caplog.at_level(logging.INFO, logger="formcheck.validation.dispatcher"):
            _dispatcher(log_errors=False).validate(OrderLine(), "create")
        assert "errors=" not in caplog.text


class TestFromConfig:
    def test_resolver_and_logging_follow_config(self):
        config = Config(
            {
                "formcheck": {
                    "validation": {
                        "message-code-prefix": "v.",
                        "message-code-format": "postfix",
                        "log-errors": False,
                    }
                }
            }
        )
        dispatcher = ValidationDispatcher.from_config(config, constraints={OrderLine: (not_blank("sku"),)})
        bag = dispatcher.validate(OrderLine(), "create")
        assert bag.field_error("sku").codes == ("v.orderLine.sku.required", "v.sku.required", "v.str.required", "v.required")


class TestResolverConsistency:
    def test_evaluator_inherits_dispatcher_resolver(self):
        resolver = DefaultMessageCodeResolver(prefix="v.")
        dispatcher = ValidationDispatcher(validators=[EvenCountValidator()], resolver=resolver)
        assert dispatcher.evaluator.resolver is resolver
        assert dispatcher.resolver is resolver

    def test_mismatched_evaluator_resolver_rejected(self):
        evaluator = GroupedConstraintEvaluator({OrderLine: (not_blank("sku"),)})
        with pytest.raises(ValueError, match="resolver"):
            ValidationDispatcher(evaluator, resolver=DefaultMessageCodeResolver(prefix="v."))

    def test_shared_resolver_gives_uniform_codes(self):
        resolver = DefaultMessageCodeResolver(prefix="v.")
        evaluator = GroupedConstraintEvaluator({OrderLine: (not_blank("sku"),)}, resolver=resolver)
        dispatcher = ValidationDispatcher(evaluator, validators=[EvenCountValidator()], resolver=resolver)
        bag = dispatcher.validate(OrderLine(sku="", count=3), "create")
        assert all(code.startswith("v.") for v in bag.all_errors() for code in v.codes)


class TestDefaultObjectName:
    def test_decapitalizes(self):
        assert default_object_name(OrderLine) == "orderLine"
