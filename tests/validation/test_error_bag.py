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
"""Tests for ErrorBag — ordered, never-deduplicating violation container."""

from dataclasses import dataclass

import pytest

from formcheck.kernel.exceptions import BindException, ValidationException
from formcheck.validation.error_bag import ErrorBag
from formcheck.validation.errors import FieldViolation, ObjectViolation


@dataclass
class Form:
    name: str | None = None
    price: int | None = None


def _bag(target=None) -> ErrorBag:
    return ErrorBag("item", target=target, field_types={"name": str, "price": int})


class TestRecording:
    def test_empty_bag(self):
        bag = _bag()
        assert not bag.has_errors()
        assert not bag.has_field_errors()
        assert not bag.has_global_errors()
        assert list(bag.all_errors()) == []

    def test_add_field_error(self):
        bag = _bag()
        violation = bag.add_field_error("item", "price", 500, False, ["range.item.price", "range"], [1000, 1000000])
        assert isinstance(violation, FieldViolation)
        assert violation.codes == ("range.item.price", "range")
        assert violation.arguments == (1000, 1000000)
        assert violation.code == "range"
        assert bag.has_errors()
        assert bag.has_field_errors("price")
        assert not bag.has_field_errors("name")
        assert not bag.has_global_errors()

    def test_add_object_error(self):
        bag = _bag()
        bag.add_object_error("item", ["totalPriceMin.item", "totalPriceMin"], [10000, 100])
        assert bag.has_global_errors()
        assert not bag.has_field_errors()
        assert bag.global_error().code == "totalPriceMin"

    def test_multiple_errors_on_same_field_are_kept(self):
        bag = _bag()
        bag.add_field_error("item", "price", None, False, ["required"])
        bag.add_field_error("item", "price", None, False, ["required"])
        assert bag.field_error_count("price") == 2

    def test_rejects_foreign_object_name(self):
        bag = _bag()
        with pytest.raises(ValueError, match="order"):
            bag.add_object_error("order", ["required"])

    def test_single_string_codes_rejected(self):
        bag = _bag()
        with pytest.raises(TypeError, match="totalPriceMin"):
            bag.add_object_error("item", "totalPriceMin")
        with pytest.raises(TypeError):
            bag.add_field_error("item", "price", 500, False, "range")
        assert not bag.has_errors()

    def test_codes_must_not_be_empty(self):
        bag = _bag()
        with pytest.raises(ValueError):
            bag.add_object_error("item", [])
        assert not bag.has_errors()


class TestAllErrors:
    def test_interleaves_in_insertion_order(self):
        bag = _bag()
        bag.add_field_error("item", "name", "", False, ["required"])
        bag.add_object_error("item", ["totalPriceMin"])
        bag.add_field_error("item", "price", 1, False, ["range"])
        assert [v.code for v in bag.all_errors()] == ["required", "totalPriceMin", "range"]

    def test_sequence_is_restartable(self):
        bag = _bag()
        bag.add_object_error("item", ["a"])
        bag.add_object_error("item", ["b"])
        errors = bag.all_errors()
        assert [v.code for v in errors] == ["a", "b"]
        assert [v.code for v in errors] == ["a", "b"]
        assert len(errors) == 2
        assert errors[1].code == "b"


class TestRejectHelpers:
    def test_reject_value_reads_target_and_expands_codes(self):
        bag = _bag(Form(name="", price=500))
        violation = bag.reject_value("price", "range", (1000, 1000000))
        assert violation.rejected_value == 500
        assert violation.codes == ("range.item.price", "range.price", "range.int", "range")

    def test_reject_expands_object_codes(self):
        bag = _bag(Form())
        violation = bag.reject("totalPriceMin", (10000, 100))
        assert violation.codes == ("totalPriceMin.item", "totalPriceMin")


class TestQueries:
    def test_field_value_prefers_rejected_value(self):
        bag = _bag(Form(name="pen", price=None))
        bag.add_field_error("item", "price", "abc", True, ["typeMismatch"])
        assert bag.field_value("price") == "abc"
        assert bag.field_value("name") == "pen"
        assert bag.has_binding_failure("price")
        assert not bag.has_binding_failure("name")

    def test_field_error_returns_first(self):
        bag = _bag()
        bag.add_field_error("item", "name", "", False, ["first"])
        bag.add_field_error("item", "name", "", False, ["second"])
        assert bag.field_error("name").code == "first"
        assert bag.field_error("price") is None

    def test_merge_preserves_order(self):
        first, second = _bag(), _bag()
        first.add_object_error("item", ["a"])
        second.add_field_error("item", "name", "", False, ["b"])
        second.add_object_error("item", ["c"])
        first.merge(second)
        assert [v.code for v in first.all_errors()] == ["a", "b", "c"]

    def test_to_dict_groups_field_errors(self):
        bag = _bag()
        bag.add_field_error("item", "name", "", False, ["required"])
        bag.add_object_error("item", ["totalPriceMin"])
        data = bag.to_dict()
        assert data["object_name"] == "item"
        assert data["field_errors"]["name"][0]["codes"] == ("required",)
        assert data["global_errors"][0]["codes"] == ("totalPriceMin",)

    def test_repr_lists_every_violation(self):
        bag = _bag()
        bag.add_field_error("item", "price", 500, False, ["range"])
        bag.add_object_error("item", ["totalPriceMin"])
        text = repr(bag)
        assert "2 errors" in text
        assert "Field error in object 'item' on field 'price': rejected value [500]" in text
        assert "Error in object 'item'" in text


class TestRaiseIfErrors:
    def test_no_errors_does_not_raise(self):
        _bag().raise_if_errors()

    def test_raises_bind_exception_with_bag(self):
        bag = _bag()
        bag.add_object_error("item", ["totalPriceMin"])
        with pytest.raises(BindException) as exc_info:
            bag.raise_if_errors()
        assert exc_info.value.errors is bag
        assert exc_info.value.code == "VALIDATION_FAILED"
        assert isinstance(exc_info.value, ValidationException)


class TestViolationTypes:
    def test_field_violation_is_object_violation(self):
        assert issubclass(FieldViolation, ObjectViolation)

    def test_field_violation_requires_field(self):
        with pytest.raises(ValueError):
            FieldViolation(object_name="item", codes=("required",))
