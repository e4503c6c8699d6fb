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
"""Tests for DefaultMessageCodeResolver — fallback code generation."""

import pytest

from formcheck.validation.message_codes import (
    DefaultMessageCodeResolver,
    MessageCodeFormat,
    MessageCodeResolver,
    type_name,
)
from formcheck.validation.properties import ValidationProperties


class Money:
    pass


class TestObjectCodes:
    def test_required_item(self):
        resolver = DefaultMessageCodeResolver()
        assert resolver.resolve_message_codes("required", "item") == ["required.item", "required"]

    @pytest.mark.parametrize(("code", "object_name"), [("totalPriceMin", "item"), ("x", "orderLine")])
    def test_object_codes_most_specific_first(self, code, object_name):
        resolver = DefaultMessageCodeResolver()
        assert resolver.resolve_object_codes(code, object_name) == [f"{code}.{object_name}", code]


class TestFieldCodes:
    def test_required_item_name_string(self):
        resolver = DefaultMessageCodeResolver()
        codes = resolver.resolve_message_codes("required", "item", "itemName", str)
        assert codes == [
            "required.item.itemName",
            "required.itemName",
            "required.str",
            "required",
        ]

    def test_type_mismatch_int(self):
        resolver = DefaultMessageCodeResolver()
        codes = resolver.resolve_field_codes("typeMismatch", "user", "age", int)
        assert codes == ["typeMismatch.user.age", "typeMismatch.age", "typeMismatch.int", "typeMismatch"]

    def test_string_type_name_passes_through(self):
        resolver = DefaultMessageCodeResolver()
        codes = resolver.resolve_field_codes("range", "item", "price", "java.lang.Integer")
        assert codes[2] == "range.java.lang.Integer"
        assert len(codes) == 4

    def test_without_type_omits_type_code(self):
        resolver = DefaultMessageCodeResolver()
        codes = resolver.resolve_field_codes("max", "item", "quantity")
        assert codes == ["max.item.quantity", "max.quantity", "max"]


class TestOptions:
    def test_prefix_applies_to_every_code(self):
        resolver = DefaultMessageCodeResolver(prefix="validation.")
        assert resolver.resolve_object_codes("required", "item") == [
            "validation.required.item",
            "validation.required",
        ]

    def test_postfix_format(self):
        resolver = DefaultMessageCodeResolver(code_format=MessageCodeFormat.POSTFIX_ERROR_CODE)
        codes = resolver.resolve_field_codes("required", "item", "name", str)
        assert codes == ["item.name.required", "name.required", "str.required", "required"]

    def test_from_properties(self):
        props = ValidationProperties(message_code_prefix="v.", message_code_format="POSTFIX")
        resolver = DefaultMessageCodeResolver.from_properties(props)
        assert resolver.prefix == "v."
        assert resolver.code_format is MessageCodeFormat.POSTFIX_ERROR_CODE

    def test_implements_port(self):
        assert isinstance(DefaultMessageCodeResolver(), MessageCodeResolver)


class TestTypeName:
    def test_builtin_unqualified(self):
        assert type_name(str) == "str"
        assert type_name(int) == "int"

    def test_user_class_qualified(self):
        assert type_name(Money) == f"{Money.__module__}.Money"
