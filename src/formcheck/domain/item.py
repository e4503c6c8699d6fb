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
"""Item — the form entity and its validation rules.

Rules per operation:

============  =====================================  ==============  ===============
Field         Rule                                   Groups          Code
============  =====================================  ==============  ===============
id            not null                               UPDATE          required
name          not blank                              CREATE, UPDATE  required
price         not null; 1000 <= price <= 1000000     CREATE, UPDATE  required, range
quantity      not null; quantity <= 9999             not null: both  required, max
                                                     max: CREATE
(object)      price * quantity >= 10000              CREATE, UPDATE  totalPriceMin
============  =====================================  ==============  ===============

The object rule runs whenever price and quantity are both present, even
if either already failed its own bound.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from formcheck.core.config import Config
from formcheck.validation.binder import DataBinder
from formcheck.validation.constraints import (
    ConstraintRule,
    max_value,
    not_blank,
    not_null,
    object_rule,
    value_range,
)
from formcheck.validation.dispatcher import ValidationDispatcher
from formcheck.validation.error_bag import ErrorBag
from formcheck.validation.groups import ConstraintGroup
from formcheck.validation.message_codes import MessageCodeResolver
from formcheck.validation.validator import Validator

CREATE = ConstraintGroup.CREATE
UPDATE = ConstraintGroup.UPDATE

PRICE_MIN = 1_000
PRICE_MAX = 1_000_000
QUANTITY_MAX = 9_999
TOTAL_PRICE_MIN = 10_000

ITEM_OBJECT_NAME = "item"


@dataclass(frozen=True)
class Item:
    """Submitted item form. Every attribute may be missing on input."""

    id: int | None = None
    name: str | None = None
    price: int | None = None
    quantity: int | None = None


ITEM_FIELD_TYPES: dict[str, type] = {
    "id": int,
    "name": str,
    "price": int,
    "quantity": int,
}


def total_price(item: Item) -> int | None:
    if item.price is None or item.quantity is None:
        return None
    return item.price * item.quantity


def _total_price_ok(item: Item) -> bool:
    total = total_price(item)
    return total is None or total >= TOTAL_PRICE_MIN


ITEM_CONSTRAINTS: tuple[ConstraintRule, ...] = (
    not_null("id", int, groups={UPDATE}),
    not_blank("name", groups={CREATE, UPDATE}),
    not_null("price", int, groups={CREATE, UPDATE}),
    value_range("price", PRICE_MIN, PRICE_MAX, groups={CREATE, UPDATE}),
    not_null("quantity", int, groups={CREATE, UPDATE}),
    max_value("quantity", QUANTITY_MAX, groups={CREATE}),
    object_rule(
        "totalPriceMin",
        _total_price_ok,
        groups={CREATE, UPDATE},
        arguments=lambda item: (TOTAL_PRICE_MIN, total_price(item)),
        message="price * quantity must be at least {0}, current value = {1}",
    ),
)


class ItemValidator:
    """Hand-written equivalent of the CREATE rules, for use as a custom Validator."""

    def supports(self, target_type: type) -> bool:
        return issubclass(target_type, Item)

    def validate(self, target: Any, errors: ErrorBag) -> None:
        item: Item = target

        if item.name is None or not item.name.strip():
            errors.reject_value("name", "required")

        if item.price is None:
            errors.reject_value("price", "required")
        elif not PRICE_MIN <= item.price <= PRICE_MAX:
            errors.reject_value("price", "range", (PRICE_MIN, PRICE_MAX))

        if item.quantity is None:
            errors.reject_value("quantity", "required")
        elif item.quantity > QUANTITY_MAX:
            errors.reject_value("quantity", "max", (QUANTITY_MAX,))

        total = total_price(item)
        if total is not None and total < TOTAL_PRICE_MIN:
            errors.reject("totalPriceMin", (TOTAL_PRICE_MIN, total))


def item_dispatcher(
    config: Config | None = None,
    validators: Iterable[Validator] = (),
    *,
    with_constraints: bool = True,
) -> ValidationDispatcher:
    """Dispatcher for :class:`Item`, configured from ``formcheck.validation``.

    Pass ``with_constraints=False`` together with an :class:`ItemValidator`
    to rely on hand-written checks only.
    """
    return ValidationDispatcher.from_config(
        config or Config(),
        constraints={Item: ITEM_CONSTRAINTS} if with_constraints else None,
        validators=validators,
        object_names={Item: ITEM_OBJECT_NAME},
        field_types={Item: ITEM_FIELD_TYPES},
    )


def item_binder(resolver: MessageCodeResolver | None = None) -> DataBinder[Item]:
    return DataBinder(Item, ITEM_FIELD_TYPES, object_name=ITEM_OBJECT_NAME, resolver=resolver)
