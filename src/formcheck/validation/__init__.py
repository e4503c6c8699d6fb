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
"""formcheck validation — error collection, message codes, and grouped constraints."""

from formcheck.validation.binder import BindingResult, DataBinder
from formcheck.validation.constraints import (
    ConstraintRule,
    GroupedConstraintEvaluator,
    max_value,
    min_value,
    not_blank,
    not_null,
    object_rule,
    value_range,
)
from formcheck.validation.decorators import validated
from formcheck.validation.dispatcher import ValidationDispatcher
from formcheck.validation.error_bag import ErrorBag, ViolationSequence
from formcheck.validation.errors import FieldViolation, ObjectViolation
from formcheck.validation.groups import ConstraintGroup
from formcheck.validation.message_codes import (
    DefaultMessageCodeResolver,
    MessageCodeFormat,
    MessageCodeResolver,
)
from formcheck.validation.messages import MessageResolver, MessageSource, StaticMessageSource
from formcheck.validation.properties import ValidationProperties
from formcheck.validation.validator import Validator

__all__ = [
    "BindingResult",
    "ConstraintGroup",
    "ConstraintRule",
    "DataBinder",
    "DefaultMessageCodeResolver",
    "ErrorBag",
    "FieldViolation",
    "GroupedConstraintEvaluator",
    "MessageCodeFormat",
    "MessageCodeResolver",
    "MessageResolver",
    "MessageSource",
    "ObjectViolation",
    "StaticMessageSource",
    "ValidationDispatcher",
    "ValidationProperties",
    "Validator",
    "ViolationSequence",
    "max_value",
    "min_value",
    "not_blank",
    "not_null",
    "object_rule",
    "validated",
    "value_range",
]
