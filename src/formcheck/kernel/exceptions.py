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
"""Unified exception hierarchy for formcheck.

All library exceptions inherit from FormcheckException, enabling unified
error handling. Rule violations are never raised: they are collected into
an ErrorBag and returned. Exceptions are reserved for conditions the
caller must fix in code or configuration.

Categories:
- BusinessException: request-level problems (unsupported targets, opt-in
  raising of collected violations)
- NoSuchMessageException: a violation could not be turned into text
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from formcheck.validation.error_bag import ErrorBag


# =============================================================================
# Base Exception
# =============================================================================


class FormcheckException(Exception):
    """Base exception for all formcheck errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "UNSUPPORTED_TARGET").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(FormcheckException):
    """Domain rule violations and business logic errors."""


class ValidationException(BusinessException):
    """Input validation failures surfaced as an exception."""


class BindException(ValidationException):
    """Raised on request by :meth:`ErrorBag.raise_if_errors`.

    Carries the complete bag so handlers can still render every violation.
    """

    def __init__(self, errors: ErrorBag) -> None:
        self.errors = errors
        super().__init__(
            f"Validation failed for object '{errors.object_name}': {errors.error_count} error(s)",
            code="VALIDATION_FAILED",
            context={
                "object_name": errors.object_name,
                "codes": [violation.code for violation in errors.all_errors()],
            },
        )


class InvalidRequestException(BusinessException):
    """Request is syntactically valid but semantically incorrect."""


class UnsupportedTargetException(InvalidRequestException):
    """No constraint table or validator accepts the given target type."""


# =============================================================================
# Message Resolution
# =============================================================================


class NoSuchMessageException(FormcheckException):
    """None of a violation's codes resolved and it has no default message."""
