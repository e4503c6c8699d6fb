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
"""Handler decorator that validates an argument and injects its ErrorBag."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from formcheck.validation.dispatcher import ValidationDispatcher
from formcheck.validation.error_bag import ErrorBag
from formcheck.validation.groups import ConstraintGroup

F = TypeVar("F", bound=Callable[..., Any])


def validated(
    dispatcher: ValidationDispatcher,
    param: str,
    group: ConstraintGroup | str = ConstraintGroup.CREATE,
    errors_param: str = "errors",
) -> Callable[[F], F]:
    """Decorator that validates keyword argument *param* before the handler runs.

    The resulting ErrorBag is passed as keyword *errors_param*; the handler
    branches on ``errors.has_errors()``. Violations never raise. If the
    caller already supplies a bag under *errors_param* (for example one
    holding binding failures), validation appends to it.

    Args:
        dispatcher: Dispatcher used for validation.
        param: Name of the keyword argument holding the target.
        group: Constraint group to validate for.
        errors_param: Keyword under which the bag is injected.
    """
    active = ConstraintGroup.parse(group)

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            if param not in kwargs:
                raise TypeError(f"{func.__name__}() requires keyword argument '{param}' for validation")
            existing: ErrorBag | None = kwargs.get(errors_param)
            kwargs[errors_param] = dispatcher.validate(kwargs[param], active, errors=existing)
            return await func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
