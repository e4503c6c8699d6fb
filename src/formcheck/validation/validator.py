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
"""Validator port — custom, hand-written validation logic."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from formcheck.validation.error_bag import ErrorBag


@runtime_checkable
class Validator(Protocol):
    """A validator decides for itself which target types it handles.

    ``validate`` records violations on *errors* and never raises for them.
    """

    def supports(self, target_type: type) -> bool: ...

    def validate(self, target: Any, errors: ErrorBag) -> None: ...
