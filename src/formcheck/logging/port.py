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
"""LoggingPort — the hexagonal port for library logging, and its bootstrap."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from formcheck.core.config import Config
from formcheck.logging.structlog_adapter import StructlogAdapter


@runtime_checkable
class LoggingPort(Protocol):
    """Port defining the logging contract for formcheck.

    Engine modules only use ``logging.getLogger(__name__)``; a port
    implementation decides how those records are rendered.
    """

    def configure(self, config: Config) -> None: ...
    def get_logger(self, name: str) -> Any: ...
    def set_level(self, name: str, level: str) -> None: ...


def configure_logging(config: Config | None = None, port: LoggingPort | None = None) -> LoggingPort:
    """Configure logging from ``formcheck.logging`` and return the active port.

    Uses :class:`StructlogAdapter` unless another *port* is given.
    """
    active = port if port is not None else StructlogAdapter()
    active.configure(config or Config())
    return active
