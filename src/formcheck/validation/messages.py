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
"""Message resolution boundary — turns a violation's codes into text.

formcheck never owns message catalogs. Callers supply a :class:`MessageSource`
and :class:`MessageResolver` walks a violation's codes against it,
most-specific first.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from formcheck.kernel.exceptions import NoSuchMessageException
from formcheck.validation.errors import ObjectViolation


@runtime_checkable
class MessageSource(Protocol):
    """Port for key→template lookup.

    Implementations raise ``KeyError`` when *code* is unknown.
    """

    def get_message(
        self,
        code: str,
        args: tuple[Any, ...] = (),
        locale: str = "en",
    ) -> str: ...


def substitute(template: str, args: tuple[Any, ...]) -> str:
    """Replace ``{0}``, ``{1}``, ... placeholders with *args*."""
    result = template
    for idx, arg in enumerate(args):
        result = result.replace(f"{{{idx}}}", str(arg))
    return result


class StaticMessageSource:
    """In-memory message table keyed by locale.

    ``messages`` may be a flat ``{code: template}`` mapping (used for every
    locale) or ``{locale: {code: template}}`` when *by_locale* is set.
    Missing codes fall back to *default_locale*.
    """

    def __init__(
        self,
        messages: Mapping[str, Any] | None = None,
        *,
        by_locale: bool = False,
        default_locale: str = "en",
    ) -> None:
        self._default_locale = default_locale
        if by_locale:
            self._bundles: dict[str, dict[str, str]] = {
                locale: dict(bundle) for locale, bundle in (messages or {}).items()
            }
        else:
            self._bundles = {default_locale: {k: str(v) for k, v in (messages or {}).items()}}

    def add_message(self, code: str, template: str, locale: str | None = None) -> None:
        self._bundles.setdefault(locale or self._default_locale, {})[code] = template

    def get_message(
        self,
        code: str,
        args: tuple[Any, ...] = (),
        locale: str = "en",
    ) -> str:
        template = self._bundles.get(locale, {}).get(code)
        if template is None and locale != self._default_locale:
            template = self._bundles.get(self._default_locale, {}).get(code)
        if template is None:
            raise KeyError(f"No message found for code '{code}' in locale '{locale}'")
        return substitute(template, args)


class MessageResolver:
    """Resolves violations to text using the first code the source knows."""

    def __init__(self, source: MessageSource) -> None:
        self._source = source

    def resolve(self, violation: ObjectViolation, locale: str = "en") -> str:
        """Return text for *violation*.

        Raises:
            NoSuchMessageException: No code resolved and there is no default
                message.
        """
        for code in violation.codes:
            try:
                return self._source.get_message(code, violation.arguments, locale)
            except KeyError:
                continue
        if violation.default_message is not None:
            return substitute(violation.default_message, violation.arguments)
        raise NoSuchMessageException(
            f"No message found under codes {list(violation.codes)} for locale '{locale}'",
            code="NO_SUCH_MESSAGE",
            context={"codes": list(violation.codes), "locale": locale},
        )
