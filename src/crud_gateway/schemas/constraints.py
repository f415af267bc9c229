"""
Reusable field constraints for validation contracts.

Contracts declare fields as `Annotated` types, for example:

    first_name: Annotated[
        str,
        Required("First name required"),
        constraints(
            min_length(1, "First name required"),
            matches(NAME_PATTERN, "First name can be ..."),
        ),
    ]

`constraints(...)` runs every check of the field, in declaration order, and
fails once with a `PydanticCustomError` of type "constraint" listing the
message of each failed check (`ctx["messages"]`). An empty first name therefore
reports both "required" and the format rule.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any, Callable, Iterable

from pydantic import AfterValidator
from pydantic_core import PydanticCustomError

CONSTRAINT_ERROR = "constraint"


@dataclass(frozen=True)
class Required:
    """
    Message to report when the field is absent from an Insert payload.

    Pure metadata: pydantic ignores it, schemas.messages reads it back.
    """

    message: str


@dataclass(frozen=True)
class Check:
    """One predicate and the message reported when it is falsy."""

    predicate: Callable[[Any], bool]
    message: str

    def failed(self, value: Any) -> bool:
        return not self.predicate(value)


def constraints(*checks: Check) -> AfterValidator:
    """Run all `checks`; fail with every failing message, in declaration order."""

    def _validate(value: Any) -> Any:
        messages = [item.message for item in checks if item.failed(value)]
        if messages:
            # the template is the first message; the full list travels in ctx
            raise PydanticCustomError(CONSTRAINT_ERROR, messages[0], {"messages": messages})
        return value

    return AfterValidator(_validate)


def check(predicate: Callable[[Any], bool], message: str) -> Check:
    return Check(predicate, message)


def min_length(length: int, message: str) -> Check:
    return check(lambda value: len(value) >= length, message)


def matches(pattern: str | re.Pattern, message: str, flags: int = 0) -> Check:
    """Full-string regex match."""
    compiled = re.compile(pattern, flags) if isinstance(pattern, str) else pattern
    return check(lambda value: compiled.fullmatch(value) is not None, message)


def one_of(choices: Iterable[Any], message: str) -> Check:
    allowed = tuple(choices)
    return check(lambda value: value in allowed, message)


# Written-out dates accepted besides ISO 8601 and RFC 2822
_DATE_FORMATS = ("%B %d, %Y", "%b %d, %Y", "%d %B %Y", "%d %b %Y", "%m/%d/%Y", "%Y/%m/%d")


def _is_date(value: str) -> bool:
    try:
        datetime.fromisoformat(value)
        return True
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            datetime.strptime(value, fmt)
            return True
        except ValueError:
            continue

    try:
        parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return False
    return True


def parses_as_date(message: str) -> Check:
    """
    A calendar date: ISO 8601 (`2024-05-01`, `2024-05-01T09:30:00Z`), RFC 2822
    (`Wed, 01 May 2024 09:30:00 GMT`) or a written-out form (`May 1, 2024`,
    `1 May 2024`, `05/01/2024`). Free-form text a browser's `Date.parse` might
    still guess at is refused.
    """
    return check(_is_date, message)


__all__ = [
    "CONSTRAINT_ERROR",
    "Required",
    "Check",
    "constraints",
    "check",
    "min_length",
    "matches",
    "one_of",
    "parses_as_date",
]
