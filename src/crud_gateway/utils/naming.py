"""
Naming helpers shared by the schema registry and the query helpers.

Two conventions meet at the gateway:
  - JSON payloads and entity names are camelCase (`firstName`, `jobTitle`).
  - Tables and columns are snake_case, tables pluralized (`first_name`, `job_titles`).

Everything here is a pure function of its input.
"""

import re
from typing import Any, Mapping

import inflect
from pydantic.alias_generators import to_snake

_inflector = inflect.engine()

# Identifiers we are willing to place into statement text as column names.
_SAFE_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_]*$")


def to_column_case(identifier: str) -> str:
    """Convert a camelCase / PascalCase identifier to snake_case (`hireDate` -> `hire_date`)."""
    return to_snake(identifier)


def snakecase_keys(payload: Mapping[str, Any]) -> dict[str, Any]:
    """
    Return a copy of `payload` with every top-level key in column case.

    Key order is preserved. Values (including nested objects and arrays) are
    passed through untouched.
    """
    return {to_column_case(key): value for key, value in payload.items()}


def pluralize(noun: str) -> str:
    """
    Pluralize an English noun. For snake_case compounds only the last word is
    inflected: `job_title` -> `job_titles`.
    """
    head, sep, last = noun.rpartition("_")
    return f"{head}{sep}{_inflector.plural_noun(last)}"


def singularize(noun: str) -> str:
    """
    Inverse of `pluralize`. A noun that is already singular comes back unchanged.
    """
    head, sep, last = noun.rpartition("_")
    # inflect returns False when the word is not a plural it recognizes
    singular = _inflector.singular_noun(last) or last
    return f"{head}{sep}{singular}"


def table_name(entity_name: str) -> str:
    """Public table/route name for an entity: `employee` -> `employees`, `jobTitle` -> `job_titles`."""
    return pluralize(to_column_case(entity_name))


def is_safe_identifier(name: str) -> bool:
    return bool(_SAFE_IDENTIFIER.match(name))


__all__ = [
    "to_column_case",
    "snakecase_keys",
    "pluralize",
    "singularize",
    "table_name",
    "is_safe_identifier",
]
