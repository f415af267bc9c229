"""
Validate a request payload against the contract of its table.

    messages, status_code = validate_input(payload, "employees", QueryType.INSERT)

| Outcome                                     | messages               | status |
| ------------------------------------------- | ---------------------- | ------ |
| payload valid                               | None                   | 200    |
| no contract for table / operation           | [one message]          | 400    |
| contract violated                           | [one per failed check] | 422    |
| nothing to write, unusable or duplicate key | [one message per key]  | 422    |

Nothing here raises for bad input: the caller turns a status >= 400 into a
"Validation error(s)" response before any statement is built.
"""

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from crud_gateway.exceptions.base import GatewayError
from crud_gateway.schemas.messages import issue_messages
from crud_gateway.schemas.registry import QueryType, SchemaRegistry, get_schema_registry
from crud_gateway.services.query_helper import PRIMARY_KEY
from crud_gateway.utils.naming import is_safe_identifier, to_column_case

logger = logging.getLogger(__name__)


def _write_problems(payload: Mapping[str, Any], query_type: QueryType) -> list[str]:
    """
    Checks on the raw payload that the contract cannot express: every key must
    map to a plain column identifier, no two keys may map to the same column,
    and there must be at least one column to write (`id` does not count on
    update).
    """
    bad_keys = [key for key in payload if not is_safe_identifier(to_column_case(key))]
    if bad_keys:
        return [f"Invalid field name '{key}'" for key in bad_keys]

    # `firstName`, `FirstName` and `first_name` all land on `first_name`; the
    # contract reads only one of them, so the others would be written unchecked
    columns_seen: set[str] = set()
    duplicates: list[str] = []
    for key in payload:
        column = to_column_case(key)
        if column in columns_seen and column not in duplicates:
            duplicates.append(column)
        columns_seen.add(column)
    if duplicates:
        return [f"Duplicate field '{column}'" for column in duplicates]

    columns = [
        key for key in payload
        if not (query_type is QueryType.UPDATE and to_column_case(key) == PRIMARY_KEY)
    ]
    if not columns:
        return ["No fields to insert" if query_type is QueryType.INSERT else "No fields to update"]

    return []


def validate_input(
    payload: Mapping[str, Any],
    table_name: str,
    query_type: QueryType | str,
    registry: SchemaRegistry | None = None,
) -> tuple[list[str] | None, int]:
    registry = registry or get_schema_registry()
    query_type = QueryType(query_type)

    try:
        contract = registry.resolve(table_name, query_type)
    except GatewayError as exc:
        # a route exists without a contract: deployment mistake, not bad data
        logger.warning(
            "validate_input.schema_missing",
            extra={"table": table_name, "query_type": query_type.value},
        )
        return [exc.message], 400

    try:
        contract.model_validate(payload)
    except ValidationError as exc:
        messages = issue_messages(exc, contract)
        logger.info(
            "validate_input.rejected",
            extra={
                "table": table_name,
                "query_type": query_type.value,
                "error_count": len(messages),
            },
        )
        return messages, 422

    problems = _write_problems(payload, query_type)
    if problems:
        logger.info(
            "validate_input.unwritable",
            extra={"table": table_name, "query_type": query_type.value, "provided_keys": sorted(payload)},
        )
        return problems, 422

    return None, 200


__all__ = ["validate_input"]
