"""
Turn a JSON payload into the pieces of a parameterized INSERT / UPDATE.

Keys become snake_case column names; values are passed through untouched as
positional parameters (`$1`, `$2`, ...). Values never appear in statement text.

    format_insert({"firstName": "Michael", "lastName": "Smith", "age": 30})
    -> InsertMutation(column_names=["first_name", "last_name", "age"],
                      query_params=["Michael", "Smith", 30],
                      placeholders="$1, $2, $3")

    format_update({"id": 1, "firstName": "Michael"}, "1")
    -> UpdateMutation(column_names=["first_name"],
                      set_clause="first_name = $1",
                      query_params=["Michael", "1"])

Both functions accept empty payloads and return empty fragments; rejecting
them is validate_input's job.
"""

from typing import Any, Mapping, NamedTuple

from crud_gateway.utils.naming import snakecase_keys

PRIMARY_KEY = "id"


class InsertMutation(NamedTuple):
    column_names: list[str]
    query_params: list[Any]
    placeholders: str


class UpdateMutation(NamedTuple):
    column_names: list[str]
    set_clause: str
    # field values followed by the primary key value
    query_params: list[Any]


def format_insert(payload: Mapping[str, Any]) -> InsertMutation:
    row = snakecase_keys(payload)
    column_names = list(row)
    query_params = [row[name] for name in column_names]
    placeholders = ", ".join(f"${i}" for i in range(1, len(column_names) + 1))

    return InsertMutation(column_names, query_params, placeholders)


def format_update(payload: Mapping[str, Any], primary_key: Any) -> UpdateMutation:
    row = snakecase_keys(payload)
    column_names = [name for name in row if name != PRIMARY_KEY]
    query_params = [row[name] for name in column_names]
    set_clause = ", ".join(f"{name} = ${i}" for i, name in enumerate(column_names, start=1))
    query_params.append(primary_key)

    return UpdateMutation(column_names, set_clause, query_params)


__all__ = ["InsertMutation", "UpdateMutation", "format_insert", "format_update"]
