"""
Schema registry: table name + operation -> validation contract.

The registry is built once from the static entity list in `crud_gateway.schemas`
and is read-only afterwards, so concurrent requests can share it freely.

    registry = get_schema_registry()
    registry.table_names()                          # ("departments", "employees")
    registry.resolve("employees", QueryType.INSERT) # InsertEmployee
"""

import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Iterable

from crud_gateway.exceptions.base import SchemaFunctionNotFoundError, SchemaNotFoundError
from crud_gateway.utils.naming import singularize, table_name, to_column_case

from .base import ContractModel

logger = logging.getLogger(__name__)


class QueryType(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"


@dataclass(frozen=True)
class EntitySchema:
    """
    The contracts of one entity.

    name: singular camelCase entity identifier (`employee`, `jobTitle`)
    insert / update: contract per operation kind; None when the entity does
        not support that operation.
    """

    name: str
    insert: type[ContractModel] | None
    update: type[ContractModel] | None

    @property
    def table_name(self) -> str:
        return table_name(self.name)

    def contract_for(self, query_type: QueryType) -> type[ContractModel] | None:
        if query_type is QueryType.INSERT:
            return self.insert
        return self.update


class SchemaRegistry:

    def __init__(self, schemas: Iterable[EntitySchema]):
        # keyed by the singular, column-cased entity name: what singularize(table) yields
        self._by_entity: dict[str, EntitySchema] = {}
        for schema in schemas:
            key = to_column_case(schema.name)
            if key in self._by_entity:
                raise ValueError(f"Duplicate schema for entity '{schema.name}'")
            self._by_entity[key] = schema

        logger.debug(
            "schema_registry.built",
            extra={"tables": list(self.table_names())},
        )

    def table_names(self) -> tuple[str, ...]:
        """Route/table names, in registration order."""
        return tuple(schema.table_name for schema in self._by_entity.values())

    def get(self, table: str) -> EntitySchema | None:
        return self._by_entity.get(singularize(table.lower()))

    def __contains__(self, table: object) -> bool:
        return isinstance(table, str) and self.get(table) is not None

    def resolve(self, table: str, query_type: QueryType | str) -> type[ContractModel]:
        """
        Return the contract validating `query_type` payloads for `table`.

        Raises:
            SchemaNotFoundError: no entity maps to the singularized table name.
            SchemaFunctionNotFoundError: the entity has no contract for `query_type`.
        """
        query_type = QueryType(query_type)

        schema = self.get(table)
        if schema is None:
            raise SchemaNotFoundError(table)

        contract = schema.contract_for(query_type)
        if contract is None:
            raise SchemaFunctionNotFoundError(table, query_type.value)

        return contract

    def contract_named(self, name: str) -> type[ContractModel] | None:
        """The registered contract whose class is called `name` (a ValidationError's `title`)."""
        for schema in self._by_entity.values():
            for contract in (schema.insert, schema.update):
                if contract is not None and contract.__name__ == name:
                    return contract
        return None


@lru_cache()
def get_schema_registry() -> SchemaRegistry:
    """Process-wide registry over the gateway's entity list."""
    from crud_gateway.schemas import SCHEMAS

    return SchemaRegistry(SCHEMAS)


__all__ = ["QueryType", "EntitySchema", "SchemaRegistry", "get_schema_registry"]
