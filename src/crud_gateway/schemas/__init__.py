r"""
Validation contracts of every entity served by the gateway.

Adding a table to the API means adding its contracts here: one module per
entity with an Insert contract (and usually `partial_model(...)` for Update),
then one `EntitySchema` entry in SCHEMAS. The router mounts
`/api/v1/<plural snake_case name>` for each entry.
"""

from .base import ContractModel, partial_model
from .department import InsertDepartment, UpdateDepartment
from .employee import InsertEmployee, UpdateEmployee
from .messages import issue_messages
from .registry import EntitySchema, QueryType, SchemaRegistry, get_schema_registry

SCHEMAS: tuple[EntitySchema, ...] = (
    EntitySchema("department", insert=InsertDepartment, update=UpdateDepartment),
    EntitySchema("employee", insert=InsertEmployee, update=UpdateEmployee),
)

__all__ = [
    "SCHEMAS",
    "ContractModel",
    "partial_model",
    "EntitySchema",
    "QueryType",
    "SchemaRegistry",
    "get_schema_registry",
    "issue_messages",
    "InsertDepartment",
    "UpdateDepartment",
    "InsertEmployee",
    "UpdateEmployee",
]
