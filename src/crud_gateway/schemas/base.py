"""
Base class for validation contracts and the Insert -> Update relaxation.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, create_model
from pydantic.alias_generators import to_camel


class ContractModel(BaseModel):
    """
    Base for all entity contracts.

    - Payload keys are camelCase (`firstName`); snake_case names are accepted too.
    - Strict types: "true" is not a boolean, 30 is not a string.
    - Unknown keys are ignored by the contract; whether they are real columns is
      the database's call.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
        extra="ignore",
        frozen=True,
    )


def partial_model(model: type[ContractModel], name: str) -> type[ContractModel]:
    """
    Build the Update contract of `model`: every field becomes optional, keeping
    its type and all of its constraints.

    Omitted fields default to None without being validated; an explicit `null`
    is still checked against the field type and therefore rejected.
    """
    fields = {}
    for field_name, info in model.model_fields.items():
        annotation = info.annotation
        if info.metadata:
            annotation = Annotated[(annotation, *info.metadata)]
        fields[field_name] = (annotation, None)

    return create_model(
        name,
        __base__=ContractModel,
        __module__=model.__module__,
        __doc__=f"Update contract derived from {model.__name__}.",
        **fields,
    )
