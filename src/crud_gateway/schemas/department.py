import re
from typing import Annotated

from .base import ContractModel, partial_model
from .constraints import Required, constraints, matches, min_length, one_of

NAME_PATTERN = re.compile(r"[A-Z0-9][A-Z0-9 \-'\",.]{0,98}[A-Z0-9]", re.IGNORECASE)
CODE_PATTERN = re.compile(r"[A-Z][A-Z0-9]{0,19}")
LOCATIONS = ("New York", "San Francisco", "London")


class InsertDepartment(ContractModel):
    name: Annotated[
        str,
        Required("Name required"),
        constraints(
            min_length(1, "Name required"),
            matches(
                NAME_PATTERN,
                "Name can be maximum 100 characters and can contain only letters, "
                "numbers, spaces, hyphens, apostrophes and periods",
            ),
        ),
    ]
    code: Annotated[
        str,
        Required("Code required"),
        constraints(
            min_length(1, "Code required"),
            matches(
                CODE_PATTERN,
                "Code can be maximum 20 characters and can contain only numbers and "
                "capital letters",
            ),
        ),
    ]
    location: Annotated[
        str,
        Required("Location not currently valid"),
        constraints(one_of(LOCATIONS, "Location not currently valid")),
    ]
    is_active: bool | None = None


UpdateDepartment = partial_model(InsertDepartment, "UpdateDepartment")
