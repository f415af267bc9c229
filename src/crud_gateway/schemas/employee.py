import re
from typing import Annotated

from .base import ContractModel, partial_model
from .constraints import Required, constraints, matches, min_length, parses_as_date

# A unicode letter, optionally followed by up to 98 letters/apostrophes/hyphens/spaces
# and a closing letter. `[^\W\d_]` is "any letter" in `re`.
NAME_PATTERN = re.compile(r"[^\W\d_](?:(?:[^\W\d_]|['\- ]){0,98}[^\W\d_])?")
EMAIL_PATTERN = re.compile(r"[\w.%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE | re.ASCII)
COUNTRY_CODE_PATTERN = re.compile(r"\d{1,4}", re.ASCII)
PHONE_NUMBER_PATTERN = re.compile(r"\d{7,15}", re.ASCII)


def _name_rule(label: str) -> str:
    return (
        f"{label} can be maximum 100 characters and can contain only letters, "
        "apostrophes, hyphens, and spaces between words"
    )


class InsertEmployee(ContractModel):
    first_name: Annotated[
        str,
        Required("First name required"),
        constraints(
            min_length(1, "First name required"),
            matches(NAME_PATTERN, _name_rule("First name")),
        ),
    ]
    last_name: Annotated[
        str,
        Required("Last name required"),
        constraints(
            min_length(1, "Last name required"),
            matches(NAME_PATTERN, _name_rule("Last name")),
        ),
    ]
    title: Annotated[
        str,
        Required("Job title required"),
        constraints(
            min_length(1, "Job title required"),
            matches(NAME_PATTERN, _name_rule("Job title")),
        ),
    ]
    department_id: Annotated[str, Required("Department required")]
    email: Annotated[
        str,
        Required("Email address required"),
        constraints(matches(EMAIL_PATTERN, "Email address must have a valid format")),
    ]
    country_code: Annotated[
        str,
        Required("Country code required"),
        constraints(
            matches(
                COUNTRY_CODE_PATTERN,
                "Country code must be between 1 and 4 digits and contain only digits",
            ),
        ),
    ]
    phone_number: Annotated[
        str,
        Required("Phone number required"),
        constraints(
            matches(
                PHONE_NUMBER_PATTERN,
                "Phone number must be between 7 and 15 digits and contain only digits",
            ),
        ),
    ]
    is_active: bool | None = None
    hire_date: Annotated[
        str,
        Required("Hire date required"),
        constraints(parses_as_date("Hire date required")),
    ]


UpdateEmployee = partial_model(InsertEmployee, "UpdateEmployee")
