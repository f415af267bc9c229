"""
Flatten pydantic validation errors into the ordered list of client messages.

pydantic reports errors in field declaration order, one per failing field; a
constraint error carries the messages of all failed checks of its field, also
in declaration order. That is the order clients see them in.
"""

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_snake

from .constraints import CONSTRAINT_ERROR, Required


def _label(key: str) -> str:
    """`firstName` -> `First name`"""
    words = to_snake(key).replace("_", " ").strip()
    return words[:1].upper() + words[1:]


def required_message(contract: type[BaseModel] | None, key: str) -> str:
    """Message of the field's Required marker, or "<Label> required"."""
    if contract is not None:
        for name, info in contract.model_fields.items():
            if key not in (name, info.alias):
                continue
            for item in info.metadata:
                if isinstance(item, Required):
                    return item.message
            break
    return f"{_label(key)} required"


def issue_messages(exc: ValidationError, contract: type[BaseModel] | None = None) -> list[str]:
    """
    Messages for each pydantic error:
      - missing field   -> its Required message
      - constraint      -> the message of every failed check, verbatim
      - anything else   -> "<field>: <pydantic message>"
    """
    messages: list[str] = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        key = str(loc[0]) if loc else ""

        if error["type"] == "missing" and key:
            messages.append(required_message(contract, key))
        elif error["type"] == CONSTRAINT_ERROR:
            messages.extend((error.get("ctx") or {}).get("messages") or [error["msg"]])
        elif not key:
            messages.append(error["msg"])
        else:
            messages.append(f"{key}: {error['msg']}")

    return messages


__all__ = ["issue_messages", "required_message"]
