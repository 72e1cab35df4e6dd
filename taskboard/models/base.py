"""Immutable Pydantic base model for stored records."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Base model for records owned by the store.

    - extra="forbid": unknown fields are rejected
    - frozen=True: records are immutable; changes produce a new instance
    - camelCase aliases on the wire, snake_case attributes in Python

    Not strict: FastAPI dumps responses to JSON-mode dicts and re-validates
    them, so ISO strings must parse back into datetimes.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        validate_default=True,
        use_enum_values=False,    # keep enum members on the model
        alias_generator=to_camel,
        populate_by_name=True,
    )


__all__ = ["RecordModel"]
