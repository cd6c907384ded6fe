from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Upper bound of a Postgres INTEGER column
MAX_INT = 2147483647


class CamelModel(BaseModel):
    """
    Base schema for the public API: camelCase on the wire, snake_case in Python.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(CamelModel):
    """Base for request bodies; unknown fields (including immutable keys) are rejected."""
    model_config = ConfigDict(extra="forbid")


def reject_null(value):
    """Field validator body for optional-in-update but non-nullable columns."""
    if value is None:
        raise ValueError("may not be null")
    return value


class DeletedResponse(BaseModel):
    """Schema for delete response"""
    deleted: str
